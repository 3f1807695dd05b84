# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from nbtserde.serialization.adapters import MaxBytesExceededError
from nbtserde.serialization.exceptions import SerializationError, TrailingDataError, UnexpectedEofError

if TYPE_CHECKING:
    from nbtserde.tag import TagKind

__all__ = [
    'DuplicateKeyError',
    'InvalidLengthError',
    'InvalidStringEncodingError',
    'MaxBytesExceededError',
    'MissingFieldError',
    'NbtError',
    'NestingTooDeepError',
    'SerializationError',
    'StringTooLongError',
    'TrailingDataError',
    'TypeMismatchError',
    'UnexpectedEofError',
    'UnknownTagIdError',
    'UnrepresentableValueError',
]


class NbtError(SerializationError):
    """General error class for NBT format violations"""


class UnknownTagIdError(NbtError, ValueError):
    """A tag id byte outside of the known 0-12 range"""


class InvalidLengthError(NbtError, ValueError):
    """A list or array length that can never be valid, like a negative count"""


class InvalidStringEncodingError(NbtError, ValueError):
    """String data that is not valid modified UTF-8"""


class TypeMismatchError(NbtError, TypeError):
    """The tag kind found is not the one that was expected"""

    def __init__(
        self,
        expected: Union['TagKind', str],
        actual: Union['TagKind', str],
        *,
        offset: int | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f'expected {_describe(expected)}, found {_describe(actual)}', offset=offset)


class MissingFieldError(TypeMismatchError):
    """A compound is missing an entry that a record type requires"""

    def __init__(self, field_name: str, *, offset: int | None = None) -> None:
        self.field_name = field_name
        super().__init__(f'entry {field_name!r}', 'nothing', offset=offset)


class UnrepresentableValueError(NbtError, ValueError):
    """A value that has no NBT encoding: out of range numbers, heterogeneous lists, non-str keys, ..."""


class StringTooLongError(UnrepresentableValueError):
    """A string whose modified UTF-8 encoding does not fit a 16-bit length prefix"""


class NestingTooDeepError(NbtError):
    """Compounds and lists nested beyond the configured maximum depth"""


class DuplicateKeyError(NbtError, ValueError):
    """The same key appeared twice in a compound while strict duplicate key checking was enabled"""


def _describe(kind: Union['TagKind', str]) -> str:
    if isinstance(kind, str):
        return kind
    return kind.name
