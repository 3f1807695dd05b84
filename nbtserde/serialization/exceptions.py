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

from typing import Union

PathSegment = Union[str, int]


def format_path(path: list[PathSegment]) -> str:
    """ Render a structural path the way it would be written to index the decoded value.

    >>> format_path(['foo', 3, 'bar'])
    "['foo'][3]['bar']"
    >>> format_path([])
    ''
    """
    return ''.join(f'[{segment!r}]' for segment in path)


class SerializationError(Exception):
    """ Base class for errors raised while encoding or decoding.

    `offset` is the cursor position when the error was detected, when it is known, and `path` is the sequence of
    compound keys and list indexes that lead to the value that failed, outermost first. Both are filled in as the error
    propagates, so handlers should only read them after catching the error at the outermost call.
    """

    def __init__(self, message: str = '', *, offset: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.path: list[PathSegment] = []

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f'at {format_path(self.path)}')
        if self.offset is not None:
            parts.append(f'(offset {self.offset})')
        return ' '.join(parts)


class UnexpectedEofError(SerializationError):
    """The data ended before the value being read was complete."""


class TrailingDataError(SerializationError, ValueError):
    """There was data left after the value was fully read."""
