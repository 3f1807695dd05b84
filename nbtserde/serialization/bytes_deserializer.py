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

from typing_extensions import override

from .deserializer import Deserializer
from .exceptions import TrailingDataError, UnexpectedEofError
from .types import Buffer


class BytesDeserializer(Deserializer):
    """Deserializer over an in-memory byte sequence.

    Reads return memoryview slices of the original data, nothing is copied until a decoder needs to.
    """

    def __init__(self, data: Buffer) -> None:
        self._view = memoryview(data).cast('B')
        self._pos = 0

    def _require(self, n: int) -> None:
        if n < 0:
            raise ValueError('value cannot be negative')
        if len(self._view) - self._pos < n:
            raise UnexpectedEofError(
                f'needed {n} byte(s) but only {len(self._view) - self._pos} left',
                offset=self._pos,
            )

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise TrailingDataError(f'{len(self._view) - self._pos} byte(s) of trailing data', offset=self._pos)
        del self._view

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def bytes_left(self) -> int:
        return len(self._view) - self._pos

    @override
    def is_empty(self) -> bool:
        return self._pos >= len(self._view)

    @override
    def peek_bytes(self, n: int) -> memoryview:
        self._require(n)
        return self._view[self._pos:self._pos + n]

    @override
    def read_byte(self) -> int:
        self._require(1)
        b = self._view[self._pos]
        self._pos += 1
        return b

    @override
    def read_bytes(self, n: int) -> memoryview:
        b = self.peek_bytes(n)
        self._pos += n
        return b
