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

"""
A `Deserializer` is the cursor every decoder reads from.

Reads either return exactly what was asked for and advance the cursor, or raise `UnexpectedEofError` without
consuming anything.
"""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .types import Buffer

if TYPE_CHECKING:
    from .bytes_deserializer import BytesDeserializer


class Deserializer(ABC):
    @staticmethod
    def build_bytes_deserializer(data: Buffer) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data)

    def finalize(self) -> None:
        """Check that all bytes were consumed, the deserializer cannot be used after this."""
        raise TypeError(f'{type(self).__name__} cannot tell whether its input was consumed')

    @abstractmethod
    def cur_pos(self) -> int:
        """Number of bytes consumed so far."""
        raise NotImplementedError

    def bytes_left(self) -> int | None:
        """Number of bytes that can still be read, or `None` when the source cannot tell in advance.

        Decoders use this to reject declared lengths that cannot possibly be satisfied before allocating anything.
        """
        return None

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def peek_bytes(self, n: int) -> Buffer:
        """Read exactly n bytes without consuming them."""
        raise NotImplementedError

    @abstractmethod
    def read_byte(self) -> int:
        """Read a single byte as unsigned int."""
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, n: int) -> Buffer:
        """Read exactly n bytes."""
        raise NotImplementedError

    def read_struct(self, format: str) -> tuple[Any, ...]:
        """Read `struct.calcsize(format)` bytes and unpack them."""
        data = self.read_bytes(struct.calcsize(format))
        return struct.unpack_from(format, data)

    def with_max_bytes(self, max_bytes: int | None) -> Deserializer:
        """Wrap this deserializer so reading more than `max_bytes` in total fails, `None` means no limit."""
        if max_bytes is None:
            return self
        from .adapters import MaxBytesDeserializer
        return MaxBytesDeserializer(self, max_bytes)
