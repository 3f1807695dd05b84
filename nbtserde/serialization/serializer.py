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
A `Serializer` is the byte sink every encoder writes to.

Encoders only ever append: there is no seeking, so any framing that needs a length before the data (like NBT lists)
has to be produced by encoding into a separate in-memory serializer first and then copying the result over.
"""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .types import Buffer

if TYPE_CHECKING:
    from .bytes_serializer import BytesSerializer


class Serializer(ABC):
    @staticmethod
    def build_bytes_serializer() -> BytesSerializer:
        from .bytes_serializer import BytesSerializer
        return BytesSerializer()

    def finalize(self) -> Buffer:
        """Get the resulting byte sequence, the serializer cannot be reused after this."""
        raise TypeError(f'{type(self).__name__} does not hold its output')

    @abstractmethod
    def cur_pos(self) -> int:
        """Number of bytes written so far."""
        raise NotImplementedError

    @abstractmethod
    def write_byte(self, data: int) -> None:
        """Write a single unsigned byte."""
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, data: Buffer) -> None:
        """Write a byte sequence as-is."""
        raise NotImplementedError

    def write_struct(self, data: tuple[Any, ...], format: str) -> None:
        """Pack `data` with `struct.pack(format, ...)` and write it, nothing is written if packing fails."""
        self.write_bytes(struct.pack(format, *data))

    def with_max_bytes(self, max_bytes: int | None) -> Serializer:
        """Wrap this serializer so writing more than `max_bytes` in total fails, `None` means no limit."""
        if max_bytes is None:
            return self
        from .adapters import MaxBytesSerializer
        return MaxBytesSerializer(self, max_bytes)
