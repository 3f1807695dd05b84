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

from typing_extensions import Self, override

from nbtserde.binary import NbtReader, NbtWriter
from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.tag import TagKind
from nbtserde.utils.typing import is_subclass


class BytesNBTType(NBTType[bytes]):
    """ Represents builtin `bytes` values as a ByteArray.

    The elements of a ByteArray are signed, but bytes are taken as they are, `b'\\xff'` is stored as the element -1.
    """

    _kind = TagKind.BYTE_ARRAY

    @override
    @classmethod
    def _from_type(cls, type_: type[bytes], /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_subclass(type_, (bytes, bytearray)):
            raise TypeError('expected bytes type')
        return cls()

    @override
    def _check_value(self, value: bytes, /, *, deep: bool) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise UnrepresentableValueError(f'expected bytes, got {value!r}')

    @override
    def _serialize(self, writer: NbtWriter, value: bytes, /) -> None:
        writer.write_raw_byte_array(value)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> bytes:
        return reader.read_raw_byte_array()
