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


class BoolNBTType(NBTType[bool]):
    """ Represents builtin `bool` values as a Byte, 1 for True and 0 for False.

    When decoding any nonzero byte is True.
    """

    _kind = TagKind.BYTE

    @override
    @classmethod
    def _from_type(cls, type_: type[bool], /, *, type_map: NBTType.TypeMap) -> Self:
        if type_ is not bool:
            raise TypeError('expected bool type')
        return cls()

    @override
    def _check_value(self, value: bool, /, *, deep: bool) -> None:
        if not isinstance(value, bool):
            raise UnrepresentableValueError(f'expected a bool, got {value!r}')

    @override
    def _serialize(self, writer: NbtWriter, value: bool, /) -> None:
        writer.write_byte(1 if value else 0)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> bool:
        return reader.read_byte() != 0
