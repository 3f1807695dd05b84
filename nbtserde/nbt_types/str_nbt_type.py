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


class StrNBTType(NBTType[str]):
    """ Represents builtin `str` values.
    """

    _kind = TagKind.STRING

    @override
    @classmethod
    def _from_type(cls, type_: type[str], /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_subclass(type_, str):
            raise TypeError('expected str type')
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise UnrepresentableValueError(f'expected a str, got {value!r}')

    @override
    def _serialize(self, writer: NbtWriter, value: str, /) -> None:
        writer.write_string(value)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> str:
        return reader.read_string()
