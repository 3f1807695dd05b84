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

from enum import Enum
from typing import TypeVar

from typing_extensions import Self, override

from nbtserde.binary import NbtReader, NbtWriter
from nbtserde.exceptions import TypeMismatchError, UnrepresentableValueError
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.tag import TagKind
from nbtserde.utils.typing import is_subclass

E = TypeVar('E', bound=Enum)


class EnumNBTType(NBTType[E]):
    """ Represents enum members as a String holding the member name, the member values are not used.
    """

    __slots__ = ('_enum_class',)

    _kind = TagKind.STRING
    _enum_class: type[E]

    def __init__(self, enum_class: type[E]) -> None:
        self._enum_class = enum_class

    @override
    @classmethod
    def _from_type(cls, type_: type[E], /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_subclass(type_, Enum):
            raise TypeError('expected Enum type')
        return cls(type_)

    @override
    def _check_value(self, value: E, /, *, deep: bool) -> None:
        if not isinstance(value, self._enum_class):
            raise UnrepresentableValueError(f'expected a member of {self._enum_class.__name__}, got {value!r}')

    @override
    def _serialize(self, writer: NbtWriter, value: E, /) -> None:
        writer.write_string(value.name)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> E:
        name = reader.read_string()
        try:
            return self._enum_class[name]
        except KeyError:
            raise TypeMismatchError(
                f'a member of {self._enum_class.__name__}',
                f'{name!r}',
                offset=reader.cur_pos(),
            ) from None
