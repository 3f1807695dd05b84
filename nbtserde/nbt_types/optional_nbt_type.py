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

from functools import reduce
from operator import or_
from types import NoneType, UnionType
from typing import TypeVar, Union, get_args, get_origin

from typing_extensions import Self, override

from nbtserde.binary import NbtReader, NbtWriter
from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.tag import TagKind

V = TypeVar('V')


class OptionalNBTType(NBTType[V | None]):
    """ Represents a value that is either `V` or `None`.

    NBT has no null, so `None` can only be represented by leaving an entry out: record types omit fields that are
    `None` and fill in `None` for missing optional fields. Anywhere else `None` cannot be encoded.
    """

    __slots__ = ('_value',)

    _kind = None
    _value: NBTType[V]

    def __init__(self, nbt_type: NBTType[V]) -> None:
        self._value = nbt_type

    @property
    @override
    def static_kind(self) -> TagKind | None:
        return self._value.static_kind

    @override
    @classmethod
    def _from_type(cls, type_: type[V | None], /, *, type_map: NBTType.TypeMap) -> Self:
        if get_origin(type_) not in (Union, UnionType):
            raise TypeError('expected type union')
        args = get_args(type_)
        assert args, 'union always has args'
        if NoneType not in args:
            raise TypeError('expected a union with None')
        not_none_args = tuple(arg for arg in args if arg is not NoneType)
        if len(not_none_args) == 1:
            not_none_type, = not_none_args
        else:
            # `A | B | None` is an optional tagged union
            not_none_type = reduce(or_, not_none_args)
        return cls(NBTType.from_type(not_none_type, type_map=type_map))

    @override
    def tag_kind(self, value: V | None, /) -> TagKind:
        if value is None:
            kind = self._value.static_kind
            if kind is None:
                raise UnrepresentableValueError('None cannot be encoded outside of a record field')
            return kind
        return self._value.tag_kind(value)

    @override
    def _check_value(self, value: V | None, /, *, deep: bool) -> None:
        if value is None:
            return
        self._value._check_value(value, deep=deep)

    @override
    def _serialize(self, writer: NbtWriter, value: V | None, /) -> None:
        if value is None:
            raise UnrepresentableValueError('None cannot be encoded outside of a record field')
        self._value.serialize(writer, value)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> V | None:
        return self._value.deserialize(reader, kind)
