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

from collections.abc import Mapping
from contextlib import closing
from typing import TypeVar, get_args, get_origin

from typing_extensions import Self, override

from nbtserde.binary import NbtReader, NbtWriter
from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.tag import TagKind
from nbtserde.utils.typing import is_subclass

V = TypeVar('V')


class DictNBTType(NBTType[dict[str, V]]):
    """ Represents builtin `dict` values with `str` keys as a Compound, entries are written in iteration order.
    """

    __slots__ = ('_value',)

    _kind = TagKind.COMPOUND
    _value: NBTType[V]

    def __init__(self, value: NBTType[V]) -> None:
        self._value = value

    @override
    @classmethod
    def _from_type(cls, type_: type[dict[str, V]], /, *, type_map: NBTType.TypeMap) -> Self:
        origin_type = get_origin(type_) or type_
        if not is_subclass(origin_type, Mapping):
            raise TypeError('expected Mapping type')
        args = get_args(type_)
        if len(args) != 2:
            raise TypeError(f'expected {origin_type.__name__}[str, <type>]')
        key_type, value_type = args
        if not is_subclass(key_type, str):
            raise TypeError(f'compound keys are strings, {key_type} keys are not supported')
        return cls(NBTType.from_type(value_type, type_map=type_map))

    @override
    def _check_value(self, value: dict[str, V], /, *, deep: bool) -> None:
        if not isinstance(value, Mapping):
            raise UnrepresentableValueError(f'expected a mapping, got {type(value).__name__}')
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnrepresentableValueError(f'compound keys must be str, got {key!r}')
            if deep:
                self._value._check_value(item, deep=True)

    @override
    def _serialize(self, writer: NbtWriter, value: dict[str, V], /) -> None:
        with writer.begin_compound() as compound:
            for key, item in value.items():
                with writer.at(key):
                    self._value.serialize(compound.field(self._value.tag_kind(item), key), item)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> dict[str, V]:
        result: dict[str, V] = {}
        with closing(reader.iter_compound()) as entries:
            for item_kind, key in entries:
                with reader.at(key):
                    result[key] = self._value.deserialize(reader, item_kind)
        return result
