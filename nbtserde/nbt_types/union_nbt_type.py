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

from contextlib import closing
from types import NoneType, UnionType
from typing import Any, Union, get_args, get_origin

from typing_extensions import Self, override

from nbtserde.binary import NbtReader, NbtWriter
from nbtserde.exceptions import TypeMismatchError, UnrepresentableValueError
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.tag import TagKind


class TaggedUnionNBTType(NBTType[Any]):
    """ Represents a value of an union of classes as a Compound with a single entry.

    The entry is named after the class of the value and holds the value itself, for `Circle | Square` a circle is
    written as `{Circle: {radius: ...}}`. Members of the union must be classes with distinct names, so the name is
    enough to know how to decode the value.
    """

    __slots__ = ('_variants',)

    _kind = TagKind.COMPOUND
    # class name -> (class, nbt_type), in the order of the union
    _variants: dict[str, tuple[type, NBTType]]

    def __init__(self, variants: dict[str, tuple[type, NBTType]]) -> None:
        self._variants = variants

    @override
    @classmethod
    def _from_type(cls, type_: type, /, *, type_map: NBTType.TypeMap) -> Self:
        if get_origin(type_) not in (Union, UnionType):
            raise TypeError('expected type union')
        args = get_args(type_)
        if NoneType in args:
            raise TypeError('unions with None are optional types')
        variants: dict[str, tuple[type, NBTType]] = {}
        for arg in args:
            if not isinstance(arg, type):
                raise TypeError(f'union members must be classes, {arg} is not')
            if arg.__name__ in variants:
                raise TypeError(f'union members must have distinct names, {arg.__name__} is repeated')
            variants[arg.__name__] = (arg, NBTType.from_type(arg, type_map=type_map))
        return cls(variants)

    def _variant_of(self, value: Any) -> tuple[str, NBTType]:
        # exact class first, a bool is also an int
        for name, (class_, nbt_type) in self._variants.items():
            if type(value) is class_:
                return name, nbt_type
        for name, (class_, nbt_type) in self._variants.items():
            if isinstance(value, class_):
                return name, nbt_type
        names = ', '.join(self._variants)
        raise UnrepresentableValueError(f'expected one of {names}, got {type(value).__name__}')

    @override
    def _check_value(self, value: Any, /, *, deep: bool) -> None:
        _, nbt_type = self._variant_of(value)
        if deep:
            nbt_type._check_value(value, deep=True)

    @override
    def _serialize(self, writer: NbtWriter, value: Any, /) -> None:
        name, nbt_type = self._variant_of(value)
        with writer.begin_compound() as compound:
            with writer.at(name):
                nbt_type.serialize(compound.field(nbt_type.tag_kind(value), name), value)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> Any:
        names = ', '.join(self._variants)
        found = False
        result: Any = None
        with closing(reader.iter_compound()) as entries:
            for item_kind, name in entries:
                if found:
                    raise TypeMismatchError('a single entry', f'another entry {name!r}', offset=reader.cur_pos())
                variant = self._variants.get(name)
                if variant is None:
                    raise TypeMismatchError(f'one of {names}', repr(name), offset=reader.cur_pos())
                _, nbt_type = variant
                with reader.at(name):
                    result = nbt_type.deserialize(reader, item_kind)
                found = True
        if not found:
            raise TypeMismatchError(f'one of {names}', 'nothing', offset=reader.cur_pos())
        return result
