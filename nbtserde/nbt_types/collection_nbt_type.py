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

from collections.abc import Iterable
from contextlib import closing
from typing import Any, TypeVar, get_args, get_origin

from typing_extensions import Self, override

from nbtserde.binary import NbtReader, NbtWriter
from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.tag import TagKind

T = TypeVar('T')


def serialize_items(writer: NbtWriter, items: Iterable[tuple[NBTType, Any]]) -> None:
    """ Write a list body out of `(nbt_type, value)` pairs.

    All values must be encoded as the same tag kind, an `UnrepresentableValueError` is raised at the first one that is
    not.
    """
    with writer.begin_list() as elements:
        for index, (item_nbt_type, item) in enumerate(items):
            with elements.at(index):
                item_nbt_type.serialize(elements.element(item_nbt_type.tag_kind(item)), item)


class ListNBTType(NBTType[list[T]]):
    """ Represents builtin `list` values as a List, the items must all be encoded as the same tag kind.

    An empty list is written with the END element kind, when decoding an empty list any element kind is accepted.
    """

    __slots__ = ('_item',)

    _kind = TagKind.LIST
    _item: NBTType[T]

    def __init__(self, item_nbt_type: NBTType[T], /) -> None:
        self._item = item_nbt_type

    @override
    @classmethod
    def _from_type(cls, type_: type[list[T]], /, *, type_map: NBTType.TypeMap) -> Self:
        origin_type = get_origin(type_) or type_
        if origin_type is not list:
            raise TypeError('expected list type')
        args = get_args(type_)
        if len(args) != 1:
            raise TypeError('expected list[<type>]')
        return cls(NBTType.from_type(args[0], type_map=type_map))

    @override
    def _check_value(self, value: list[T], /, *, deep: bool) -> None:
        if not isinstance(value, list):
            raise UnrepresentableValueError(f'expected a list, got {type(value).__name__}')
        if deep:
            for item in value:
                self._item._check_value(item, deep=True)

    @override
    def _serialize(self, writer: NbtWriter, value: list[T], /) -> None:
        serialize_items(writer, ((self._item, item) for item in value))

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> list[T]:
        items: list[T] = []
        with closing(reader.iter_list()) as elements:
            for index, elem_kind in elements:
                with reader.at(index):
                    items.append(self._item.deserialize(reader, elem_kind))
        return items
