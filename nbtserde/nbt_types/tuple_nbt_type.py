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

from typing import Any, Optional, get_args, get_origin

from typing_extensions import Self, override

from nbtserde.binary import NbtReader, NbtWriter
from nbtserde.exceptions import TypeMismatchError, UnrepresentableValueError
from nbtserde.nbt_types.collection_nbt_type import serialize_items
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.tag import TagKind


class TupleNBTType(NBTType[tuple]):
    """ Represents builtin `tuple` values as a List.

    Both `tuple[T, ...]`, the immutable equivalent of `list[T]`, and fixed size tuples like `tuple[A, B]` are
    supported. Members of a fixed size tuple must share a tag kind, since they end up in the same list:

    >>> from nbtserde.nbt_types import make_nbt_type
    >>> make_nbt_type(tuple[int, int]).to_tag((1, 2))
    List([Int(value=1), Int(value=2)], elem_kind=<TagKind.INT: 3>)
    >>> make_nbt_type(tuple[int, str])
    Traceback (most recent call last):
    ...
    TypeError: members of tuple[int, str] are encoded as different tag kinds: INT, STRING
    """

    __slots__ = ('_members', '_rest')

    _kind = TagKind.LIST
    # members of a fixed size tuple, None for a variadic one
    _members: Optional[tuple[NBTType, ...]]
    # element type of a variadic tuple, None for a fixed size one
    _rest: Optional[NBTType]

    def __init__(self, members: Optional[tuple[NBTType, ...]], rest: Optional[NBTType]) -> None:
        assert (members is None) != (rest is None)
        self._members = members
        self._rest = rest

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple], /, *, type_map: NBTType.TypeMap) -> Self:
        origin_type = get_origin(type_) or type_
        if origin_type is not tuple:
            raise TypeError('expected tuple type')
        args = get_args(type_)
        if len(args) == 2 and args[1] is Ellipsis:
            return cls(None, NBTType.from_type(args[0], type_map=type_map))
        if not args:
            raise TypeError('expected tuple[<type>, ...] or tuple[<type>, <type>, ...]')
        members = tuple(NBTType.from_type(arg, type_map=type_map) for arg in args)
        kinds = {member.static_kind for member in members if member.static_kind is not None}
        if len(kinds) > 1:
            names = ', '.join(kind.name for kind in sorted(kinds))
            raise TypeError(f'members of {type_} are encoded as different tag kinds: {names}')
        return cls(members, None)

    @override
    def _check_value(self, value: tuple, /, *, deep: bool) -> None:
        if not isinstance(value, tuple):
            raise UnrepresentableValueError(f'expected a tuple, got {type(value).__name__}')
        if self._members is not None and len(value) != len(self._members):
            raise UnrepresentableValueError(f'expected a tuple of {len(self._members)} item(s), got {len(value)}')
        if deep:
            for member, item in self._pairs(value):
                member._check_value(item, deep=True)

    def _pairs(self, value: tuple) -> list[tuple[NBTType, Any]]:
        if self._members is not None:
            return list(zip(self._members, value))
        assert self._rest is not None
        return [(self._rest, item) for item in value]

    @override
    def _serialize(self, writer: NbtWriter, value: tuple, /) -> None:
        serialize_items(writer, self._pairs(value))

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> tuple:
        items: list[Any] = []
        with reader.nested():
            elem_kind, count = reader.read_list_header()
            if self._members is not None and count != len(self._members):
                raise TypeMismatchError(
                    f'list of {len(self._members)} element(s)',
                    f'list of {count} element(s)',
                    offset=reader.cur_pos(),
                )
            for index in range(count):
                member = self._rest if self._members is None else self._members[index]
                assert member is not None
                with reader.at(index):
                    items.append(member.deserialize(reader, elem_kind))
        return tuple(items)
