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

from collections.abc import Sequence
from typing import Annotated, get_args, get_origin

from typing_extensions import Self, override

from nbtserde.binary import NbtReader, NbtWriter
from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.tag import TagKind
from nbtserde.types import ArrayHint, i8, i32, i64

# element annotations accepted for each array kind
_ELEMENT_TYPES: dict[TagKind, tuple[object, ...]] = {
    TagKind.BYTE_ARRAY: (i8,),
    TagKind.INT_ARRAY: (i32, int),
    TagKind.LONG_ARRAY: (i64,),
}


class ArrayNBTType(NBTType[Sequence[int]]):
    """ Represents a list or tuple of ints as one of the packed array tags.

    The array kind is chosen with an `ArrayHint` in an `Annotated` type, like `Annotated[list[i32], INT_ARRAY]`, and
    the element annotation must be the one that matches the array kind.
    """

    __slots__ = ('_kind', '_container')

    _container: type

    def __init__(self, kind: TagKind, container: type) -> None:
        self._kind = kind
        self._container = container

    @override
    @classmethod
    def _from_type(cls, type_: type[Sequence[int]], /, *, type_map: NBTType.TypeMap) -> Self:
        if get_origin(type_) is not Annotated:
            raise TypeError('expected Annotated type')
        annotated, *metadata = get_args(type_)
        hints = [hint for hint in metadata if isinstance(hint, ArrayHint)]
        if len(hints) != 1:
            raise TypeError('Annotated types must carry exactly one array hint')
        hint, = hints

        container = get_origin(annotated)
        args = get_args(annotated)
        if container is list and len(args) == 1:
            element, = args
        elif container is tuple and len(args) == 2 and args[1] is Ellipsis:
            element = args[0]
        else:
            raise TypeError(f'{hint!r} expects a list[...] or tuple[..., ...] annotation')
        if element not in _ELEMENT_TYPES[hint.kind]:
            expected = ' or '.join(t.__name__ for t in _ELEMENT_TYPES[hint.kind])  # type: ignore[attr-defined]
            raise TypeError(f'{hint!r} needs elements of type {expected}, not {element.__name__}')
        return cls(hint.kind, container)

    @override
    def _check_value(self, value: Sequence[int], /, *, deep: bool) -> None:
        if not isinstance(value, (list, tuple)):
            raise UnrepresentableValueError(f'expected a list of ints, got {value!r}')
        for item in value:
            if isinstance(item, bool) or not isinstance(item, int):
                raise UnrepresentableValueError(f'expected an int, got {item!r}')

    @override
    def _serialize(self, writer: NbtWriter, value: Sequence[int], /) -> None:
        match self._kind:
            case TagKind.BYTE_ARRAY:
                writer.write_byte_array(list(value))
            case TagKind.INT_ARRAY:
                writer.write_int_array(list(value))
            case TagKind.LONG_ARRAY:
                writer.write_long_array(list(value))

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> Sequence[int]:
        match self._kind:
            case TagKind.BYTE_ARRAY:
                values = reader.read_byte_array()
            case TagKind.INT_ARRAY:
                values = reader.read_int_array()
            case TagKind.LONG_ARRAY:
                values = reader.read_long_array()
        return values if self._container is list else tuple(values)
