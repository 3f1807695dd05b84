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
from nbtserde.value import Tag


class TagNBTType(NBTType[Tag]):
    """ Passes value tree nodes through as they are.

    `Tag` itself accepts a node of any kind, a concrete subclass like `Compound` or `Int` only accepts that kind.
    """

    __slots__ = ('_kind', '_class')

    _class: type[Tag]

    def __init__(self, class_: type[Tag]) -> None:
        self._class = class_
        self._kind = getattr(class_, 'kind', None)

    @override
    @classmethod
    def _from_type(cls, type_: type[Tag], /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_subclass(type_, Tag):
            raise TypeError('expected Tag type')
        return cls(type_)

    @override
    def tag_kind(self, value: Tag, /) -> TagKind:
        if not isinstance(value, Tag):
            raise UnrepresentableValueError(f'expected a tag, got {value!r}')
        return value.kind

    @override
    def _check_value(self, value: Tag, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise UnrepresentableValueError(f'expected {self._class.__name__}, got {value!r}')

    @override
    def _serialize(self, writer: NbtWriter, value: Tag, /) -> None:
        writer.write_tag_body(value)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> Tag:
        return reader.read_tag_body(kind)
