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

from abc import abstractmethod
from collections.abc import Callable, Iterable
from contextlib import closing
from dataclasses import MISSING, fields, is_dataclass
from typing import TYPE_CHECKING, Any, NamedTuple, Optional, TypeVar, get_type_hints

from typing_extensions import Self, override

from nbtserde.binary import NbtReader, NbtWriter
from nbtserde.exceptions import MissingFieldError, UnrepresentableValueError
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.nbt_types.optional_nbt_type import OptionalNBTType
from nbtserde.tag import TagKind

if TYPE_CHECKING:
    from _typeshed import DataclassInstance

R = TypeVar('R')
D = TypeVar('D', bound='DataclassInstance')


class RecordField(NamedTuple):
    name: str
    nbt_type: NBTType
    # builds the value used when the entry is missing, None when the field has no default
    default: Optional[Callable[[], Any]]

    def is_optional(self) -> bool:
        return isinstance(self.nbt_type, OptionalNBTType)


class RecordNBTType(NBTType[R]):
    """ Base class for types with named fields, represented as a Compound with one entry per field.

    Entries are written in field declaration order, fields that are `None` and typed as optional are left out. When
    decoding, entries that don't match a field are skipped, and missing fields take their default value, or `None` when
    they are optional. Any other missing field is an error.
    """

    __slots__ = ('_class', '_fields')

    _kind = TagKind.COMPOUND
    _class: type[R]
    _fields: dict[str, RecordField]

    def __init__(self, class_: type[R], fields_: Iterable[RecordField]) -> None:
        self._class = class_
        self._fields = {field.name: field for field in fields_}

    @abstractmethod
    def _build(self, values: dict[str, Any]) -> R:
        raise NotImplementedError

    @override
    def _check_value(self, value: R, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise UnrepresentableValueError(f'expected {self._class.__name__} instance, got {type(value).__name__}')
        if deep:
            for field in self._fields.values():
                field.nbt_type._check_value(getattr(value, field.name), deep=True)

    @override
    def _serialize(self, writer: NbtWriter, value: R, /) -> None:
        with writer.begin_compound() as compound:
            for field in self._fields.values():
                item = getattr(value, field.name)
                if item is None and field.is_optional():
                    continue
                with writer.at(field.name):
                    field.nbt_type.serialize(compound.field(field.nbt_type.tag_kind(item), field.name), item)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> R:
        values: dict[str, Any] = {}
        with closing(reader.iter_compound()) as entries:
            for item_kind, name in entries:
                field = self._fields.get(name)
                with reader.at(name):
                    if field is None:
                        reader.skip_body(item_kind)
                    else:
                        values[name] = field.nbt_type.deserialize(reader, item_kind)
        for field in self._fields.values():
            if field.name in values:
                continue
            if field.default is not None:
                values[field.name] = field.default()
            elif field.is_optional():
                values[field.name] = None
            else:
                raise MissingFieldError(field.name, offset=reader.cur_pos())
        return self._build(values)


class DataclassNBTType(RecordNBTType[D]):
    """ Represents dataclass instances, fields with `init=False` are not encoded.
    """

    @override
    @classmethod
    def _from_type(cls, type_: type[D], /, *, type_map: NBTType.TypeMap) -> Self:
        if not isinstance(type_, type) or not is_dataclass(type_):
            raise TypeError('expected a dataclass')
        hints = get_type_hints(type_, include_extras=True)
        record_fields = []
        for field in fields(type_):
            if not field.init:
                continue
            default: Optional[Callable[[], Any]] = None
            if field.default is not MISSING:
                default = make_constant_factory(field.default)
            elif field.default_factory is not MISSING:
                default = field.default_factory
            nbt_type = NBTType.from_type(hints[field.name], type_map=type_map)
            record_fields.append(RecordField(field.name, nbt_type, default))
        return cls(type_, record_fields)

    @override
    def _build(self, values: dict[str, Any]) -> D:
        return self._class(**values)


def make_constant_factory(value: Any) -> Callable[[], Any]:
    return lambda: value
