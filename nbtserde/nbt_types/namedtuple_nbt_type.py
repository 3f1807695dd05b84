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

from collections.abc import Callable
from typing import Any, NamedTuple, Optional, TypeVar, get_type_hints

from typing_extensions import Self, override

from nbtserde.nbt_types.dataclass_nbt_type import RecordField, RecordNBTType, make_constant_factory
from nbtserde.nbt_types.nbt_type import NBTType

N = TypeVar('N', bound=tuple)


class NamedTupleNBTType(RecordNBTType[N]):
    """ Represents NamedTuple instances, the same way as dataclasses: a Compound with one entry per field.
    """

    @override
    @classmethod
    def _from_type(cls, type_: type[N], /, *, type_map: NBTType.TypeMap) -> Self:
        if not isinstance(type_, type) or not issubclass(type_, tuple):
            raise TypeError('expected NamedTuple type')
        if NamedTuple not in getattr(type_, '__orig_bases__', tuple()):
            raise TypeError('expected NamedTuple type')
        hints = get_type_hints(type_, include_extras=True)
        field_defaults: dict[str, Any] = type_._field_defaults  # type: ignore[attr-defined]
        record_fields = []
        for field_name in type_._fields:  # type: ignore[attr-defined]
            default: Optional[Callable[[], Any]] = None
            if field_name in field_defaults:
                default = make_constant_factory(field_defaults[field_name])
            nbt_type = NBTType.from_type(hints[field_name], type_map=type_map)
            record_fields.append(RecordField(field_name, nbt_type, default))
        return cls(type_, record_fields)

    @override
    def _build(self, values: dict[str, Any]) -> N:
        return self._class(**values)
