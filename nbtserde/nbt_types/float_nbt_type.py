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

import math
from typing import ClassVar

from typing_extensions import Self, override

from nbtserde.binary import NbtReader, NbtWriter
from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.serialization.encoding.float import round_f32
from nbtserde.tag import TagKind
from nbtserde.utils.typing import is_subclass


class _FloatNBTType(NBTType[float]):
    """ Base class for builtin `float` values, ints are accepted when encoding too.
    """

    # XXX: subclass must define this value:
    _kind: ClassVar[TagKind]

    @override
    @classmethod
    def _from_type(cls, type_: type[float], /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_subclass(type_, float):
            raise TypeError('expected float type')
        return cls()

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise UnrepresentableValueError(f'expected a float, got {value!r}')


class Float32NBTType(_FloatNBTType):
    """ Values must be exactly representable in single precision, anything that would be rounded is rejected.

    NaN and infinities are accepted as they are.
    """

    _kind = TagKind.FLOAT

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        super()._check_value(value, deep=deep)
        try:
            as_float = float(value)
        except OverflowError:
            raise UnrepresentableValueError(f'{value!r} does not fit in a 4-byte float') from None
        if math.isfinite(as_float) and round_f32(as_float) != value:
            raise UnrepresentableValueError(f'{value!r} cannot be stored as a 4-byte float without rounding')

    @override
    def _serialize(self, writer: NbtWriter, value: float, /) -> None:
        writer.write_float(value)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> float:
        return reader.read_float()


class Float64NBTType(_FloatNBTType):
    _kind = TagKind.DOUBLE

    @override
    def _serialize(self, writer: NbtWriter, value: float, /) -> None:
        writer.write_double(value)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> float:
        return reader.read_double()
