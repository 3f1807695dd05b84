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

from typing import ClassVar

from typing_extensions import Self, override

from nbtserde.binary import NbtReader, NbtWriter
from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.tag import TagKind
from nbtserde.utils.typing import is_subclass


class _SizedIntNBTType(NBTType[int]):
    """ Base class for classes that represent builtin `int` values stored in one of the integer tags.

    Unsigned values use the signed tag of the same width: the bits are kept and only their interpretation changes, so
    `u8(255)` is stored as the byte `ff`, which a signed reader sees as -1.
    """

    # XXX: subclass must define these values:
    _kind: ClassVar[TagKind]
    _signed: ClassVar[bool]

    @classmethod
    def _byte_size(cls) -> int:
        size = cls._kind.fixed_size
        assert size is not None
        return size

    @classmethod
    def _bounds(cls) -> tuple[int, int]:
        bits = cls._byte_size() * 8
        if cls._signed:
            return -(2**(bits - 1)), 2**(bits - 1) - 1
        else:
            return 0, 2**bits - 1

    @override
    @classmethod
    def _from_type(cls, type_: type[int], /, *, type_map: NBTType.TypeMap) -> Self:
        if type_ is bool or not is_subclass(type_, int):
            raise TypeError('expected int type')
        return cls()

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise UnrepresentableValueError(f'expected an int, got {value!r}')
        lower_bound, upper_bound = self._bounds()
        if not lower_bound <= value <= upper_bound:
            signedness = 'signed' if self._signed else 'unsigned'
            raise UnrepresentableValueError(
                f'{value} does not fit in {self._byte_size()} {signedness} byte(s)'
            )

    @override
    def _serialize(self, writer: NbtWriter, value: int, /) -> None:
        size = self._byte_size()
        if not self._signed:
            value = int.from_bytes(value.to_bytes(size, 'big'), 'big', signed=True)
        match self._kind:
            case TagKind.BYTE:
                writer.write_byte(value)
            case TagKind.SHORT:
                writer.write_short(value)
            case TagKind.INT:
                writer.write_int(value)
            case TagKind.LONG:
                writer.write_long(value)

    @override
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> int:
        match self._kind:
            case TagKind.BYTE:
                value = reader.read_byte()
            case TagKind.SHORT:
                value = reader.read_short()
            case TagKind.INT:
                value = reader.read_int()
            case TagKind.LONG:
                value = reader.read_long()
        if not self._signed:
            value &= 2**(self._byte_size() * 8) - 1
        return value


class Int8NBTType(_SizedIntNBTType):
    _kind = TagKind.BYTE
    _signed = True


class Int16NBTType(_SizedIntNBTType):
    _kind = TagKind.SHORT
    _signed = True


class Int32NBTType(_SizedIntNBTType):
    _kind = TagKind.INT
    _signed = True


class Int64NBTType(_SizedIntNBTType):
    _kind = TagKind.LONG
    _signed = True


class Uint8NBTType(_SizedIntNBTType):
    _kind = TagKind.BYTE
    _signed = False


class Uint16NBTType(_SizedIntNBTType):
    _kind = TagKind.SHORT
    _signed = False


class Uint32NBTType(_SizedIntNBTType):
    _kind = TagKind.INT
    _signed = False


class Uint64NBTType(_SizedIntNBTType):
    _kind = TagKind.LONG
    _signed = False
