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

from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from types import UnionType
from typing import Annotated, NamedTuple, Optional, TypeVar, Union

from nbtserde.nbt_types.array_nbt_type import ArrayNBTType
from nbtserde.nbt_types.bool_nbt_type import BoolNBTType
from nbtserde.nbt_types.bytes_nbt_type import BytesNBTType
from nbtserde.nbt_types.collection_nbt_type import ListNBTType
from nbtserde.nbt_types.dataclass_nbt_type import DataclassNBTType, RecordNBTType
from nbtserde.nbt_types.enum_nbt_type import EnumNBTType
from nbtserde.nbt_types.float_nbt_type import Float32NBTType, Float64NBTType
from nbtserde.nbt_types.map_nbt_type import DictNBTType
from nbtserde.nbt_types.namedtuple_nbt_type import NamedTupleNBTType
from nbtserde.nbt_types.nbt_type import NBTType
from nbtserde.nbt_types.optional_nbt_type import OptionalNBTType
from nbtserde.nbt_types.sized_int_nbt_type import (
    Int8NBTType,
    Int16NBTType,
    Int32NBTType,
    Int64NBTType,
    Uint8NBTType,
    Uint16NBTType,
    Uint32NBTType,
    Uint64NBTType,
)
from nbtserde.nbt_types.str_nbt_type import StrNBTType
from nbtserde.nbt_types.tag_nbt_type import TagNBTType
from nbtserde.nbt_types.tuple_nbt_type import TupleNBTType
from nbtserde.nbt_types.union_nbt_type import TaggedUnionNBTType
from nbtserde.nbt_types.utils import TypeAliasMap, TypeToNBTTypeMap
from nbtserde.types import f32, f64, i8, i16, i32, i64, u8, u16, u32, u64
from nbtserde.value import Tag

__all__ = [
    'DEFAULT_TYPE_ALIAS_MAP',
    'DEFAULT_TYPE_MAP',
    'DEFAULT_TYPE_TO_NBT_TYPE_MAP',
    'ArrayNBTType',
    'BoolNBTType',
    'BytesNBTType',
    'DataclassNBTType',
    'DictNBTType',
    'EnumNBTType',
    'Float32NBTType',
    'Float64NBTType',
    'Int8NBTType',
    'Int16NBTType',
    'Int32NBTType',
    'Int64NBTType',
    'ListNBTType',
    'NBTType',
    'NamedTupleNBTType',
    'OptionalNBTType',
    'RecordNBTType',
    'StrNBTType',
    'TagNBTType',
    'TaggedUnionNBTType',
    'TupleNBTType',
    'TypeAliasMap',
    'TypeToNBTTypeMap',
    'Uint8NBTType',
    'Uint16NBTType',
    'Uint32NBTType',
    'Uint64NBTType',
    'make_nbt_type',
]

T = TypeVar('T')

# types that are encoded exactly like another type, a debug message is logged when one is replaced
DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    # XXX: technically types.UnionType is not a type, so mypy complains, but for our purposes it is a type
    Union: UnionType,  # type: ignore[dict-item]
    OrderedDict: dict,
    bytearray: bytes,
}

# Mapping between types and NBTType classes.
DEFAULT_TYPE_TO_NBT_TYPE_MAP: TypeToNBTTypeMap = {
    # builtin types:
    bool: BoolNBTType,
    bytes: BytesNBTType,
    dict: DictNBTType,
    float: Float64NBTType,
    int: Int32NBTType,
    list: ListNBTType,
    str: StrNBTType,
    tuple: TupleNBTType,
    # sized numbers:
    i8: Int8NBTType,
    i16: Int16NBTType,
    i32: Int32NBTType,
    i64: Int64NBTType,
    u8: Uint8NBTType,
    u16: Uint16NBTType,
    u32: Uint32NBTType,
    u64: Uint64NBTType,
    f32: Float32NBTType,
    f64: Float64NBTType,
    # other Python types:
    Annotated: ArrayNBTType,
    Enum: EnumNBTType,
    NamedTuple: NamedTupleNBTType,
    Optional: OptionalNBTType,
    UnionType: TaggedUnionNBTType,
    dataclass: DataclassNBTType,
    # value tree:
    Tag: TagNBTType,
}

DEFAULT_TYPE_MAP = NBTType.TypeMap(DEFAULT_TYPE_ALIAS_MAP, DEFAULT_TYPE_TO_NBT_TYPE_MAP)


def make_nbt_type(type_: type[T], /) -> NBTType[T]:
    """ Like NBTType.from_type, with the default maps.

    If you need to customize the mapping use `NBTType.from_type` instead.
    """
    return NBTType.from_type(type_, type_map=DEFAULT_TYPE_MAP)
