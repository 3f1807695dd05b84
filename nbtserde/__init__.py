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

from nbtserde.binary import Document
from nbtserde.codec import from_bytes, read_document, to_bytes
from nbtserde.conf import NbtSettings
from nbtserde.exceptions import (
    DuplicateKeyError,
    InvalidLengthError,
    InvalidStringEncodingError,
    MaxBytesExceededError,
    MissingFieldError,
    NbtError,
    NestingTooDeepError,
    SerializationError,
    StringTooLongError,
    TrailingDataError,
    TypeMismatchError,
    UnexpectedEofError,
    UnknownTagIdError,
    UnrepresentableValueError,
)
from nbtserde.nbt_types import NBTType, make_nbt_type
from nbtserde.tag import TagKind, kind_from_id, tag_id
from nbtserde.types import (
    BYTE_ARRAY,
    INT_ARRAY,
    LONG_ARRAY,
    I8Array,
    I32Array,
    I64Array,
    f32,
    f64,
    i8,
    i16,
    i32,
    i64,
    u8,
    u16,
    u32,
    u64,
)
from nbtserde.value import (
    Byte,
    ByteArray,
    Compound,
    Double,
    Float,
    Int,
    IntArray,
    List,
    Long,
    LongArray,
    Short,
    String,
    Tag,
)
from nbtserde.version import __version__

__all__ = [
    'BYTE_ARRAY',
    'Byte',
    'ByteArray',
    'Compound',
    'Document',
    'Double',
    'DuplicateKeyError',
    'Float',
    'I8Array',
    'I32Array',
    'I64Array',
    'INT_ARRAY',
    'Int',
    'IntArray',
    'InvalidLengthError',
    'InvalidStringEncodingError',
    'LONG_ARRAY',
    'List',
    'Long',
    'LongArray',
    'MaxBytesExceededError',
    'MissingFieldError',
    'NBTType',
    'NbtError',
    'NbtSettings',
    'NestingTooDeepError',
    'SerializationError',
    'Short',
    'String',
    'StringTooLongError',
    'Tag',
    'TagKind',
    'TrailingDataError',
    'TypeMismatchError',
    'UnexpectedEofError',
    'UnknownTagIdError',
    'UnrepresentableValueError',
    '__version__',
    'f32',
    'f64',
    'from_bytes',
    'i8',
    'i16',
    'i32',
    'i64',
    'kind_from_id',
    'make_nbt_type',
    'read_document',
    'tag_id',
    'to_bytes',
    'u8',
    'u16',
    'u32',
    'u64',
]
