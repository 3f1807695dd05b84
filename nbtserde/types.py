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

"""
Marker types used in annotations to pick the NBT representation of a value.

Python has a single `int` and a single `float`, so the width of a number on the wire is chosen with these `NewType`s,
they behave as plain numbers at runtime:

>>> i16(300) + 1
301

Lists of numbers become NBT lists unless they are annotated with one of the array hints:

>>> I32Array.__metadata__
(INT_ARRAY,)
"""

from __future__ import annotations

from typing import Annotated, NewType

from nbtserde.tag import TagKind

__all__ = [
    'ArrayHint',
    'BYTE_ARRAY',
    'INT_ARRAY',
    'LONG_ARRAY',
    'I8Array',
    'I32Array',
    'I64Array',
    'i8',
    'i16',
    'i32',
    'i64',
    'u8',
    'u16',
    'u32',
    'u64',
    'f32',
    'f64',
]

i8 = NewType('i8', int)
i16 = NewType('i16', int)
i32 = NewType('i32', int)
i64 = NewType('i64', int)

# unsigned values are stored in the signed tag of the same width, with the same bits
u8 = NewType('u8', int)
u16 = NewType('u16', int)
u32 = NewType('u32', int)
u64 = NewType('u64', int)

f32 = NewType('f32', float)
f64 = NewType('f64', float)


class ArrayHint:
    """Annotation metadata that selects one of the packed array tags for a list of integers."""

    __slots__ = ('kind',)

    def __init__(self, kind: TagKind) -> None:
        assert kind.array_element is not None
        self.kind = kind

    def __repr__(self) -> str:
        return self.kind.name


BYTE_ARRAY = ArrayHint(TagKind.BYTE_ARRAY)
INT_ARRAY = ArrayHint(TagKind.INT_ARRAY)
LONG_ARRAY = ArrayHint(TagKind.LONG_ARRAY)

I8Array = Annotated[list[i8], BYTE_ARRAY]
I32Array = Annotated[list[i32], INT_ARRAY]
I64Array = Annotated[list[i64], LONG_ARRAY]
