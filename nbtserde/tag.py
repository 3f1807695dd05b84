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
The closed set of NBT tag kinds and their wire ids.

>>> tag_id(TagKind.COMPOUND)
10
>>> kind_from_id(9)
<TagKind.LIST: 9>
>>> try:
...     kind_from_id(13)
... except UnknownTagIdError as e:
...     print(e)
unknown tag id 13
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

from nbtserde.exceptions import UnknownTagIdError


class TagKind(IntEnum):
    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12

    @property
    def fixed_size(self) -> Optional[int]:
        """Width in bytes of a numeric payload, None for every other kind."""
        return _FIXED_SIZES.get(self)

    @property
    def min_body_size(self) -> int:
        """Smallest possible encoded body, used to bound declared list lengths against the data left."""
        return _MIN_BODY_SIZES[self]

    @property
    def array_element(self) -> Optional[TagKind]:
        """Kind of the elements of an array kind, None for every other kind.

        >>> TagKind.INT_ARRAY.array_element
        <TagKind.INT: 3>
        """
        return _ARRAY_ELEMENTS.get(self)

    def is_container(self) -> bool:
        return self is TagKind.LIST or self is TagKind.COMPOUND


_FIXED_SIZES: dict[TagKind, int] = {
    TagKind.BYTE: 1,
    TagKind.SHORT: 2,
    TagKind.INT: 4,
    TagKind.LONG: 8,
    TagKind.FLOAT: 4,
    TagKind.DOUBLE: 8,
}

_ARRAY_ELEMENTS: dict[TagKind, TagKind] = {
    TagKind.BYTE_ARRAY: TagKind.BYTE,
    TagKind.INT_ARRAY: TagKind.INT,
    TagKind.LONG_ARRAY: TagKind.LONG,
}

_MIN_BODY_SIZES: dict[TagKind, int] = {
    TagKind.END: 0,
    **_FIXED_SIZES,
    TagKind.BYTE_ARRAY: 4,
    TagKind.STRING: 2,
    TagKind.LIST: 5,
    TagKind.COMPOUND: 1,
    TagKind.INT_ARRAY: 4,
    TagKind.LONG_ARRAY: 4,
}


def tag_id(kind: TagKind) -> int:
    """The byte that identifies `kind` on the wire."""
    return int(kind)


def kind_from_id(tag_id: int) -> TagKind:
    """Inverse of `tag_id`, unknown ids are a fatal format error."""
    try:
        return TagKind(tag_id)
    except ValueError:
        raise UnknownTagIdError(f'unknown tag id {tag_id}') from None
