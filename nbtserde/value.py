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
The dynamic NBT value tree.

Every node is a `Tag` whose `kind` is known statically from its class. Scalars and arrays are small dataclasses,
`List` and `Compound` behave like the builtin `list` and `dict`:

>>> root = Compound({'a': Int(42), 'b': List([Short(1), Short(2)])})
>>> root['b'].elem_kind
<TagKind.SHORT: 2>
>>> root.get('missing') is None
True

Lists only hold tags of one kind:

>>> try:
...     root['b'].append(Int(3))
... except UnrepresentableValueError as e:
...     print(e)
list of SHORT cannot hold INT
"""

from __future__ import annotations

from abc import ABC
from collections.abc import Iterable, Iterator, Mapping, MutableMapping, MutableSequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union, overload

from typing_extensions import override

from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.serialization.encoding.float import round_f32
from nbtserde.tag import TagKind

__all__ = [
    'Byte',
    'ByteArray',
    'Compound',
    'Double',
    'Float',
    'Int',
    'IntArray',
    'List',
    'Long',
    'LongArray',
    'Short',
    'String',
    'Tag',
]


class Tag(ABC):
    """Base class of every node of the value tree."""

    __slots__ = ()

    kind: ClassVar[TagKind]


def _check_int_range(value: int, bits: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnrepresentableValueError(f'expected an int, got {value!r}')
    bound = 1 << (bits - 1)
    if not -bound <= value < bound:
        raise UnrepresentableValueError(f'{value} does not fit in {bits // 8} signed byte(s)')


@dataclass(frozen=True, slots=True)
class _IntTag(Tag):
    value: int

    bits: ClassVar[int]

    def __post_init__(self) -> None:
        _check_int_range(self.value, self.bits)

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True, slots=True)
class Byte(_IntTag):
    kind = TagKind.BYTE
    bits = 8


@dataclass(frozen=True, slots=True)
class Short(_IntTag):
    kind = TagKind.SHORT
    bits = 16


@dataclass(frozen=True, slots=True)
class Int(_IntTag):
    kind = TagKind.INT
    bits = 32


@dataclass(frozen=True, slots=True)
class Long(_IntTag):
    kind = TagKind.LONG
    bits = 64


@dataclass(frozen=True, slots=True)
class Float(Tag):
    """A 4-byte float. The value is rounded to single precision on construction.

    >>> Float(0.1) == Float(0.10000000149011612)
    True
    """
    kind = TagKind.FLOAT

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'value', round_f32(float(self.value)))

    def __float__(self) -> float:
        return self.value


@dataclass(frozen=True, slots=True)
class Double(Tag):
    kind = TagKind.DOUBLE

    value: float

    def __float__(self) -> float:
        return self.value


@dataclass(frozen=True, slots=True)
class String(Tag):
    kind = TagKind.STRING

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise UnrepresentableValueError(f'expected a str, got {self.value!r}')

    def __str__(self) -> str:
        return self.value


@dataclass(eq=True, slots=True)
class _ArrayTag(Tag):
    values: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.values = list(self.values)
        bits = _element_bits(self.kind)
        for value in self.values:
            _check_int_range(value, bits)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)


def _element_bits(kind: TagKind) -> int:
    element = kind.array_element
    assert element is not None and element.fixed_size is not None
    return element.fixed_size * 8


@dataclass(eq=True, slots=True)
class ByteArray(_ArrayTag):
    """Packed signed bytes.

    >>> bytes(ByteArray.from_bytes(b'\\x01\\xff'))
    b'\\x01\\xff'
    >>> ByteArray.from_bytes(b'\\x01\\xff').values
    [1, -1]
    """
    kind = TagKind.BYTE_ARRAY

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview]) -> ByteArray:
        return cls([b - 256 if b > 127 else b for b in bytes(data)])

    def __bytes__(self) -> bytes:
        return bytes(v & 0xFF for v in self.values)


@dataclass(eq=True, slots=True)
class IntArray(_ArrayTag):
    kind = TagKind.INT_ARRAY


@dataclass(eq=True, slots=True)
class LongArray(_ArrayTag):
    kind = TagKind.LONG_ARRAY


class List(Tag, MutableSequence[Tag]):
    """ An ordered sequence of tags that all share one kind.

    The element kind is inferred from the first element when not given and is `END` for a list that has never held
    anything. It is kept when the list is emptied, and two lists are only equal when their element kinds are equal too.

    >>> List() == List(elem_kind=TagKind.INT)
    False
    >>> List([Int(1)]) == List([Int(1)], elem_kind=TagKind.INT)
    True
    """

    __slots__ = ('_items', '_elem_kind')

    kind = TagKind.LIST

    def __init__(self, items: Iterable[Tag] = (), *, elem_kind: Optional[TagKind] = None) -> None:
        self._items: list[Tag] = []
        self._elem_kind: TagKind = TagKind.END if elem_kind is None else elem_kind
        for item in items:
            self.append(item)

    @property
    def elem_kind(self) -> TagKind:
        return self._elem_kind

    def _checked_kind(self, items: Iterable[Tag]) -> TagKind:
        """Return the element kind the list would have after admitting `items`, without changing anything."""
        kind = self._elem_kind
        infer = kind is TagKind.END and not self._items
        for item in items:
            if not isinstance(item, Tag):
                raise UnrepresentableValueError(f'list elements must be tags, got {item!r}')
            if infer:
                kind = item.kind
                infer = False
            elif item.kind is not kind:
                raise UnrepresentableValueError(f'list of {kind.name} cannot hold {item.kind.name}')
        return kind

    @overload
    def __getitem__(self, index: int) -> Tag: ...

    @overload
    def __getitem__(self, index: slice) -> List: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Tag, List]:
        if isinstance(index, slice):
            return List(self._items[index], elem_kind=self._elem_kind)
        return self._items[index]

    @overload
    def __setitem__(self, index: int, value: Tag) -> None: ...

    @overload
    def __setitem__(self, index: slice, value: Iterable[Tag]) -> None: ...

    def __setitem__(self, index: Union[int, slice], value: Any) -> None:
        if isinstance(index, slice):
            values = list(value)
            kind = self._checked_kind(values)
            self._items[index] = values
        else:
            kind = self._checked_kind([value])
            self._items[index] = value
        self._elem_kind = kind

    def __delitem__(self, index: Union[int, slice]) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    @override
    def insert(self, index: int, value: Tag) -> None:
        kind = self._checked_kind([value])
        self._items.insert(index, value)
        self._elem_kind = kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, List):
            return NotImplemented
        return self._elem_kind is other._elem_kind and self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'List({self._items!r}, elem_kind={self._elem_kind!r})'


class Compound(Tag, MutableMapping[str, Tag]):
    """ A mapping of names to tags, in insertion order.

    Order is kept for encoding but ignored when comparing:

    >>> Compound({'a': Byte(1), 'b': Byte(2)}) == Compound({'b': Byte(2), 'a': Byte(1)})
    True
    >>> list(Compound({'b': Byte(2), 'a': Byte(1)}))
    ['b', 'a']
    """

    __slots__ = ('_entries',)

    kind = TagKind.COMPOUND

    def __init__(self, entries: Union[Mapping[str, Tag], Iterable[tuple[str, Tag]], None] = None) -> None:
        self._entries: dict[str, Tag] = {}
        if entries is not None:
            self.update(entries)

    def __getitem__(self, key: str) -> Tag:
        return self._entries[key]

    def __setitem__(self, key: str, value: Tag) -> None:
        if not isinstance(key, str):
            raise UnrepresentableValueError(f'compound keys must be str, got {key!r}')
        if not isinstance(value, Tag):
            raise UnrepresentableValueError(f'compound values must be tags, got {value!r}')
        self._entries[key] = value

    def __delitem__(self, key: str) -> None:
        del self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Compound):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'Compound({self._entries!r})'
