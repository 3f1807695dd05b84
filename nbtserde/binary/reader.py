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
Decoding of NBT documents.

`NbtReader` can either build a value tree in one go:

>>> data = bytes.fromhex('0a0000' '030001610000002a' '00')
>>> NbtReader(Deserializer.build_bytes_deserializer(data)).read_document()
Document(name='', root=Compound({'a': Int(value=42)}))

or be driven step by step by a decoder that knows the shape it expects, without an intermediate tree:

>>> reader = NbtReader(Deserializer.build_bytes_deserializer(data))
>>> reader.read_root_header()
''
>>> for kind, name in reader.iter_compound():
...     print(kind.name, name, reader.read_int())
INT a 42
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, NamedTuple, Optional, Union

from nbtserde.conf import NbtSettings
from nbtserde.exceptions import (
    DuplicateKeyError,
    InvalidLengthError,
    SerializationError,
    TypeMismatchError,
)
from nbtserde.serialization import Deserializer
from nbtserde.serialization.encoding.array import check_length, decode_array
from nbtserde.serialization.encoding.float import decode_float
from nbtserde.serialization.encoding.int import decode_int
from nbtserde.serialization.encoding.mutf8 import decode_string
from nbtserde.serialization.exceptions import PathSegment
from nbtserde.tag import TagKind, kind_from_id
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

from .base import NbtStream

# struct codes of the kinds whose lists can be read in a single unpack
_PACKED_FORMATS: dict[TagKind, str] = {
    TagKind.BYTE: 'b',
    TagKind.SHORT: 'h',
    TagKind.INT: 'i',
    TagKind.LONG: 'q',
    TagKind.FLOAT: 'f',
    TagKind.DOUBLE: 'd',
}

_SCALAR_TAGS: dict[TagKind, Any] = {
    TagKind.BYTE: Byte,
    TagKind.SHORT: Short,
    TagKind.INT: Int,
    TagKind.LONG: Long,
    TagKind.FLOAT: Float,
    TagKind.DOUBLE: Double,
}


class Document(NamedTuple):
    """A decoded root compound together with the name it was stored under."""
    name: str
    root: Any


@dataclass(slots=True)
class _CompoundFrame:
    tag: Compound
    key: Optional[str] = None

    def segment(self) -> Optional[PathSegment]:
        return self.key


@dataclass(slots=True)
class _ListFrame:
    tag: List
    count: int
    index: Optional[int] = None

    def segment(self) -> Optional[PathSegment]:
        return self.index


_Frame = Union[_CompoundFrame, _ListFrame]


class NbtReader(NbtStream):
    def __init__(
        self,
        deserializer: Deserializer,
        settings: Optional[NbtSettings] = None,
        *,
        depth: int = 0,
    ) -> None:
        super().__init__(settings, depth=depth)
        self.deserializer = deserializer
        self._empty_root = False

    def cur_pos(self) -> int:
        return self.deserializer.cur_pos()

    def read_kind(self) -> TagKind:
        offset = self.cur_pos()
        try:
            return kind_from_id(self.deserializer.read_byte())
        except SerializationError as e:
            if e.offset is None:
                e.offset = offset
            raise

    def expect_kind(self, expected: TagKind, actual: TagKind) -> None:
        if actual is not expected:
            raise TypeMismatchError(expected, actual, offset=self.cur_pos())

    def read_byte(self) -> int:
        return decode_int(self.deserializer, length=1, signed=True)

    def read_short(self) -> int:
        return decode_int(self.deserializer, length=2, signed=True)

    def read_int(self) -> int:
        return decode_int(self.deserializer, length=4, signed=True)

    def read_long(self) -> int:
        return decode_int(self.deserializer, length=8, signed=True)

    def read_float(self) -> float:
        return decode_float(self.deserializer, length=4)

    def read_double(self) -> float:
        return decode_float(self.deserializer, length=8)

    def read_string(self) -> str:
        return decode_string(self.deserializer)

    def read_byte_array(self) -> list[int]:
        return decode_array(self.deserializer, length=1)

    def read_int_array(self) -> list[int]:
        return decode_array(self.deserializer, length=4)

    def read_long_array(self) -> list[int]:
        return decode_array(self.deserializer, length=8)

    def read_raw_byte_array(self) -> bytes:
        """Same wire format as `read_byte_array`, but the elements are returned as unsigned bytes."""
        count = self.read_int()
        check_length(self.deserializer, count, 1)
        return bytes(self.deserializer.read_bytes(count))

    def read_root_header(self) -> str:
        """ Read the kind and name of the root tag and return the name.

        The compound body that follows is read with `iter_compound` or `read_tag_body(TagKind.COMPOUND)`. When the
        document is a single END byte and `ALLOW_EMPTY_DOCUMENT` is set, the name is empty and the body reads as an
        empty compound without consuming anything.
        """
        kind = self.read_kind()
        if kind is TagKind.END and self.settings.ALLOW_EMPTY_DOCUMENT:
            self._empty_root = True
            return ''
        self.expect_kind(TagKind.COMPOUND, kind)
        return self.read_string()

    def read_document(self) -> Document:
        name = self.read_root_header()
        root = self.read_tag_body(TagKind.COMPOUND)
        assert isinstance(root, Compound)
        return Document(name, root)

    def read_list_header(self) -> tuple[TagKind, int]:
        """ Read the element kind and the count of a list body, validating the count.
        """
        elem_kind = self.read_kind()
        count = self.read_int()
        if count < 0:
            raise InvalidLengthError(f'negative length: {count}', offset=self.cur_pos())
        if elem_kind is TagKind.END:
            if count > 0:
                raise InvalidLengthError(f'list of END with {count} element(s)', offset=self.cur_pos())
        else:
            check_length(self.deserializer, count, elem_kind.min_body_size)
        return elem_kind, count

    def iter_compound(self) -> Iterator[tuple[TagKind, str]]:
        """ Iterate over the entries of a compound body, yielding the kind and name of each one.

        The body of each entry must be consumed, with the matching `read_*` method or `skip_body`, before asking for the
        next one. The iteration stops after the END tag.

        The nesting level is held until the generator finishes, wrap it in `contextlib.closing` to release it right away
        when the loop can exit early.
        """
        with self.nested():
            if self._take_empty_root():
                return
            seen: set[str] = set()
            while True:
                kind = self.read_kind()
                if kind is TagKind.END:
                    return
                name = self.read_string()
                self._check_duplicate(name, seen)
                yield kind, name

    def iter_list(self) -> Iterator[tuple[int, TagKind]]:
        """ Iterate over the elements of a list body, yielding the index and kind of each one.

        As with `iter_compound` the body of each element must be consumed before the next iteration, and the iterator
        should be closed when the loop can exit early.
        """
        with self.nested():
            elem_kind, count = self.read_list_header()
            for index in range(count):
                yield index, elem_kind

    def skip_body(self, kind: TagKind) -> None:
        self.read_tag_body(kind)

    def _take_empty_root(self) -> bool:
        if self._empty_root:
            self._empty_root = False
            return True
        return False

    def _check_duplicate(self, name: str, seen: set[str]) -> None:
        if name not in seen:
            seen.add(name)
            return
        if self.settings.STRICT_DUPLICATE_KEYS:
            raise DuplicateKeyError(f'duplicate key {name!r}', offset=self.cur_pos())
        self.log.debug('duplicate key overwritten', key=name, offset=self.cur_pos())

    def read_tag_body(self, kind: TagKind) -> Tag:
        """ Decode the body of a tag of the given kind into a value tree node.

        Containers are walked with an explicit stack of frames instead of recursion, so how deep a document can go is
        only bounded by `MAX_DEPTH`.
        """
        if not kind.is_container():
            return self._read_leaf(kind)

        base_depth = self._depth
        stack: list[_Frame] = []
        try:
            root = self._open(kind, stack)
            while stack:
                frame = stack[-1]
                if isinstance(frame, _CompoundFrame):
                    self._step_compound(frame, stack)
                else:
                    self._step_list(frame, stack)
        except SerializationError as e:
            self.locate(e)
            e.path[0:0] = [segment for segment in (frame.segment() for frame in stack) if segment is not None]
            raise
        finally:
            self._depth = base_depth
        return root

    def _open(self, kind: TagKind, stack: list[_Frame]) -> Tag:
        self._enter()
        if kind is TagKind.COMPOUND:
            compound = Compound()
            if not self._take_empty_root():
                stack.append(_CompoundFrame(compound))
            else:
                self._leave()
            return compound

        elem_kind, count = self.read_list_header()
        packed = _PACKED_FORMATS.get(elem_kind)
        if packed is not None:
            # fixed width elements need no frame, they are all read at once
            tag_class = _SCALAR_TAGS[elem_kind]
            values = self.deserializer.read_struct(f'>{count}{packed}')
            self._leave()
            return List(map(tag_class, values), elem_kind=elem_kind)
        lst = List(elem_kind=elem_kind)
        stack.append(_ListFrame(lst, count))
        return lst

    def _close(self, stack: list[_Frame]) -> None:
        stack.pop()
        self._leave()

    def _step_compound(self, frame: _CompoundFrame, stack: list[_Frame]) -> None:
        frame.key = None
        kind = self.read_kind()
        if kind is TagKind.END:
            self._close(stack)
            return
        name = self.read_string()
        frame.key = name
        if name in frame.tag:
            if self.settings.STRICT_DUPLICATE_KEYS:
                raise DuplicateKeyError(f'duplicate key {name!r}', offset=self.cur_pos())
            self.log.debug('duplicate key overwritten', key=name, offset=self.cur_pos())
        if kind.is_container():
            frame.tag[name] = self._open(kind, stack)
        else:
            frame.tag[name] = self._read_leaf(kind)

    def _step_list(self, frame: _ListFrame, stack: list[_Frame]) -> None:
        index = 0 if frame.index is None else frame.index + 1
        if index == frame.count:
            self._close(stack)
            return
        frame.index = index
        elem_kind = frame.tag.elem_kind
        if elem_kind.is_container():
            frame.tag.append(self._open(elem_kind, stack))
        else:
            frame.tag.append(self._read_leaf(elem_kind))

    def _read_leaf(self, kind: TagKind) -> Tag:
        match kind:
            case TagKind.BYTE:
                return Byte(self.read_byte())
            case TagKind.SHORT:
                return Short(self.read_short())
            case TagKind.INT:
                return Int(self.read_int())
            case TagKind.LONG:
                return Long(self.read_long())
            case TagKind.FLOAT:
                return Float(self.read_float())
            case TagKind.DOUBLE:
                return Double(self.read_double())
            case TagKind.STRING:
                return String(self.read_string())
            case TagKind.BYTE_ARRAY:
                return ByteArray(self.read_byte_array())
            case TagKind.INT_ARRAY:
                return IntArray(self.read_int_array())
            case TagKind.LONG_ARRAY:
                return LongArray(self.read_long_array())
            case _:
                raise TypeMismatchError('a value', kind, offset=self.cur_pos())
