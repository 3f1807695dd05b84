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
Encoding of NBT documents, the mirror of `nbtserde.binary.reader`.

>>> from nbtserde.value import Int
>>> se = Serializer.build_bytes_serializer()
>>> NbtWriter(se).write_document('', Compound({'a': Int(42)}))
>>> bytes(se.finalize()).hex()
'0a0000030001610000002a00'

Encoders that do not build a value tree use the structured API instead:

>>> se = Serializer.build_bytes_serializer()
>>> writer = NbtWriter(se)
>>> writer.write_root_header('')
>>> with writer.begin_compound() as compound:
...     compound.field(TagKind.INT, 'a').write_int(42)
>>> bytes(se.finalize()).hex()
'0a0000030001610000002a00'
"""

from __future__ import annotations

from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from typing import Generator, Iterator, Optional, Union

from nbtserde.conf import NbtSettings
from nbtserde.exceptions import SerializationError, UnrepresentableValueError
from nbtserde.serialization import Serializer
from nbtserde.serialization.encoding.array import encode_array
from nbtserde.serialization.encoding.float import encode_float
from nbtserde.serialization.encoding.int import encode_int
from nbtserde.serialization.encoding.mutf8 import encode_string
from nbtserde.serialization.exceptions import PathSegment
from nbtserde.tag import TagKind, tag_id
from nbtserde.value import ByteArray, Compound, IntArray, List, LongArray, Tag

from .base import NbtStream


@dataclass(slots=True)
class _Frame:
    tag: Union[Compound, List]
    entries: Iterator[tuple[PathSegment, Tag]]
    segment: Optional[PathSegment] = None


class NbtWriter(NbtStream):
    def __init__(
        self,
        serializer: Serializer,
        settings: Optional[NbtSettings] = None,
        *,
        depth: int = 0,
        base_offset: int = 0,
    ) -> None:
        super().__init__(settings, depth=depth)
        self.serializer = serializer
        self._base_offset = base_offset

    def cur_pos(self) -> int:
        return self._base_offset + self.serializer.cur_pos()

    def write_kind(self, kind: TagKind) -> None:
        self.serializer.write_byte(tag_id(kind))

    def write_byte(self, value: int) -> None:
        encode_int(self.serializer, value, length=1, signed=True)

    def write_short(self, value: int) -> None:
        encode_int(self.serializer, value, length=2, signed=True)

    def write_int(self, value: int) -> None:
        encode_int(self.serializer, value, length=4, signed=True)

    def write_long(self, value: int) -> None:
        encode_int(self.serializer, value, length=8, signed=True)

    def write_float(self, value: float) -> None:
        encode_float(self.serializer, value, length=4)

    def write_double(self, value: float) -> None:
        encode_float(self.serializer, value, length=8)

    def write_string(self, value: str) -> None:
        encode_string(self.serializer, value)

    def write_byte_array(self, values: list[int]) -> None:
        encode_array(self.serializer, values, length=1)

    def write_int_array(self, values: list[int]) -> None:
        encode_array(self.serializer, values, length=4)

    def write_long_array(self, values: list[int]) -> None:
        encode_array(self.serializer, values, length=8)

    def write_raw_byte_array(self, data: bytes) -> None:
        self.write_int(len(data))
        self.serializer.write_bytes(data)

    def write_root_header(self, name: str) -> None:
        self.write_kind(TagKind.COMPOUND)
        self.write_string(name)

    def write_document(self, name: str, root: Compound) -> None:
        self.write_root_header(name)
        self.write_tag_body(root)

    @contextmanager
    def begin_compound(self) -> Generator[CompoundWriter, None, None]:
        """ Write a compound body, one `CompoundWriter.field` at a time.

        The END tag is only written when the context exits without an error.
        """
        with self.nested():
            yield CompoundWriter(self)
            self.write_kind(TagKind.END)

    @contextmanager
    def begin_list(self) -> Generator[ListWriter, None, None]:
        """ Write a list body, one `ListWriter.element` at a time.

        The element kind and count prefix the elements on the wire but are only known at the end, so elements are
        encoded into a buffer that is copied out when the context exits without an error.
        """
        with self.nested():
            list_writer = ListWriter(self)
            yield list_writer
            list_writer.flush()

    def write_tag_body(self, tag: Tag) -> None:
        """ Encode the body of a value tree node.

        Like `NbtReader.read_tag_body` containers are walked with an explicit stack, only `MAX_DEPTH` bounds nesting.
        """
        if not isinstance(tag, Tag):
            raise UnrepresentableValueError(f'{tag!r} is not a tag', offset=self.cur_pos())
        if not isinstance(tag, (Compound, List)):
            self._write_leaf(tag)
            return

        base_depth = self._depth
        stack: list[_Frame] = []
        try:
            self._open(tag, stack)
            while stack:
                frame = stack[-1]
                frame.segment = None
                entry = next(frame.entries, None)
                if entry is None:
                    if isinstance(frame.tag, Compound):
                        self.write_kind(TagKind.END)
                    stack.pop()
                    self._leave()
                    continue
                segment, child = entry
                frame.segment = segment
                if isinstance(frame.tag, Compound):
                    assert isinstance(segment, str)
                    self.write_kind(child.kind)
                    self.write_string(segment)
                if isinstance(child, (Compound, List)):
                    self._open(child, stack)
                else:
                    self._write_leaf(child)
        except SerializationError as e:
            self.locate(e)
            e.path[0:0] = [frame.segment for frame in stack if frame.segment is not None]
            raise
        finally:
            self._depth = base_depth

    def _open(self, tag: Union[Compound, List], stack: list[_Frame]) -> None:
        self._enter()
        entries: Iterator[tuple[PathSegment, Tag]]
        if isinstance(tag, Compound):
            entries = iter(list(tag.items()))
        else:
            self.write_kind(tag.elem_kind)
            self.write_int(len(tag))
            entries = enumerate(list(tag))
        stack.append(_Frame(tag, entries))

    def _write_leaf(self, tag: Tag) -> None:
        match tag.kind:
            case TagKind.BYTE:
                self.write_byte(tag.value)  # type: ignore[attr-defined]
            case TagKind.SHORT:
                self.write_short(tag.value)  # type: ignore[attr-defined]
            case TagKind.INT:
                self.write_int(tag.value)  # type: ignore[attr-defined]
            case TagKind.LONG:
                self.write_long(tag.value)  # type: ignore[attr-defined]
            case TagKind.FLOAT:
                self.write_float(tag.value)  # type: ignore[attr-defined]
            case TagKind.DOUBLE:
                self.write_double(tag.value)  # type: ignore[attr-defined]
            case TagKind.STRING:
                self.write_string(tag.value)  # type: ignore[attr-defined]
            case TagKind.BYTE_ARRAY:
                assert isinstance(tag, ByteArray)
                self.write_byte_array(tag.values)
            case TagKind.INT_ARRAY:
                assert isinstance(tag, IntArray)
                self.write_int_array(tag.values)
            case TagKind.LONG_ARRAY:
                assert isinstance(tag, LongArray)
                self.write_long_array(tag.values)
            case _:
                raise UnrepresentableValueError(f'{tag!r} is not a tag')


class CompoundWriter:
    __slots__ = ('_writer',)

    def __init__(self, writer: NbtWriter) -> None:
        self._writer = writer

    def field(self, kind: TagKind, name: str) -> NbtWriter:
        """Write the header of an entry, the returned writer must then be used to write exactly one body of `kind`."""
        assert kind is not TagKind.END
        self._writer.write_kind(kind)
        self._writer.write_string(name)
        return self._writer


class ListWriter:
    def __init__(self, parent: NbtWriter) -> None:
        self._parent = parent
        self._buffer = Serializer.build_bytes_serializer()
        # the 5 bytes are the element kind and count written before the buffered elements
        self._body = NbtWriter(
            self._buffer,
            parent.settings,
            depth=parent.depth,
            base_offset=parent.cur_pos() + 5,
        )
        self._elem_kind: Optional[TagKind] = None
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    def at(self, index: int) -> AbstractContextManager[None]:
        """Like `NbtWriter.at`, but offsets are those of the buffered elements in the final document."""
        return self._body.at(index)

    def element(self, kind: TagKind) -> NbtWriter:
        """Start a new element, the returned writer must then be used to write exactly one body of `kind`."""
        if self._elem_kind is None:
            self._elem_kind = kind
        elif kind is not self._elem_kind:
            raise UnrepresentableValueError(
                f'list of {self._elem_kind.name} cannot hold {kind.name}',
                offset=self._body.cur_pos(),
            )
        self._count += 1
        return self._body

    def flush(self) -> None:
        self._parent.write_kind(self._elem_kind if self._elem_kind is not None else TagKind.END)
        self._parent.write_int(self._count)
        self._parent.serializer.write_bytes(self._buffer.finalize())
