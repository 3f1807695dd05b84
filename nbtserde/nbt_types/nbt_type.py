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

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Generator, Generic, NamedTuple, Optional, TypeVar, final

from structlog import get_logger
from typing_extensions import Self

from nbtserde.binary import Document, NbtReader, NbtWriter
from nbtserde.conf import NbtSettings, get_global_settings
from nbtserde.exceptions import NestingTooDeepError, UnrepresentableValueError
from nbtserde.nbt_types.utils import TypeAliasMap, TypeToNBTTypeMap, get_aliased_type, get_usable_origin_type
from nbtserde.serialization import Deserializer, Serializer
from nbtserde.serialization.types import Buffer
from nbtserde.tag import TagKind
from nbtserde.value import Tag

logger = get_logger()

T = TypeVar('T')


class NBTType(ABC, Generic[T]):
    """ This class models how values of a known Python type are represented as NBT.

    An instance is built from a type annotation with `NBTType.from_type`, the annotation decides the tag kind used for
    the value and, for compound types, the `NBTType` of each member, so encoding and decoding never need an
    intermediate value tree.

    The body of a value is what `serialize` writes and `deserialize` reads, the kind and name that precede it are
    handled by the enclosing compound or list, or by the document header for the root value.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        nbt_types_map: TypeToNBTTypeMap

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    # XXX: subclasses must initialize this property, None means it depends on the value, see `tag_kind`
    _kind: Optional[TagKind]

    @final
    @staticmethod
    def from_type(type_: type[T], /, *, type_map: TypeMap) -> NBTType[T]:
        """ Instantiate a NBTType instance from a type signature using the given maps.

        The `nbt_types_map` associates types to NBTType classes, while the `alias_map` associates types with substitute
        types to use instead.
        """
        usable_origin = get_usable_origin_type(type_, type_map=type_map)
        nbt_type = type_map.nbt_types_map[usable_origin]
        # XXX: first we try to create the nbt_type without making an alias, this ensures that an invalid annotation
        #      would not be accepted
        _ = nbt_type._from_type(type_, type_map=type_map)
        aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=False)
        return nbt_type._from_type(aliased_type, type_map=type_map)

    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: TypeMap) -> Self:
        """ Instantiate a NBTType instance from a type signature.

        Implementations inspect the type's origin and arguments and use `NBTType.from_type` with the same `type_map`
        for the types they are made of.
        """
        raise TypeError(f'{cls} is not compatible with use in a NBTType.TypeMap')

    @property
    def static_kind(self) -> Optional[TagKind]:
        """The tag kind of every value of this type, or None when it can only be known from the value."""
        return self._kind

    def tag_kind(self, value: T, /) -> TagKind:
        """The tag kind that `value` is encoded as."""
        assert self._kind is not None, 'subclasses without a static kind must override tag_kind'
        return self._kind

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise `UnrepresentableValueError` if the value cannot be encoded with this type.

        The check recurses into compound values, encoding does the same check one level at a time while it goes.
        """
        self._check_value(value, deep=True)

    @final
    def serialize(self, writer: NbtWriter, value: T, /) -> None:
        """ Write the body of `value`, the kind and name that precede it must have been written already.
        """
        # XXX: subclasses must implement NBTType._serialize, not NBTType.serialize
        self._check_value(value, deep=False)
        self._serialize(writer, value)

    @final
    def deserialize(self, reader: NbtReader, kind: TagKind, /) -> T:
        """ Read the body of a value whose tag kind on the wire is `kind`.

        A `TypeMismatchError` is raised when that kind is not the one this type is encoded as.
        """
        # XXX: subclasses must implement NBTType._deserialize, not NBTType.deserialize
        if self._kind is not None:
            reader.expect_kind(self._kind, kind)
        value = self._deserialize(reader, kind)
        self._check_value(value, deep=False)
        return value

    @final
    def to_bytes(
        self,
        value: T,
        /,
        *,
        root_name: Optional[str] = None,
        settings: Optional[NbtSettings] = None,
    ) -> bytes:
        """ Encode `value` as a complete NBT document, its type must be encoded as a compound.
        """
        settings = settings if settings is not None else get_global_settings()
        name = root_name if root_name is not None else settings.DEFAULT_ROOT_NAME
        kind = self.tag_kind(value)
        if kind is not TagKind.COMPOUND:
            raise UnrepresentableValueError(f'the root of a document must be a COMPOUND, found {kind.name}')
        serializer = Serializer.build_bytes_serializer()
        writer = NbtWriter(serializer.with_max_bytes(settings.MAX_DOCUMENT_BYTES), settings)
        with _recursion_guard():
            writer.write_root_header(name)
            self.serialize(writer, value)
        data = bytes(serializer.finalize())
        logger.debug('document encoded', root_name=name, size=len(data))
        return data

    @final
    def read_document(self, data: Buffer, /, *, settings: Optional[NbtSettings] = None) -> Document:
        """ Decode a complete NBT document, returning its root name along with the value.

        Data left after the document is an error.
        """
        settings = settings if settings is not None else get_global_settings()
        deserializer = Deserializer.build_bytes_deserializer(data)
        reader = NbtReader(deserializer.with_max_bytes(settings.MAX_DOCUMENT_BYTES), settings)
        with _recursion_guard():
            name = reader.read_root_header()
            value = self.deserialize(reader, TagKind.COMPOUND)
        deserializer.finalize()
        logger.debug('document decoded', root_name=name, size=deserializer.cur_pos())
        return Document(name, value)

    @final
    def from_bytes(self, data: Buffer, /, *, settings: Optional[NbtSettings] = None) -> T:
        """ Shortcut for `read_document` that drops the root name.
        """
        return self.read_document(data, settings=settings).root

    @final
    def to_tag(self, value: T, /, *, settings: Optional[NbtSettings] = None) -> Tag:
        """ Convert a value to the value tree node it is encoded as.

        The conversion goes through the binary encoding, so it gives exactly the tree that decoding `to_bytes` would.
        """
        serializer = Serializer.build_bytes_serializer()
        writer = NbtWriter(serializer, settings)
        kind = self.tag_kind(value)
        with _recursion_guard():
            self.serialize(writer, value)
        reader = NbtReader(Deserializer.build_bytes_deserializer(serializer.finalize()), writer.settings)
        return reader.read_tag_body(kind)

    @final
    def from_tag(self, tag: Tag, /, *, settings: Optional[NbtSettings] = None) -> T:
        """ Convert a value tree node to a value of this type, the inverse of `to_tag`.
        """
        serializer = Serializer.build_bytes_serializer()
        writer = NbtWriter(serializer, settings)
        writer.write_tag_body(tag)
        deserializer = Deserializer.build_bytes_deserializer(serializer.finalize())
        reader = NbtReader(deserializer, writer.settings)
        with _recursion_guard():
            value = self.deserialize(reader, tag.kind)
        deserializer.finalize()
        return value

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `NBTType.check_value`.

        Compound types should use `NBTType._check_value` on their member types and forward the `deep` argument.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize(self, writer: NbtWriter, value: T, /) -> None:
        """ Inner implementation of `serialize`, the value has been "shallow checked".

        Compound types should call `NBTType.serialize` on their member types, so each member is checked in turn.
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, reader: NbtReader, kind: TagKind, /) -> T:
        """ Inner implementation of `deserialize`, the kind has been checked when the type has a static kind.
        """
        raise NotImplementedError


@contextmanager
def _recursion_guard() -> Generator[None, None, None]:
    """ Report values nested so deep that Python ran out of stack as a nesting error.

    Nesting is bounded by `MAX_DEPTH`, but every level takes a few stack frames when going through NBTType instances,
    so a high enough `MAX_DEPTH` can still reach the interpreter's recursion limit first.
    """
    try:
        yield
    except RecursionError:
        raise NestingTooDeepError('value is nested too deep for the interpreter stack') from None
