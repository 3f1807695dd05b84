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
Entry points for encoding and decoding whole documents.

>>> from nbtserde.value import Int
>>> data = to_bytes(Compound({'a': Int(42)}), root_name='hello')
>>> data.hex()
'0a000568656c6c6f030001610000002a00'
>>> from_bytes(data)
Compound({'a': Int(value=42)})
>>> read_document(data).name
'hello'
"""

from dataclasses import is_dataclass
from typing import Any, NamedTuple, Optional, TypeVar

from nbtserde.binary import Document
from nbtserde.conf import NbtSettings
from nbtserde.nbt_types import NBTType, make_nbt_type
from nbtserde.serialization.types import Buffer
from nbtserde.value import Compound, Tag

T = TypeVar('T')


def infer_type(value: Any) -> type:
    """ The type used to encode `value` when none is given, only tags and record instances are supported.
    """
    class_ = type(value)
    if isinstance(value, Tag) or is_dataclass(class_) or NamedTuple in getattr(class_, '__orig_bases__', tuple()):
        return class_
    raise TypeError(f'cannot tell how to encode a {class_.__name__} without a type, pass one explicitly')


def to_bytes(
    value: Any,
    type_: Optional[type] = None,
    *,
    root_name: Optional[str] = None,
    settings: Optional[NbtSettings] = None,
) -> bytes:
    """ Encode `value` as a complete document named `root_name`, the value must be encoded as a compound.

    The type decides how the value is encoded, when omitted it is taken from the value's class.
    """
    nbt_type: NBTType[Any] = make_nbt_type(type_ if type_ is not None else infer_type(value))
    return nbt_type.to_bytes(value, root_name=root_name, settings=settings)


def read_document(data: Buffer, type_: type[T] = Compound, *, settings: Optional[NbtSettings] = None) -> Document:
    """ Decode a complete document into a value of `type_`, and return it along with its root name.
    """
    return make_nbt_type(type_).read_document(data, settings=settings)


def from_bytes(data: Buffer, type_: type[T] = Compound, *, settings: Optional[NbtSettings] = None) -> T:
    """ Decode a complete document into a value of `type_`, a value tree by default.

    Trailing data after the document is an error.
    """
    return make_nbt_type(type_).from_bytes(data, settings=settings)
