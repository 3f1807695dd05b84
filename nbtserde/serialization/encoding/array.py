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
This module implements NBT's primitive arrays: a signed 32-bit element count followed by the packed big-endian
elements, each 1 (ByteArray), 4 (IntArray) or 8 (LongArray) bytes wide.

>>> se = Serializer.build_bytes_serializer()
>>> encode_array(se, [1, -1], length=4)
>>> bytes(se.finalize()).hex()
'0000000200000001ffffffff'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0000000200000001ffffffff'))
>>> decode_array(de, length=4)
[1, -1]
>>> de.finalize()

The declared count is untrusted, it is checked before anything is allocated:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('ffffffff'))
>>> try:
...     decode_array(de, length=1)
... except InvalidLengthError as e:
...     print(e)
negative length: -1

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('7fffffff00'))
>>> try:
...     decode_array(de, length=8)
... except UnexpectedEofError as e:
...     print(type(e).__name__)
UnexpectedEofError
"""

import struct
from collections.abc import Sequence

from nbtserde.exceptions import InvalidLengthError, UnexpectedEofError, UnrepresentableValueError
from nbtserde.serialization import Deserializer, Serializer

from .int import decode_int, encode_int

_ELEMENT_FORMATS = {
    1: 'b',
    4: 'i',
    8: 'q',
}


def check_length(deserializer: Deserializer, count: int, item_size: int) -> None:
    """ Validate a declared element count before reading the elements.

    A negative count is never valid. A count that needs more bytes than are left can only come from truncated data, it
    is reported as such without trying to read it.
    """
    if count < 0:
        raise InvalidLengthError(f'negative length: {count}')
    bytes_left = deserializer.bytes_left()
    if bytes_left is not None and count * item_size > bytes_left:
        raise UnexpectedEofError(
            f'length {count} needs at least {count * item_size} byte(s) but only {bytes_left} left',
            offset=deserializer.cur_pos(),
        )


def encode_array(serializer: Serializer, values: Sequence[int], *, length: int) -> None:
    """ Encode a sequence of ints with a count prefix, each element is `length` bytes wide.
    """
    try:
        data = struct.pack(f'>{len(values)}{_ELEMENT_FORMATS[length]}', *values)
    except struct.error as e:
        raise UnrepresentableValueError(f'array element does not fit in {length} signed byte(s)') from e
    encode_int(serializer, len(values), length=4, signed=True)
    serializer.write_bytes(data)


def decode_array(deserializer: Deserializer, *, length: int) -> list[int]:
    """ Decode a count-prefixed sequence of ints, each element is `length` bytes wide.
    """
    count = decode_int(deserializer, length=4, signed=True)
    check_length(deserializer, count, length)
    return list(deserializer.read_struct(f'>{count}{_ELEMENT_FORMATS[length]}'))
