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
This module implements encoding of integers with a fixed size, the size and signedness are parametrized.

The encoding format itself is a standard big-endian two's complement format.

>>> se = Serializer.build_bytes_serializer()
>>> encode_int(se, 0, length=1, signed=True)  # writes 00
>>> encode_int(se, -1, length=1, signed=True)  # writes ff
>>> encode_int(se, 258, length=2, signed=True)  # writes 0102
>>> encode_int(se, 42, length=4, signed=True)  # writes 0000002a
>>> encode_int(se, -2, length=8, signed=True)  # writes fffffffffffffffe
>>> bytes(se.finalize()).hex()
'00ff01020000002afffffffffffffffe'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00ff01020000002afffffffffffffffe'))
>>> decode_int(de, length=1, signed=True)  # reads 00
0
>>> decode_int(de, length=1, signed=True)  # reads ff
-1
>>> decode_int(de, length=2, signed=True)  # reads 0102
258
>>> decode_int(de, length=4, signed=True)  # reads 0000002a
42
>>> decode_int(de, length=8, signed=True)  # reads fffffffffffffffe
-2
>>> de.finalize()

Values out of range are refused before anything is written:

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_int(se, 128, length=1, signed=True)
... except UnrepresentableValueError as e:
...     print(e)
128 does not fit in 1 signed byte(s)
>>> se.cur_pos()
0
"""

from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.serialization import Deserializer, Serializer


def encode_int(serializer: Serializer, number: int, *, length: int, signed: bool) -> None:
    """ Encode an int using the given byte-length and signedness.

    This modules's docstring has more details and examples.
    """
    try:
        data = int.to_bytes(number, length, byteorder='big', signed=signed)
    except OverflowError:
        signedness = 'signed' if signed else 'unsigned'
        raise UnrepresentableValueError(f'{number} does not fit in {length} {signedness} byte(s)') from None
    serializer.write_bytes(data)


def decode_int(deserializer: Deserializer, *, length: int, signed: bool) -> int:
    """ Decode an int using the given byte-length and signedness.

    This modules's docstring has more details and examples.
    """
    data = deserializer.read_bytes(length)
    return int.from_bytes(data, byteorder='big', signed=signed)
