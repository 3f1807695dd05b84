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
This module implements IEEE-754 big-endian floats, either 4 bytes (NBT Float) or 8 bytes (NBT Double).

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 1.5, length=4)  # writes 3fc00000
>>> encode_float(se, -2.0, length=8)  # writes c000000000000000
>>> bytes(se.finalize()).hex()
'3fc00000c000000000000000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('3fc00000c000000000000000'))
>>> decode_float(de, length=4)
1.5
>>> decode_float(de, length=8)
-2.0
>>> de.finalize()

Python floats are doubles, so a value stored in 4 bytes comes back rounded:

>>> round_f32(0.1)
0.10000000149011612
>>> round_f32(float('inf'))
inf
"""

import struct

from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.serialization import Deserializer, Serializer

_FORMATS = {
    4: '>f',
    8: '>d',
}


def round_f32(value: float) -> float:
    """ Round a float to the nearest value a 4-byte float can hold.
    """
    try:
        result, = struct.unpack('>f', struct.pack('>f', value))
    except OverflowError:
        raise UnrepresentableValueError(f'{value!r} does not fit in a 4-byte float') from None
    return result


def encode_float(serializer: Serializer, value: float, *, length: int) -> None:
    """ Encode a float with the given byte-length, 4 or 8.
    """
    try:
        serializer.write_struct((value,), _FORMATS[length])
    except OverflowError:
        raise UnrepresentableValueError(f'{value!r} does not fit in a {length}-byte float') from None
    except struct.error as e:
        raise UnrepresentableValueError(f'{value!r} is not a float') from e


def decode_float(deserializer: Deserializer, *, length: int) -> float:
    """ Decode a float with the given byte-length, 4 or 8.
    """
    value, = deserializer.read_struct(_FORMATS[length])
    return value
