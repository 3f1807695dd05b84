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

r"""
This module implements Java's "modified UTF-8", the string encoding used by NBT.

It differs from UTF-8 in two ways:

- U+0000 is written as the two bytes `c0 80`, so encoded strings never contain a zero byte;
- characters outside the Basic Multilingual Plane are first split into a UTF-16 surrogate pair and each surrogate is
  then written as its own 3-byte sequence (this is also known as CESU-8), 4-byte sequences never appear.

>>> mutf8_encode('foo')
b'foo'
>>> mutf8_encode('a\x00b').hex()
'61c08062'
>>> mutf8_encode('é').hex()
'c3a9'
>>> mutf8_encode('😎').hex()  # UTF-8 would be f09f988e
'eda0bdedb88e'

>>> mutf8_decode(bytes.fromhex('eda0bdedb88e')) == '😎'
True
>>> mutf8_decode(b'a\xc0\x80b') == 'a\x00b'
True
>>> try:
...     mutf8_decode(bytes.fromhex('f09f988e'))
... except InvalidStringEncodingError as e:
...     print(e)
4-byte sequences are not valid modified UTF-8

On the wire a string is prefixed by its encoded length as a 16-bit unsigned integer:

>>> se = Serializer.build_bytes_serializer()
>>> encode_string(se, '')  # writes 0000
>>> encode_string(se, 'hello')  # writes 000568656c6c6f
>>> encode_string(se, '😎')  # writes 0006eda0bdedb88e
>>> bytes(se.finalize()).hex()
'0000000568656c6c6f0006eda0bdedb88e'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0000000568656c6c6f0006eda0bdedb88e'))
>>> decode_string(de)
''
>>> decode_string(de)
'hello'
>>> decode_string(de) == '😎'
True
>>> de.finalize()

The length is counted in encoded bytes, not characters:

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_string(se, 'x' * 65536)
... except StringTooLongError as e:
...     print(e)
string needs 65536 bytes, at most 65535 fit in a length prefix
"""

import struct

from nbtserde.exceptions import InvalidStringEncodingError, StringTooLongError
from nbtserde.serialization import Deserializer, Serializer
from nbtserde.serialization.types import Buffer

from .int import decode_int, encode_int

MAX_STRING_LENGTH = 0xFFFF


def mutf8_encode(text: str) -> bytes:
    """ Encode `text` as modified UTF-8, without a length prefix.
    """
    if text.isascii() and '\x00' not in text:
        return text.encode('ascii')
    utf16 = text.encode('utf-16-be', 'surrogatepass')
    code_units = struct.unpack(f'>{len(utf16) // 2}H', utf16)
    # every code unit is encoded on its own, so surrogates become 3-byte sequences
    split = ''.join(map(chr, code_units))
    return split.encode('utf-8', 'surrogatepass').replace(b'\x00', b'\xc0\x80')


def mutf8_decode(data: Buffer) -> str:
    """ Decode modified UTF-8 data, without a length prefix.

    A plain zero byte is accepted as U+0000, like Java's `DataInputStream.readUTF` does. Unpaired surrogates are kept
    in the resulting string so that encoding it again gives back the same bytes.
    """
    raw = bytes(data)
    if raw.isascii():
        return raw.decode('ascii')
    if any(byte >= 0xf0 for byte in raw):
        raise InvalidStringEncodingError('4-byte sequences are not valid modified UTF-8')
    try:
        split = raw.replace(b'\xc0\x80', b'\x00').decode('utf-8', 'surrogatepass')
    except UnicodeDecodeError as e:
        raise InvalidStringEncodingError(f'malformed modified UTF-8: {e.reason}') from e
    # joins surrogate pairs into a single character
    return split.encode('utf-16-be', 'surrogatepass').decode('utf-16-be', 'surrogatepass')


def encode_string(serializer: Serializer, value: str) -> None:
    """ Encode a string with its 16-bit length prefix.

    This modules's docstring has more details and examples.
    """
    data = mutf8_encode(value)
    if len(data) > MAX_STRING_LENGTH:
        raise StringTooLongError(
            f'string needs {len(data)} bytes, at most {MAX_STRING_LENGTH} fit in a length prefix'
        )
    encode_int(serializer, len(data), length=2, signed=False)
    serializer.write_bytes(data)


def decode_string(deserializer: Deserializer) -> str:
    """ Decode a string with its 16-bit length prefix.

    This modules's docstring has more details and examples.
    """
    size = decode_int(deserializer, length=2, signed=False)
    return mutf8_decode(deserializer.read_bytes(size))
