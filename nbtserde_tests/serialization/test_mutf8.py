import pytest

from nbtserde.exceptions import InvalidStringEncodingError, StringTooLongError, UnexpectedEofError
from nbtserde.serialization import Deserializer, Serializer
from nbtserde.serialization.encoding.mutf8 import decode_string, encode_string, mutf8_decode, mutf8_encode


@pytest.mark.parametrize('text, encoded', [
    ('', ''),
    ('level', '6c6576656c'),
    ('\x00', 'c080'),
    ('\x7f', '7f'),
    ('\x80', 'c280'),
    ('ç', 'c3a7'),
    ('߿', 'dfbf'),
    ('ࠀ', 'e0a080'),
    ('€', 'e282ac'),
    ('￿', 'efbfbf'),
    ('\U00010000', 'eda080edb080'),
    ('😎', 'eda0bdedb88e'),
    ('\U0010ffff', 'edafbfedbfbf'),
])
def test_mutf8(text: str, encoded: str) -> None:
    assert mutf8_encode(text).hex() == encoded
    assert mutf8_decode(bytes.fromhex(encoded)) == text


def test_no_zero_bytes() -> None:
    assert b'\x00' not in mutf8_encode('a\x00b\x00\U0001f600')


def test_plain_zero_byte_is_accepted() -> None:
    assert mutf8_decode(b'a\x00b') == 'a\x00b'


def test_lone_surrogate() -> None:
    # an unpaired surrogate survives a round trip
    assert mutf8_decode(bytes.fromhex('eda0bd')) == '\ud83d'
    assert mutf8_encode('\ud83d').hex() == 'eda0bd'


@pytest.mark.parametrize('data', ['f09f988e', 'c3', 'e282', '80', 'ff'])
def test_invalid(data: str) -> None:
    with pytest.raises(InvalidStringEncodingError):
        mutf8_decode(bytes.fromhex(data))


def test_length_prefix_counts_bytes() -> None:
    se = Serializer.build_bytes_serializer()
    encode_string(se, 'é' * 3)
    assert bytes(se.finalize()).hex() == '0006' + 'c3a9' * 3


def test_max_length() -> None:
    se = Serializer.build_bytes_serializer()
    encode_string(se, 'x' * 65535)
    assert len(se.finalize()) == 65537

    se = Serializer.build_bytes_serializer()
    with pytest.raises(StringTooLongError):
        # 3 bytes per character
        encode_string(se, '€' * 21846)
    assert se.cur_pos() == 0


def test_length_prefix_is_unsigned() -> None:
    de = Deserializer.build_bytes_deserializer(b'\xff\xff' + b'x' * 65535)
    assert decode_string(de) == 'x' * 65535
    de.finalize()


def test_truncated() -> None:
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('0005616263'))
    with pytest.raises(UnexpectedEofError):
        decode_string(de)
