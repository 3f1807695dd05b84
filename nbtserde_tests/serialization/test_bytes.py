import pytest

from nbtserde.serialization import Deserializer, Serializer
from nbtserde.serialization.adapters import MaxBytesExceededError
from nbtserde.serialization.exceptions import TrailingDataError, UnexpectedEofError


def test_bytes_serializer() -> None:
    se = Serializer.build_bytes_serializer()
    se.write_byte(1)
    se.write_bytes(b'\x02\x03')
    se.write_struct((4, 5), '>hb')
    assert se.cur_pos() == 6
    assert se.finalize() == b'\x01\x02\x03\x00\x04\x05'


def test_bytes_deserializer() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02\x03\x00\x04\x05')
    assert de.read_byte() == 1
    assert bytes(de.peek_bytes(2)) == b'\x02\x03'
    assert bytes(de.read_bytes(2)) == b'\x02\x03'
    assert de.bytes_left() == 3
    assert de.read_struct('>hb') == (4, 5)
    assert de.is_empty()
    de.finalize()


def test_unexpected_eof() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02')
    de.read_byte()
    with pytest.raises(UnexpectedEofError) as e:
        de.read_bytes(2)
    assert e.value.offset == 1
    # a failed read consumes nothing
    assert de.read_byte() == 2
    with pytest.raises(UnexpectedEofError):
        de.read_byte()


def test_trailing_data() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02')
    de.read_byte()
    with pytest.raises(TrailingDataError) as e:
        de.finalize()
    assert e.value.offset == 1


def test_max_bytes_serializer() -> None:
    se = Serializer.build_bytes_serializer()
    limited = se.with_max_bytes(3)
    limited.write_byte(1)
    limited.write_bytes(b'\x02\x03')
    with pytest.raises(MaxBytesExceededError):
        limited.write_byte(4)
    assert se.finalize() == b'\x01\x02\x03'


def test_max_bytes_deserializer() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02\x03\x04')
    limited = de.with_max_bytes(2)
    assert limited.read_byte() == 1
    with pytest.raises(MaxBytesExceededError):
        limited.read_bytes(2)
    assert limited.read_byte() == 2


def test_no_limit() -> None:
    se = Serializer.build_bytes_serializer()
    assert se.with_max_bytes(None) is se
    de = Deserializer.build_bytes_deserializer(b'')
    assert de.with_max_bytes(None) is de
