import struct

import pytest

from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.nbt_types import make_nbt_type
from nbtserde.types import i8, i16, i32, i64, u8, u16, u32, u64
from nbtserde.value import Byte, Int, Long, Short


def _test_bounds_struct_pack(fmt: str, lower_bound: int, upper_bound: int) -> None:
    struct.pack(fmt, lower_bound)
    with pytest.raises(struct.error):
        struct.pack(fmt, lower_bound - 1)
    struct.pack(fmt, upper_bound)
    with pytest.raises(struct.error):
        struct.pack(fmt, upper_bound + 1)


@pytest.mark.parametrize('type_, fmt', [
    (i8, 'b'),
    (i16, 'h'),
    (i32, 'i'),
    (i64, 'q'),
    (u8, 'B'),
    (u16, 'H'),
    (u32, 'I'),
    (u64, 'Q'),
])
def test_bounds(type_: type, fmt: str) -> None:
    nbt_type = make_nbt_type(type_)
    lower_bound, upper_bound = nbt_type._bounds()  # type: ignore[attr-defined]
    _test_bounds_struct_pack(fmt, lower_bound, upper_bound)
    nbt_type.check_value(lower_bound)
    nbt_type.check_value(upper_bound)
    with pytest.raises(UnrepresentableValueError):
        nbt_type.check_value(upper_bound + 1)
    with pytest.raises(UnrepresentableValueError):
        nbt_type.check_value(lower_bound - 1)


def test_int8_bounds() -> None:
    assert make_nbt_type(i8)._bounds() == (-128, 127)  # type: ignore[attr-defined]
    assert make_nbt_type(u8)._bounds() == (0, 255)  # type: ignore[attr-defined]


def test_unsigned_keeps_bits() -> None:
    assert make_nbt_type(u8).to_tag(255) == Byte(-1)
    assert make_nbt_type(u16).to_tag(0x8000) == Short(-0x8000)
    assert make_nbt_type(u32).to_tag(2**32 - 1) == Int(-1)
    assert make_nbt_type(u64).to_tag(2**63) == Long(-2**63)
    assert make_nbt_type(u64).to_tag(1) == Long(1)

    assert make_nbt_type(u8).from_tag(Byte(-1)) == 255
    assert make_nbt_type(u32).from_tag(Int(-2)) == 2**32 - 2
    assert make_nbt_type(u64).from_tag(Long(-2**63)) == 2**63


def test_int_is_int32() -> None:
    assert make_nbt_type(int).to_tag(-5) == Int(-5)
    with pytest.raises(UnrepresentableValueError):
        make_nbt_type(int).to_tag(2**31)


def test_bool_is_not_an_int() -> None:
    with pytest.raises(UnrepresentableValueError):
        make_nbt_type(i32).check_value(True)
