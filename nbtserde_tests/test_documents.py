import math
from dataclasses import dataclass
from typing import Annotated, Optional

import pytest

from nbtserde import (
    BYTE_ARRAY,
    Byte,
    ByteArray,
    Compound,
    Double,
    Float,
    I8Array,
    I32Array,
    I64Array,
    Int,
    IntArray,
    List,
    Long,
    LongArray,
    Short,
    String,
    TrailingDataError,
    UnrepresentableValueError,
    f32,
    f64,
    from_bytes,
    i8,
    i16,
    i32,
    i64,
    make_nbt_type,
    read_document,
    to_bytes,
)
from nbtserde_tests.unittest import nbt_hex

ROOT_NAME = 'The root name‽'


@dataclass
class Inner:
    int: i32
    long: i64
    float: f32
    double: f64


@dataclass
class Everything:
    byte: i8
    list_of_int: list[i32]
    list_of_string: list[str]
    string: str
    inner: Inner
    int_array: I32Array
    byte_array: I8Array
    long_array: I64Array
    some_int: Optional[i32]
    none_int: Optional[i32]


def make_everything() -> Everything:
    return Everything(
        byte=i8(123),
        list_of_int=[i32(3), i32(-7), i32(5)],
        list_of_string=['foo', 'bar', 'baz'],
        string='aé日',
        inner=Inner(
            int=i32(-2**31),
            long=i64(2**63 - 1),
            float=f32(1e10),
            double=f64(-math.inf),
        ),
        int_array=[i32(5), i32(-9), i32(-2**31), i32(0), i32(2**31 - 1)],
        byte_array=[i8(0), i8(1), i8(2)],
        long_array=[i64(123), i64(456), i64(789)],
        some_int=i32(321),
        none_int=None,
    )


def make_everything_value() -> Compound:
    return Compound({
        'byte': Byte(123),
        'list_of_int': List([Int(3), Int(-7), Int(5)]),
        'list_of_string': List([String('foo'), String('bar'), String('baz')]),
        'string': String('aé日'),
        'inner': Compound({
            'int': Int(-2**31),
            'long': Long(2**63 - 1),
            'float': Float(1e10),
            'double': Double(-math.inf),
        }),
        'int_array': IntArray([5, -9, -2**31, 0, 2**31 - 1]),
        'byte_array': ByteArray([0, 1, 2]),
        'long_array': LongArray([123, 456, 789]),
        'some_int': Int(321),
    })


def test_round_trip_struct() -> None:
    data = to_bytes(make_everything(), root_name=ROOT_NAME)
    document = read_document(data, Everything)
    assert document.name == ROOT_NAME
    assert document.root == make_everything()


def test_round_trip_value() -> None:
    data = to_bytes(make_everything_value(), root_name=ROOT_NAME)
    document = read_document(data)
    assert document.name == ROOT_NAME
    assert document.root == make_everything_value()


def test_struct_to_value() -> None:
    assert from_bytes(to_bytes(make_everything())) == make_everything_value()
    assert make_nbt_type(Everything).to_tag(make_everything()) == make_everything_value()


def test_value_to_struct() -> None:
    assert from_bytes(to_bytes(make_everything_value()), Everything) == make_everything()
    assert make_nbt_type(Everything).from_tag(make_everything_value()) == make_everything()


def test_struct_and_value_encode_identically() -> None:
    assert to_bytes(make_everything()) == to_bytes(make_everything_value())


def test_root_requires_compound() -> None:
    with pytest.raises(UnrepresentableValueError):
        to_bytes(123, int)
    with pytest.raises(UnrepresentableValueError):
        to_bytes(Int(123))


def test_mismatched_array_element() -> None:
    with pytest.raises(TypeError):
        make_nbt_type(Annotated[list[i32], BYTE_ARRAY])


def test_trailing_data() -> None:
    data = to_bytes(Compound())
    with pytest.raises(TrailingDataError):
        from_bytes(data + b'\x00')


def test_concrete_scenario() -> None:
    value = Compound({'a': Int(42), 'b': List([Short(1), Short(2)])})
    expected = nbt_hex(
        '0a 0000',
        '03 0001 61 0000002a',
        '09 0001 62 02 00000002 0001 0002',
        '00',
    )
    assert to_bytes(value, root_name='') == expected

    decoded = from_bytes(expected)
    assert isinstance(decoded, Compound)
    assert list(decoded) == ['a', 'b']
    assert decoded['a'] == Int(42)
    assert decoded['b'] == List([Short(1), Short(2)])
    assert decoded == value


@dataclass
class SimpleStruct:
    a: i8
    bc: i16


def test_simple_struct_layout() -> None:
    data = to_bytes(SimpleStruct(a=i8(10), bc=i16(258)))
    assert data == nbt_hex(
        '0a 0000',  # unnamed compound
        '01 0001 61 0a',  # byte 'a' = 10
        '02 0002 6263 0102',  # short 'bc' = 258
        '00',  # end of root
    )


@dataclass
class SimpleArray:
    x: I32Array


def test_simple_array_layout() -> None:
    data = to_bytes(SimpleArray(x=[i32(1), i32(2), i32(3)]))
    assert data == nbt_hex(
        '0a 0000',
        '0b 0001 78',  # int array 'x'
        '00000003 00000001 00000002 00000003',
        '00',
    )


@dataclass
class InnerByte:
    byte: i8


@dataclass
class Outer:
    field: InnerByte


def test_nested_compounds_layout() -> None:
    data = to_bytes(Outer(field=InnerByte(byte=i8(8))))
    assert data == nbt_hex(
        '0a 0000',
        '0a 0005 6669656c64',  # compound 'field'
        '01 0004 62797465 08',  # byte 'byte' = 8
        '00',  # end of 'field'
        '00',  # end of root
    )


def test_reencode_is_stable() -> None:
    data = to_bytes(make_everything(), root_name=ROOT_NAME)
    document = read_document(data)
    assert to_bytes(document.root, root_name=document.name) == data


def test_nothing_printed(capsys: pytest.CaptureFixture[str]) -> None:
    data = to_bytes(make_everything(), root_name=ROOT_NAME)
    from_bytes(data, Everything)
    read_document(data)
    assert capsys.readouterr().out == ''
