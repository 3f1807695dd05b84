import math

import pytest

from nbtserde.exceptions import UnrepresentableValueError
from nbtserde.tag import TagKind
from nbtserde.value import (
    Byte,
    ByteArray,
    Compound,
    Double,
    Float,
    Int,
    IntArray,
    List,
    Long,
    LongArray,
    Short,
    String,
)


@pytest.mark.parametrize('cls, bits', [(Byte, 8), (Short, 16), (Int, 32), (Long, 64)])
def test_int_ranges(cls: type, bits: int) -> None:
    low, high = -2**(bits - 1), 2**(bits - 1) - 1
    assert cls(low).value == low
    assert cls(high).value == high
    with pytest.raises(UnrepresentableValueError):
        cls(high + 1)
    with pytest.raises(UnrepresentableValueError):
        cls(low - 1)
    with pytest.raises(UnrepresentableValueError):
        cls(True)


def test_array_ranges() -> None:
    assert ByteArray([-128, 127]).values == [-128, 127]
    with pytest.raises(UnrepresentableValueError):
        ByteArray([128])
    with pytest.raises(UnrepresentableValueError):
        IntArray([2**31])
    with pytest.raises(UnrepresentableValueError):
        LongArray([2**63])
    assert len(LongArray([1, 2, 3])) == 3
    assert list(IntArray((1, 2))) == [1, 2]


def test_float_rounding() -> None:
    assert Float(0.1).value != 0.1
    assert Float(0.1) == Float(0.10000000149011612)
    assert Float(math.inf).value == math.inf
    assert math.isnan(Float(math.nan).value)
    assert Double(0.1).value == 0.1


def test_string() -> None:
    assert str(String('abc')) == 'abc'
    with pytest.raises(UnrepresentableValueError):
        String(b'abc')  # type: ignore[arg-type]


def test_tags_are_immutable() -> None:
    with pytest.raises(AttributeError):
        Int(1).value = 2  # type: ignore[misc]


def test_list_infers_kind() -> None:
    lst = List()
    assert lst.elem_kind is TagKind.END
    lst.append(Int(1))
    assert lst.elem_kind is TagKind.INT
    del lst[0]
    # the kind is kept once known
    assert lst.elem_kind is TagKind.INT
    with pytest.raises(UnrepresentableValueError):
        lst.append(Short(1))


def test_list_is_homogeneous() -> None:
    lst = List([Int(1), Int(2)])
    with pytest.raises(UnrepresentableValueError, match='list of INT cannot hold STRING'):
        lst.append(String('x'))
    with pytest.raises(UnrepresentableValueError):
        lst[0] = Long(1)
    with pytest.raises(UnrepresentableValueError):
        lst.insert(0, Byte(1))
    with pytest.raises(UnrepresentableValueError):
        lst[0:1] = [Int(5), Short(6)]
    with pytest.raises(UnrepresentableValueError):
        List([Int(1), Long(2)])
    with pytest.raises(UnrepresentableValueError):
        List([Int(1)], elem_kind=TagKind.LONG)
    with pytest.raises(UnrepresentableValueError):
        lst.append(1)  # type: ignore[arg-type]
    assert lst == List([Int(1), Int(2)])

    # a rejected assignment leaves an empty list untouched, element kind included
    empty = List()
    with pytest.raises(UnrepresentableValueError, match='list of SHORT cannot hold INT'):
        empty[:] = [Short(1), Short(2), Int(3)]
    assert empty == List()
    assert empty.elem_kind is TagKind.END
    with pytest.raises(IndexError):
        empty[0] = Short(1)
    assert empty.elem_kind is TagKind.END
    empty[:] = [Short(1), Short(2)]
    assert empty == List([Short(1), Short(2)])


def test_list_operations() -> None:
    lst = List([Int(1), Int(2), Int(3)])
    lst[0] = Int(10)
    lst[1:] = [Int(20)]
    assert list(lst) == [Int(10), Int(20)]
    assert lst[-1:] == List([Int(20)])
    lst.extend([Int(30), Int(40)])
    assert lst.pop() == Int(40)
    assert len(lst) == 3
    assert Int(30) in lst


def test_list_equality() -> None:
    assert List([Int(1)]) == List([Int(1)])
    assert List([Int(1)]) != List([Long(1)])
    assert List() != List(elem_kind=TagKind.INT)
    assert List([Int(1), Int(2)]) != List([Int(2), Int(1)])


def test_compound() -> None:
    compound = Compound([('b', Int(1)), ('a', Int(2))])
    compound['c'] = String('x')
    assert list(compound) == ['b', 'a', 'c']
    compound['b'] = Int(3)
    # replacing keeps the position
    assert list(compound.items()) == [('b', Int(3)), ('a', Int(2)), ('c', String('x'))]
    del compound['a']
    assert 'a' not in compound
    assert compound.get('a') is None
    assert compound.get('c') == String('x')
    assert len(compound) == 2
    with pytest.raises(UnrepresentableValueError):
        compound[1] = Int(1)  # type: ignore[index]
    with pytest.raises(UnrepresentableValueError):
        compound['x'] = 1  # type: ignore[assignment]


def test_compound_equality_ignores_order() -> None:
    assert Compound({'a': Int(1), 'b': Int(2)}) == Compound({'b': Int(2), 'a': Int(1)})
    assert Compound({'a': Int(1)}) != Compound({'a': Long(1)})
    assert Compound({'a': Int(1)}) != Compound({'a': Int(1), 'b': Int(1)})


def test_repr() -> None:
    value = Compound({'a': List([Byte(1)])})
    assert repr(value) == "Compound({'a': List([Byte(value=1)], elem_kind=<TagKind.BYTE: 1>)})"
