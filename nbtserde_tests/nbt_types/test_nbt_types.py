import math
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import NamedTuple, Optional, TypeVar

from nbtserde.exceptions import MissingFieldError, TypeMismatchError, UnrepresentableValueError
from nbtserde.nbt_types import DictNBTType, NBTType, OptionalNBTType, make_nbt_type
from nbtserde.tag import TagKind
from nbtserde.types import I8Array, f32, i8, i16, i64
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
    Short,
    String,
    Tag,
)
from nbtserde_tests.unittest import TestCase, nbt_hex

T = TypeVar('T')


class Color(Enum):
    RED = 'r'
    GREEN = 'g'


class Level(IntEnum):
    LOW = 1
    HIGH = 2


@dataclass
class Circle:
    radius: float


@dataclass
class Square:
    side: float


@dataclass
class Drawing:
    shapes: list[Circle | Square]
    background: Optional[Circle | Square] = None


class Point(NamedTuple):
    x: i16
    y: i16
    label: str = ''


@dataclass
class WithF32:
    x: f32


@dataclass
class Profile:
    name: str
    count: i8 = i8(3)
    tags: list[str] = field(default_factory=list)
    nick: Optional[str] = None
    alias: Optional[str] = 'anonymous'
    cached: int = field(default=0, init=False)


class NBTTypesTestCase(TestCase):
    def _run_test(self, type_: type[T], value: T, expected: Optional[Tag] = None) -> None:
        nbt_type = make_nbt_type(type_)
        tag = nbt_type.to_tag(value)
        if expected is not None:
            self.assertEqual(tag, expected)
        self.assertEqual(nbt_type.from_tag(tag), value)

    def test_scalars(self) -> None:
        self._run_test(i8, -3, Byte(-3))
        self._run_test(i16, 300, Short(300))
        self._run_test(i64, -2**63, Long(-2**63))
        self._run_test(float, 0.1, Double(0.1))
        self._run_test(str, '', String(''))
        self._run_test(str, 'áéíóúçãõ', String('áéíóúçãõ'))

    def test_f32(self) -> None:
        nbt_type = make_nbt_type(f32)
        self.assertEqual(nbt_type.to_tag(1.5), Float(1.5))
        self.assertEqual(nbt_type.to_tag(-2), Float(-2.0))
        with self.assertRaises(UnrepresentableValueError):
            nbt_type.to_tag(1e39)
        with self.assertRaises(UnrepresentableValueError):
            nbt_type.to_tag(10**400)

    def test_f32_rejects_rounding(self) -> None:
        nbt_type = make_nbt_type(f32)
        with self.assertRaises(UnrepresentableValueError):
            nbt_type.to_tag(f32(0.1))
        with self.assertRaises(UnrepresentableValueError):
            nbt_type.to_tag(2**24 + 1)
        self.assertEqual(nbt_type.to_tag(Float(0.1).value), Float(0.1))
        self.assertTrue(math.isnan(nbt_type.from_tag(nbt_type.to_tag(math.nan))))
        self.assertEqual(nbt_type.from_tag(nbt_type.to_tag(-math.inf)), -math.inf)

    def test_f32_field_round_trip(self) -> None:
        nbt_type = make_nbt_type(WithF32)
        value = WithF32(x=f32(1.5))
        self.assertEqual(nbt_type.from_bytes(nbt_type.to_bytes(value)), value)
        with self.assertRaises(UnrepresentableValueError) as cm:
            nbt_type.to_bytes(WithF32(x=f32(0.1)))
        self.assertEqual(cm.exception.path, ['x'])

    def test_float_accepts_int(self) -> None:
        self.assertEqual(make_nbt_type(float).to_tag(2), Double(2.0))

    def test_bool(self) -> None:
        self._run_test(bool, True, Byte(1))
        self._run_test(bool, False, Byte(0))
        # any nonzero byte is True
        self.assertIs(make_nbt_type(bool).from_tag(Byte(-7)), True)
        with self.assertRaises(UnrepresentableValueError):
            make_nbt_type(bool).to_tag(1)

    def test_bytes(self) -> None:
        self._run_test(bytes, b'', ByteArray([]))
        self._run_test(bytes, b'\x01\xff', ByteArray([1, -1]))
        self.assertEqual(make_nbt_type(bytearray).to_tag(bytearray(b'\x80')), ByteArray([-128]))

    def test_arrays(self) -> None:
        from nbtserde.types import I32Array, I64Array
        self._run_test(I8Array, [1, -1], ByteArray([1, -1]))
        self._run_test(I32Array, [2**31 - 1], IntArray([2**31 - 1]))
        self._run_test(I64Array, [], None)
        with self.assertRaises(UnrepresentableValueError):
            make_nbt_type(I8Array).to_tag([128])
        with self.assertRaises(UnrepresentableValueError):
            make_nbt_type(I8Array).to_tag([True])

    def test_array_annotations(self) -> None:
        from typing import Annotated

        from nbtserde.types import BYTE_ARRAY, INT_ARRAY
        nbt_type = make_nbt_type(Annotated[tuple[int, ...], INT_ARRAY])
        self.assertEqual(nbt_type.from_tag(IntArray([1, 2])), (1, 2))
        with self.assertRaises(TypeError):
            make_nbt_type(Annotated[list[int], BYTE_ARRAY])
        with self.assertRaises(TypeError):
            make_nbt_type(Annotated[list[i8], 'not a hint'])
        with self.assertRaises(TypeError):
            make_nbt_type(Annotated[list[i8], BYTE_ARRAY, BYTE_ARRAY])
        with self.assertRaises(TypeError):
            make_nbt_type(Annotated[set[i8], BYTE_ARRAY])

    def test_lists(self) -> None:
        self._run_test(list[i16], [1, 2], List([Short(1), Short(2)]))
        self._run_test(list[list[str]], [['a'], []], List([List([String('a')]), List()]))
        # empty lists are written with the END element kind
        self.assertEqual(make_nbt_type(list[int]).to_tag([]), List())
        # any element kind is fine for an empty list
        self.assertEqual(make_nbt_type(list[int]).from_tag(List(elem_kind=TagKind.STRING)), [])
        with self.assertRaises(TypeMismatchError):
            make_nbt_type(list[int]).from_tag(List([String('x')]))
        with self.assertRaises(TypeError):
            make_nbt_type(list)

    def test_heterogeneous_list(self) -> None:
        nbt_type = make_nbt_type(list[Tag])
        self.assertEqual(nbt_type.to_tag([Int(1), Int(2)]), List([Int(1), Int(2)]))
        with self.assertRaises(UnrepresentableValueError) as cm:
            nbt_type.to_tag([Int(1), String('x')])
        self.assertEqual(cm.exception.path, [1])

    def test_tuples(self) -> None:
        self._run_test(tuple[str, ...], ('a', 'b'), List([String('a'), String('b')]))
        self._run_test(tuple[i8, i8], (1, 2), List([Byte(1), Byte(2)]))
        with self.assertRaises(TypeError):
            make_nbt_type(tuple[int, str])
        with self.assertRaises(UnrepresentableValueError):
            make_nbt_type(tuple[i8, i8]).to_tag((1, 2, 3))
        with self.assertRaises(TypeMismatchError):
            make_nbt_type(tuple[i8, i8]).from_tag(List([Byte(1)]))

    def test_dicts(self) -> None:
        self._run_test(dict[str, int], {'b': 1, 'a': 2}, Compound({'b': Int(1), 'a': Int(2)}))
        self._run_test(OrderedDict[str, str], OrderedDict(x='y'), Compound({'x': String('y')}))
        self.assertIsInstance(make_nbt_type(OrderedDict[str, int]), DictNBTType)
        with self.assertRaises(TypeError):
            make_nbt_type(dict[int, int])
        with self.assertRaises(UnrepresentableValueError):
            make_nbt_type(dict[str, int]).to_tag({1: 1})  # type: ignore[dict-item]

    def test_dict_keeps_order(self) -> None:
        data = make_nbt_type(dict[str, int]).to_bytes({'z': 1, 'a': 2})
        self.assertEqual(data, nbt_hex('0a 0000', '03 0001 7a 00000001', '03 0001 61 00000002', '00'))

    def test_enums(self) -> None:
        self._run_test(Color, Color.GREEN, String('GREEN'))
        self._run_test(Level, Level.HIGH, String('HIGH'))
        with self.assertRaises(TypeMismatchError):
            make_nbt_type(Color).from_tag(String('BLUE'))
        with self.assertRaises(UnrepresentableValueError):
            make_nbt_type(Color).to_tag('RED')  # type: ignore[arg-type]

    def test_tagged_unions(self) -> None:
        self._run_test(
            Circle | Square,
            Square(2.0),
            Compound({'Square': Compound({'side': Double(2.0)})}),
        )
        nbt_type = make_nbt_type(Circle | Square)
        with self.assertRaises(TypeMismatchError):
            nbt_type.from_tag(Compound())
        with self.assertRaises(TypeMismatchError):
            nbt_type.from_tag(Compound({'Triangle': Compound()}))
        with self.assertRaises(TypeMismatchError):
            nbt_type.from_tag(Compound({
                'Circle': Compound({'radius': Double(1.0)}),
                'Square': Compound({'side': Double(1.0)}),
            }))
        with self.assertRaises(UnrepresentableValueError):
            nbt_type.to_tag(3)  # type: ignore[arg-type]

    def test_union_of_builtins(self) -> None:
        nbt_type = make_nbt_type(int | str)
        self.assertEqual(nbt_type.to_tag(1), Compound({'int': Int(1)}))
        self.assertEqual(nbt_type.to_tag('1'), Compound({'str': String('1')}))
        self.assertEqual(nbt_type.from_tag(Compound({'str': String('x')})), 'x')
        # bool is also an int, but it has its own variant
        self.assertEqual(make_nbt_type(int | bool).to_tag(True), Compound({'bool': Byte(1)}))

    def test_drawing(self) -> None:
        self._run_test(Drawing, Drawing([Circle(1.0), Square(2.0)], Circle(3.0)))
        self._run_test(Drawing, Drawing([]), Compound({'shapes': List()}))

    def test_optional_fields(self) -> None:
        nbt_type = make_nbt_type(Profile)
        tag = nbt_type.to_tag(Profile('x', nick=None, alias=None))
        # None fields are left out
        self.assertEqual(tag, Compound({'name': String('x'), 'count': Byte(3), 'tags': List()}))
        # a missing field with a default gets the default, even an optional one
        self.assertEqual(nbt_type.from_tag(tag), Profile('x'))
        self.assertEqual(nbt_type.from_tag(Compound({'name': String('y')})), Profile('y'))

    def test_missing_field(self) -> None:
        with self.assertRaises(MissingFieldError) as cm:
            make_nbt_type(Profile).from_tag(Compound({'count': Byte(1)}))
        self.assertEqual(cm.exception.field_name, 'name')

    def test_unknown_fields_are_skipped(self) -> None:
        tag = Compound({
            'name': String('x'),
            'extra': Compound({'deep': List([Int(1)])}),
            'count': Byte(9),
        })
        self.assertEqual(make_nbt_type(Profile).from_tag(tag), Profile('x', count=i8(9)))

    def test_field_type_mismatch(self) -> None:
        with self.assertRaises(TypeMismatchError) as cm:
            make_nbt_type(Profile).from_tag(Compound({'name': String('x'), 'count': Int(1)}))
        self.assertIs(cm.exception.expected, TagKind.BYTE)
        self.assertIs(cm.exception.actual, TagKind.INT)
        self.assertEqual(cm.exception.path, ['count'])

    def test_field_value_error(self) -> None:
        with self.assertRaises(UnrepresentableValueError) as cm:
            make_nbt_type(Profile).to_tag(Profile('x', tags=['a', 1]))  # type: ignore[list-item]
        self.assertEqual(cm.exception.path, ['tags', 1])

    def test_init_false_fields_are_not_encoded(self) -> None:
        value = Profile('x')
        value.cached = 10
        self.assertNotIn('cached', make_nbt_type(Profile).to_tag(value))

    def test_namedtuple(self) -> None:
        self._run_test(Point, Point(1, -2, 'p'), Compound({'x': Short(1), 'y': Short(-2), 'label': String('p')}))
        self.assertEqual(make_nbt_type(Point).from_tag(Compound({'x': Short(0), 'y': Short(0)})), Point(0, 0))

    def test_optional_outside_record(self) -> None:
        nbt_type = make_nbt_type(Optional[int])
        self.assertIsInstance(nbt_type, OptionalNBTType)
        self.assertEqual(nbt_type.to_tag(1), Int(1))
        with self.assertRaises(UnrepresentableValueError):
            nbt_type.to_tag(None)
        with self.assertRaises(UnrepresentableValueError):
            make_nbt_type(list[Optional[int]]).to_tag([1, None])

    def test_tags(self) -> None:
        self._run_test(Tag, Int(1), Int(1))
        self._run_test(Compound, Compound({'a': List()}))
        with self.assertRaises(UnrepresentableValueError):
            make_nbt_type(Compound).to_tag(Int(1))  # type: ignore[arg-type]
        with self.assertRaises(TypeMismatchError):
            make_nbt_type(Int).from_tag(Long(1))

    def test_check_value(self) -> None:
        nbt_type = make_nbt_type(dict[str, list[i8]])
        nbt_type.check_value({'a': [1, 2]})
        with self.assertRaises(UnrepresentableValueError):
            nbt_type.check_value({'a': [1, 200]})

    def test_unsupported_types(self) -> None:
        for type_ in (set[int], object, 'int', complex):
            with self.assertRaises(TypeError, msg=repr(type_)):
                make_nbt_type(type_)  # type: ignore[arg-type]

    def test_custom_type_map(self) -> None:
        from nbtserde.nbt_types import DEFAULT_TYPE_MAP, Int64NBTType
        type_map = NBTType.TypeMap(
            DEFAULT_TYPE_MAP.alias_map,
            {**DEFAULT_TYPE_MAP.nbt_types_map, int: Int64NBTType},
        )
        nbt_type: NBTType[list[int]] = NBTType.from_type(list[int], type_map=type_map)
        self.assertEqual(nbt_type.to_tag([1]), List([Long(1)]))
