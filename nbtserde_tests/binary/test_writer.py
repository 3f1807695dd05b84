import pytest

from nbtserde.binary import NbtWriter
from nbtserde.codec import to_bytes
from nbtserde.exceptions import (
    MaxBytesExceededError,
    NestingTooDeepError,
    StringTooLongError,
    UnrepresentableValueError,
)
from nbtserde.serialization import Serializer
from nbtserde.tag import TagKind
from nbtserde.value import Byte, ByteArray, Compound, Int, List, String, Tag
from nbtserde_tests.unittest import TestCase, nbt_hex


class NbtWriterTestCase(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.serializer = Serializer.build_bytes_serializer()
        self.writer = NbtWriter(self.serializer)

    def written(self) -> bytes:
        return bytes(self.serializer.finalize())

    def test_structured_compound(self) -> None:
        self.writer.write_root_header('')
        with self.writer.begin_compound() as compound:
            compound.field(TagKind.BYTE, 'a').write_byte(10)
            compound.field(TagKind.SHORT, 'bc').write_short(258)
        self.assertEqual(self.written(), nbt_hex('0a 0000', '01 0001 61 0a', '02 0002 6263 0102', '00'))
        self.assertEqual(self.writer.depth, 0)

    def test_structured_list(self) -> None:
        self.writer.write_root_header('')
        with self.writer.begin_compound() as compound:
            body = compound.field(TagKind.LIST, 'l')
            with body.begin_list() as elements:
                for value in (1, 2):
                    elements.element(TagKind.SHORT).write_short(value)
                self.assertEqual(elements.count, 2)
            body = compound.field(TagKind.LIST, 'e')
            with body.begin_list():
                pass
        self.assertEqual(self.written(), nbt_hex(
            '0a 0000',
            '09 0001 6c 02 00000002 0001 0002',
            '09 0001 65 00 00000000',
            '00',
        ))

    def test_nested_lists(self) -> None:
        with self.writer.begin_list() as outer:
            for size in (1, 2):
                with outer.element(TagKind.LIST).begin_list() as inner:
                    for _ in range(size):
                        inner.element(TagKind.BYTE).write_byte(7)
        self.assertEqual(self.written(), nbt_hex('09 00000002', '01 00000001 07', '01 00000002 0707'))

    def test_list_rejects_mixed_kinds(self) -> None:
        with self.assertRaises(UnrepresentableValueError) as cm:
            with self.writer.begin_list() as elements:
                elements.element(TagKind.INT).write_int(1)
                with elements.at(1):
                    elements.element(TagKind.STRING)
        self.assertEqual(cm.exception.path, [1])
        # 5 bytes of header and 4 of the first element
        self.assertEqual(cm.exception.offset, 9)
        # nothing is written when the list fails
        self.assertEqual(self.serializer.cur_pos(), 0)

    def test_compound_end_only_on_success(self) -> None:
        with self.assertRaises(StringTooLongError):
            with self.writer.begin_compound() as compound:
                compound.field(TagKind.STRING, 's').write_string('x' * 70_000)
        self.assertEqual(self.written(), nbt_hex('08 0001 73'))

    def test_write_tag_body_rejects_non_tags(self) -> None:
        with self.assertRaises(UnrepresentableValueError):
            self.writer.write_tag_body(42)  # type: ignore[arg-type]

    def test_write_raw_byte_array(self) -> None:
        self.writer.write_raw_byte_array(b'\x01\xff')
        self.writer.write_tag_body(ByteArray.from_bytes(b'\x01\xff'))
        self.assertEqual(self.written(), nbt_hex('00000002 01ff', '00000002 01ff'))

    def test_value_error_location(self) -> None:
        root = Compound({
            'a': Compound({'b': List([String('x'), String('y' * 70_000)])}),
        })
        with self.assertRaises(StringTooLongError) as cm:
            to_bytes(root)
        self.assertEqual(cm.exception.path, ['a', 'b', 1])
        # root header, 'a' header, 'b' header, list header and the first string
        self.assertEqual(cm.exception.offset, 3 + 4 + 4 + 5 + 3)

    def test_deep_value(self) -> None:
        root = Compound()
        node = root
        for _ in range(10_000):
            child = Compound()
            node[''] = child
            node = child
        with self.assertRaises(NestingTooDeepError):
            to_bytes(root)

    def test_deep_value_within_limit(self) -> None:
        root = Compound()
        node = root
        for _ in range(999):
            child = Compound()
            node[''] = child
            node = child
        data = to_bytes(root, settings=self.settings(MAX_DEPTH=1000))
        self.assertEqual(data, bytes.fromhex('0a0000') + bytes.fromhex('0a0000') * 999 + b'\x00' * 1000)

    def test_max_document_bytes(self) -> None:
        root = Compound({'a': Int(1)})
        settings = self.settings(MAX_DOCUMENT_BYTES=12)
        self.assertEqual(len(to_bytes(root, settings=settings)), 12)
        with self.assertRaises(MaxBytesExceededError):
            to_bytes(root, settings=self.settings(MAX_DOCUMENT_BYTES=11))

    def test_max_document_bytes_with_lists(self) -> None:
        root = Compound({'l': List([Byte(1)] * 100)})
        with self.assertRaises(MaxBytesExceededError):
            to_bytes(root, settings=self.settings(MAX_DOCUMENT_BYTES=50))


def test_empty_list_keeps_its_kind() -> None:
    data = to_bytes(Compound({'l': List(elem_kind=TagKind.INT)}))
    assert data == nbt_hex('0a 0000', '09 0001 6c 03 00000000', '00')


def test_root_name() -> None:
    data = to_bytes(Compound(), root_name='a\x00')
    assert data == nbt_hex('0a 0003 61c080', '00')


@pytest.mark.parametrize('tag', [Int(1), String('x'), List([Int(1)])])
def test_root_must_be_compound(tag: Tag) -> None:
    with pytest.raises(UnrepresentableValueError):
        to_bytes(tag)
