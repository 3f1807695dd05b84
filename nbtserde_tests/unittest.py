import random
import secrets
from typing import Any, Optional
from unittest import TestCase as _BaseTestCase

from structlog import get_logger

from nbtserde.conf import NbtSettings, get_global_settings
from nbtserde.serialization import Deserializer
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
    Tag,
)

logger = get_logger()


def nbt_hex(*parts: str) -> bytes:
    """Join hex fragments, spaces are ignored, so a layout can be written one field at a time."""
    return bytes.fromhex(''.join(parts).replace(' ', ''))


class TestCase(_BaseTestCase):
    seed_config: Optional[int] = None

    def setUp(self) -> None:
        self.log = logger.new()
        self.seed = secrets.randbits(64) if self.seed_config is None else self.seed_config
        self.log.info('set seed', seed=self.seed)
        self.rng = random.Random(self.seed)
        self._settings = get_global_settings()

    def settings(self, **kwargs: Any) -> NbtSettings:
        """The global settings with some values replaced."""
        return self._settings.model_copy(update=kwargs)

    def deserializer(self, data: bytes) -> Deserializer:
        return Deserializer.build_bytes_deserializer(data)

    def random_tag(self, kind: Optional[TagKind] = None, *, depth: int = 3) -> Tag:
        """A random value tree node, containers go at most `depth` levels deep."""
        kinds = [k for k in TagKind if k is not TagKind.END]
        if depth <= 0:
            kinds = [k for k in kinds if not k.is_container()]
        if kind is None:
            kind = self.rng.choice(kinds)
        rng = self.rng
        match kind:
            case TagKind.BYTE:
                return Byte(rng.randint(-2**7, 2**7 - 1))
            case TagKind.SHORT:
                return Short(rng.randint(-2**15, 2**15 - 1))
            case TagKind.INT:
                return Int(rng.randint(-2**31, 2**31 - 1))
            case TagKind.LONG:
                return Long(rng.randint(-2**63, 2**63 - 1))
            case TagKind.FLOAT:
                return Float(rng.uniform(-1e6, 1e6))
            case TagKind.DOUBLE:
                return Double(rng.uniform(-1e300, 1e300))
            case TagKind.STRING:
                return String(self.random_text())
            case TagKind.BYTE_ARRAY:
                return ByteArray([rng.randint(-2**7, 2**7 - 1) for _ in range(rng.randint(0, 8))])
            case TagKind.INT_ARRAY:
                return IntArray([rng.randint(-2**31, 2**31 - 1) for _ in range(rng.randint(0, 8))])
            case TagKind.LONG_ARRAY:
                return LongArray([rng.randint(-2**63, 2**63 - 1) for _ in range(rng.randint(0, 8))])
            case TagKind.LIST:
                elem_kind = rng.choice(kinds)
                items = [self.random_tag(elem_kind, depth=depth - 1) for _ in range(rng.randint(0, 4))]
                return List(items, elem_kind=elem_kind)
            case TagKind.COMPOUND:
                entries = [(self.random_text(), self.random_tag(depth=depth - 1)) for _ in range(rng.randint(0, 4))]
                return Compound(entries)
        raise AssertionError(kind)

    def random_text(self) -> str:
        alphabet = 'abcxyz_\x00é€😎'
        return ''.join(self.rng.choice(alphabet) for _ in range(self.rng.randint(0, 6)))
