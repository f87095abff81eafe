"""Canonical value model.

A tagged variant restricted to the canonical domain:
null, bool, 64-bit integer, string, array, object.

Instances are frozen and hold tuples only. A tree is built fresh by
``convert()`` for one canonicalize call, consumed by the writer, then dropped.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from cjson_interchange.errors import EncodingError, UnsupportedNumberError

I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1
U64_MAX = 2 ** 64 - 1


class IntKind(str, Enum):
    I64 = "i64"
    U64 = "u64"


def utf8_key(text: str) -> bytes:
    """Sort key for object keys: the UTF-8 byte sequence of the key."""
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"object key is not valid UTF-8: {text!r}") from exc


@dataclass(frozen=True)
class Null:
    pass


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class Integer:
    """An integer tagged with the 64-bit range it was admitted under."""
    value: int
    kind: IntKind

    def __post_init__(self):
        if self.kind is IntKind.I64:
            ok = I64_MIN <= self.value <= I64_MAX
        else:
            ok = I64_MAX < self.value <= U64_MAX
        if not ok:
            raise UnsupportedNumberError(self.value)

    @classmethod
    def from_int(cls, value: int) -> "Integer":
        """Signed 64-bit first, then unsigned 64-bit."""
        if I64_MIN <= value <= I64_MAX:
            return cls(value, IntKind.I64)
        if 0 <= value <= U64_MAX:
            return cls(value, IntKind.U64)
        raise UnsupportedNumberError(value)


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class Array:
    items: Tuple["CanonicalValue", ...] = ()


@dataclass(frozen=True)
class Object:
    """Key/value entries in strictly ascending UTF-8 key order."""
    entries: Tuple[Tuple[str, "CanonicalValue"], ...] = ()

    def __post_init__(self):
        previous = None
        for key, _ in self.entries:
            current = utf8_key(key)
            if previous is not None and current <= previous:
                raise EncodingError(
                    f"object keys must be unique and in ascending byte order, "
                    f"got {key!r} after {previous.decode('utf-8')!r}"
                )
            previous = current

    def keys(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self.entries)


CanonicalValue = Union[Null, Bool, Integer, String, Array, Object]

NULL = Null()
TRUE = Bool(True)
FALSE = Bool(False)
