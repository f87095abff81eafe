"""Data interchange: typed (de)serialization plus canonical byte production.

The generic JSON layer is the standard library ``json`` module for raw bytes
and pydantic for typed records. Canonical bytes are what the signing layer
hashes, e.g. ``KEY_ID = sha256(Json.canonicalize(pub_key))``, so
``canonicalize`` is the only signature-relevant operation here.
"""

import json
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Optional, Type, TypeVar, Union

from pydantic import BaseModel, PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from cjson_interchange.errors import DecodeError, EncodingError, UnsupportedNumberError
from cjson_interchange.kernel.convert import convert
from cjson_interchange.kernel.writer import write, write_all

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A generic JSON value tree: dict / list / str / int / float / bool / None
RawValue = Any


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON constant {token}")


def _reject_non_finite(obj: Any, path: str) -> None:
    if isinstance(obj, float) and not math.isfinite(obj):
        raise UnsupportedNumberError(obj, path=path or None)
    elif isinstance(obj, dict):
        for key, value in obj.items():
            _reject_non_finite(value, f"{path}.{key}" if path else str(key))
    elif isinstance(obj, (list, tuple, set, frozenset)):
        for i, item in enumerate(obj):
            _reject_non_finite(item, f"{path}[{i}]" if path else f"[{i}]")


class DataInterchange(ABC):
    """Boundary between generic (de)serialization and canonical bytes."""

    @classmethod
    @abstractmethod
    def extension(cls) -> str:
        """File extension used when persisting this format."""

    @classmethod
    @abstractmethod
    def canonicalize(cls, raw: RawValue, max_depth: Optional[int] = None) -> bytes:
        """Deterministic bytes for hashing and signing."""

    @classmethod
    @abstractmethod
    def serialize(cls, value: Any) -> RawValue:
        """Typed value -> generic value tree."""

    @classmethod
    @abstractmethod
    def deserialize(cls, raw: RawValue, type_: Type[T]) -> T:
        """Generic value tree -> typed value."""

    @classmethod
    @abstractmethod
    def from_slice(cls, data: Union[bytes, str], type_: Optional[Type[T]] = None) -> Any:
        """Parse raw bytes, optionally into ``type_``."""

    @classmethod
    def to_writer(cls, sink: BinaryIO, value: Any, max_depth: Optional[int] = None) -> None:
        """Serialize and canonicalize ``value``, then write all bytes to ``sink``.

        Nothing reaches ``sink`` unless canonicalization succeeded.
        """
        data = cls.canonicalize(cls.serialize(value), max_depth=max_depth)
        write_all(sink, data)

    @classmethod
    def from_reader(cls, source: BinaryIO, type_: Optional[Type[T]] = None) -> Any:
        """Read ``source`` to the end and parse it like ``from_slice``."""
        return cls.from_slice(source.read(), type_)


class Json(DataInterchange):
    """JSON data interchange.

    >>> raw = Json.from_slice(b'{"foo": "bar", "baz": "quux"}')
    >>> Json.canonicalize(raw)
    b'{"baz":"quux","foo":"bar"}'
    """

    @classmethod
    def extension(cls) -> str:
        return "json"

    @classmethod
    def canonicalize(cls, raw: RawValue, max_depth: Optional[int] = None) -> bytes:
        data = write(convert(raw, max_depth=max_depth))
        logger.debug("canonicalized %d bytes", len(data))
        return data

    @classmethod
    def serialize(cls, value: Any) -> RawValue:
        """Dump a pydantic model, dataclass or builtin into a generic tree.

        JSON mode is used so the result only holds JSON builtins
        (datetimes become ISO strings, tuples become lists). JSON mode would
        also render NaN / infinities as null, so a python-mode dump is
        checked for them first and they are rejected instead.
        """
        try:
            if isinstance(value, BaseModel):
                _reject_non_finite(value.model_dump(mode="python"), "")
                return value.model_dump(mode="json")
            adapter = TypeAdapter(type(value))
            _reject_non_finite(adapter.dump_python(value), "")
            return adapter.dump_python(value, mode="json")
        except (PydanticSerializationError, PydanticSchemaGenerationError) as exc:
            raise EncodingError(f"cannot serialize {type(value).__name__}: {exc}") from exc

    @classmethod
    def deserialize(cls, raw: RawValue, type_: Type[T]) -> T:
        try:
            return TypeAdapter(type_).validate_python(raw)
        except (ValidationError, PydanticSchemaGenerationError) as exc:
            raise DecodeError(f"cannot deserialize into {_type_name(type_)}: {exc}") from exc

    @classmethod
    def from_slice(cls, data: Union[bytes, str], type_: Optional[Type[T]] = None) -> Any:
        """Parse JSON text (not necessarily canonical).

        NaN / Infinity tokens are malformed input, and so is nesting too deep
        for the parser. Without ``type_`` the generic value tree is returned.
        """
        try:
            raw = json.loads(data, parse_constant=_reject_constant)
        except ValueError as exc:
            raise DecodeError(f"malformed JSON: {exc}") from exc
        except RecursionError as exc:
            raise DecodeError(f"JSON nesting too deep to parse: {exc}") from exc
        if type_ is None:
            return raw
        return cls.deserialize(raw, type_)


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", repr(type_))


def canonicalize(raw: RawValue, max_depth: Optional[int] = None) -> bytes:
    """Shortcut for ``Json.canonicalize``."""
    return Json.canonicalize(raw, max_depth=max_depth)
