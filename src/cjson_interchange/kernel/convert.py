"""Converter: generic JSON value tree -> canonical value model.

The generic tree is what the standard library ``json`` module produces
(dict, list, str, int, float, bool, None). Rules:
- Object keys re-ordered by ascending UTF-8 byte sequence
- Arrays keep their order
- Integers admitted as signed 64-bit first, then unsigned 64-bit
- Floats BANNED, whatever their value (1.5, 1.0, NaN, inf)
- Non-JSON types and non-string keys are encoding failures
"""

import logging
from typing import Any, Optional

from cjson_interchange import config
from cjson_interchange.errors import (
    EncodingError,
    InterchangeError,
    NestingDepthError,
    UnsupportedNumberError,
)
from cjson_interchange.kernel.value import (
    FALSE,
    NULL,
    TRUE,
    Array,
    CanonicalValue,
    Integer,
    Object,
    String,
    utf8_key,
)

logger = logging.getLogger(__name__)


def _child_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _item_path(path: str, index: int) -> str:
    return f"{path}[{index}]" if path else f"[{index}]"


def _check_text(text: str, path: str) -> str:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"string is not valid UTF-8: {text!r}", path=path or None) from exc
    return text


def _convert(obj: Any, path: str, depth: int, limit: int) -> CanonicalValue:
    if obj is None:
        return NULL
    # bool is an int subclass, so it must be matched first
    elif isinstance(obj, bool):
        return TRUE if obj else FALSE
    elif isinstance(obj, int):
        try:
            return Integer.from_int(obj)
        except UnsupportedNumberError:
            raise UnsupportedNumberError(obj, path=path or None) from None
    elif isinstance(obj, float):
        raise UnsupportedNumberError(obj, path=path or None)
    elif isinstance(obj, str):
        return String(_check_text(obj, path))
    elif isinstance(obj, (list, tuple)):
        if depth >= limit:
            raise NestingDepthError(limit, path=path or None)
        return Array(tuple(
            _convert(item, _item_path(path, i), depth + 1, limit)
            for i, item in enumerate(obj)
        ))
    elif isinstance(obj, dict):
        if depth >= limit:
            raise NestingDepthError(limit, path=path or None)
        entries = []
        for key, value in obj.items():
            if not isinstance(key, str):
                raise EncodingError(
                    f"object keys must be strings, got {type(key).__name__}",
                    path=path or None,
                )
            child = _child_path(path, key)
            _check_text(key, child)
            entries.append((key, _convert(value, child, depth + 1, limit)))
        entries.sort(key=lambda entry: utf8_key(entry[0]))
        return Object(tuple(entries))
    else:
        raise EncodingError(
            f"non-JSON type {type(obj).__name__}; only None, bool, int, str, "
            f"list and dict are allowed",
            path=path or None,
        )


def convert(raw: Any, max_depth: Optional[int] = None) -> CanonicalValue:
    """Convert a generic JSON value tree into a canonical value.

    Args:
        raw: Output of ``json.loads`` or an equivalent tree of builtins
        max_depth: Maximum array/object nesting; defaults to ``config.max_depth()``

    Returns:
        Freshly built canonical value tree

    Raises:
        UnsupportedNumberError: A number outside the 64-bit integer domain
        NestingDepthError: Nesting deeper than ``max_depth``
        EncodingError: Non-JSON types, non-string keys, invalid UTF-8 text
    """
    limit = config.max_depth() if max_depth is None else max_depth
    try:
        return _convert(raw, "", 0, limit)
    except InterchangeError as exc:
        logger.debug("conversion failed: %s", exc)
        raise
