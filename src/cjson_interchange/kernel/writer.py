"""Writer: canonical value model -> bytes.

Grammar (no whitespace anywhere, no trailing newline):
- null / true / false
- integers as minimal decimal digits with optional leading '-'
- strings as JSON string literals, UTF-8, only '"', '\\' and control
  characters escaped
- arrays as [a,b,c], objects as {"k":v,...} in stored key order
"""

import json
from typing import BinaryIO, Optional

from cjson_interchange.errors import EncodingError
from cjson_interchange.kernel.value import (
    Array,
    Bool,
    CanonicalValue,
    Integer,
    Null,
    Object,
    String,
)


def _write_string(text: str, buf: bytearray) -> None:
    # The stdlib encoder escapes '"', '\\' and U+0000..U+001F (\b \f \n \r \t
    # short forms, lowercase \u00XX otherwise) and leaves everything else alone.
    literal = json.dumps(text, ensure_ascii=False)
    try:
        buf += literal.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"string is not valid UTF-8: {text!r}") from exc


def _write(value: CanonicalValue, buf: bytearray) -> None:
    if isinstance(value, Null):
        buf += b"null"
    elif isinstance(value, Bool):
        buf += b"true" if value.value else b"false"
    elif isinstance(value, Integer):
        buf += str(value.value).encode("ascii")
    elif isinstance(value, String):
        _write_string(value.value, buf)
    elif isinstance(value, Array):
        buf += b"["
        for i, item in enumerate(value.items):
            if i:
                buf += b","
            _write(item, buf)
        buf += b"]"
    elif isinstance(value, Object):
        buf += b"{"
        for i, (key, item) in enumerate(value.entries):
            if i:
                buf += b","
            _write_string(key, buf)
            buf += b":"
            _write(item, buf)
        buf += b"}"
    else:
        # convert() never produces anything else
        raise TypeError(f"not a canonical value: {type(value).__name__}")


def write(value: CanonicalValue, sink: Optional[bytearray] = None) -> bytes:
    """Serialize a canonical value.

    Args:
        value: Canonical value tree (see ``kernel.value``)
        sink: Growable buffer to append to; a fresh one is used if omitted

    Returns:
        The bytes written by this call
    """
    buf = bytearray()
    _write(value, buf)
    if sink is not None:
        sink += buf
    return bytes(buf)


def write_all(stream: BinaryIO, data: bytes) -> None:
    """Hand the complete byte sequence to a binary stream.

    Raw streams may accept fewer bytes than offered; the remainder is
    re-offered until everything is written. Sinks whose ``write`` returns
    None are taken to have consumed everything. OSError propagates unchanged.
    """
    written = stream.write(data)
    while written is not None and written < len(data):
        if written == 0:
            raise OSError("failed to write whole buffer")
        data = data[written:]
        written = stream.write(data)
