"""Exception hierarchy for canonicalization and data interchange.

I/O failures from an external sink or source are not wrapped: the
``OSError`` raised by the stream reaches the caller unchanged.
"""

from typing import Any, Optional

from cjson_interchange.codes import ErrorCode


class InterchangeError(ValueError):
    """Base class for all errors raised by this package."""

    code: ErrorCode = ErrorCode.ENCODING_FAILURE

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)


class UnsupportedNumberError(InterchangeError):
    """A number is not representable as a signed or unsigned 64-bit integer."""

    code = ErrorCode.UNSUPPORTED_NUMBER

    def __init__(self, value: Any, path: Optional[str] = None):
        self.value = value
        super().__init__(
            f"only i64 and u64 are supported, got {value!r}", path=path
        )


class EncodingError(InterchangeError):
    """The value tree cannot be turned into canonical bytes."""

    code = ErrorCode.ENCODING_FAILURE


class NestingDepthError(EncodingError):
    """The value tree nests deeper than the configured limit."""

    code = ErrorCode.NESTING_TOO_DEEP

    def __init__(self, limit: int, path: Optional[str] = None):
        self.limit = limit
        super().__init__(f"nesting exceeds maximum depth of {limit}", path=path)


class DecodeError(InterchangeError):
    """Malformed JSON bytes, or data that does not match the requested type."""

    code = ErrorCode.DECODE_FAILURE
