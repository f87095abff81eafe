"""Error code constants for cjson_interchange.

These constants prevent stringly-typed error codes and let callers
branch on a failure without parsing messages.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Canonicalization and interchange error codes."""

    # Converter
    UNSUPPORTED_NUMBER = "UNSUPPORTED_NUMBER"
    NESTING_TOO_DEEP = "NESTING_TOO_DEEP"

    # Converter / Writer
    ENCODING_FAILURE = "ENCODING_FAILURE"

    # Adapter (parse / typed validation)
    DECODE_FAILURE = "DECODE_FAILURE"
