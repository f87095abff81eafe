"""cjson_interchange: canonical JSON bytes for metadata hashing and signing."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("cjson-interchange")
except PackageNotFoundError:
    __version__ = "dev"

from cjson_interchange.codes import ErrorCode
from cjson_interchange.errors import (
    DecodeError,
    EncodingError,
    InterchangeError,
    NestingDepthError,
    UnsupportedNumberError,
)
from cjson_interchange.interchange import DataInterchange, Json, canonicalize

__all__ = [
    "__version__",
    "canonicalize",
    "DataInterchange",
    "Json",
    "ErrorCode",
    "InterchangeError",
    "UnsupportedNumberError",
    "EncodingError",
    "NestingDepthError",
    "DecodeError",
]
