"""Hash helpers over canonical JSON bytes.

Digests are computed over ``Json.canonicalize`` output only, so two
semantically equal documents always hash the same. Signing and verification
live in the trust layer; these helpers only produce the digests it needs.
"""

import hashlib
from pathlib import Path
from typing import Any, Optional, Union

from cjson_interchange.interchange import Json, RawValue


def canonical_sha256(raw: RawValue, max_depth: Optional[int] = None) -> str:
    """Compute SHA256 of the canonical form of a generic value tree.

    Returns:
        SHA256 hash as hex string (no prefix)

    Raises:
        UnsupportedNumberError: If the tree contains floats or out-of-range integers
        EncodingError: If the tree contains non-JSON types
    """
    data = Json.canonicalize(raw, max_depth=max_depth)
    return hashlib.sha256(data).hexdigest()


def canonical_digest(raw: RawValue, max_depth: Optional[int] = None) -> str:
    """Same as ``canonical_sha256`` but prefixed with "sha256:"."""
    return f"sha256:{canonical_sha256(raw, max_depth=max_depth)}"


def key_id(public_key: Any) -> str:
    """Key identifier: hex ``sha256(cjson(pub_key))``.

    ``public_key`` is a ``{"type", "scheme", "value"}`` mapping or any typed
    record that serializes to one; its content is not validated here.
    """
    return canonical_sha256(Json.serialize(public_key))


def compute_canonical_json_sha256(path: Union[str, Path]) -> str:
    """Compute SHA256 of a JSON file's canonical form.

    Whitespace and key order in the file do not affect the result.
    """
    data = Path(path).read_bytes()
    return canonical_sha256(Json.from_slice(data))
