"""Environment-driven settings."""

from __future__ import annotations

import os

DEFAULT_MAX_DEPTH = 128
MAX_DEPTH_ENV = "CJSON_MAX_DEPTH"


def _int_from_env(var_name: str, default: int) -> int:
    raw = os.getenv(var_name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def max_depth() -> int:
    """Nesting limit for arrays/objects, read on every call so tests can patch the env."""
    return _int_from_env(MAX_DEPTH_ENV, DEFAULT_MAX_DEPTH)
