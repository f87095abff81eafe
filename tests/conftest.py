"""Pytest configuration for tests.

No sys.path hacks - tests should import from the installed cjson_interchange package.
"""

import pytest

from cjson_interchange.config import MAX_DEPTH_ENV


@pytest.fixture(autouse=True)
def _default_depth_limit(monkeypatch):
    """Keep a developer's CJSON_MAX_DEPTH from leaking into the suite."""
    monkeypatch.delenv(MAX_DEPTH_ENV, raising=False)
