"""
Shared fixtures for the site upload tests.
"""

from __future__ import annotations

import pytest

from tests.site_factories import FakeSiteStore


@pytest.fixture()
def store() -> FakeSiteStore:
    return FakeSiteStore()
