"""Root conftest — shared fixtures for all tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from dotenv import load_dotenv

from core.config import get_settings

# Load .env at the root so local PUBLISHER_* overrides apply to every test.
load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=False)


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop the cached Settings so monkeypatched env vars take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
