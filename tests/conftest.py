"""Root conftest -- shared fixtures for all tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from dotenv import load_dotenv

from core.config import get_settings

# Load .env at the root so local overrides apply to the whole run.
load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=False)


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop the cached Settings so monkeypatched env vars take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def legacy_icon_html() -> str:
    """A post body with one legacy smiley and one ordinary image."""
    return (
        '<p>Hello <img src="https://example.com/wp-includes/images/smilies/icon_smile.gif" alt=":)">'
        ' and <img src="https://example.com/uploads/photo.jpg" alt="photo"></p>'
    )
