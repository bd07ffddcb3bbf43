# ABOUTME: Shared pytest fixtures for spinescan tests.
# ABOUTME: Provides OCR input files, offline/online settings, and isolation from the user's environment.

import json
from pathlib import Path

import pytest

from spinescan.config import Settings
from tests.fixtures.vision_responses import SHELF_RESPONSE

SHELF_TEXT = "THE GREAT GATSBY\nF. Scott Fitzgerald\n---\n1984\nGeorge Orwell\n"


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from real API keys and the user's cache database."""
    for name in (
        "SPINESCAN_LOOKUP_SOURCE",
        "SPINESCAN_GOOGLE_API_KEY",
        "SPINESCAN_EUROPEANA_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SPINESCAN_CACHE_PATH", str(tmp_path / "cache" / "lookups.db"))


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def offline_settings() -> Settings:
    """Settings that never touch the network or disk cache."""
    return Settings(offline=True, cache_path=None)


@pytest.fixture
def online_settings() -> Settings:
    """Settings for lookups without caching or Open Library pacing."""
    return Settings(cache_path=None, openlibrary_interval=0.0)


@pytest.fixture
def shelf_text_file(tmp_path: Path) -> Path:
    """A plain-text OCR dump with two marker-separated spines."""
    path = tmp_path / "shelf.txt"
    path.write_text(SHELF_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def shelf_json_file(tmp_path: Path) -> Path:
    """A structured OCR response with positioned blocks for two spines."""
    path = tmp_path / "shelf.json"
    path.write_text(json.dumps(SHELF_RESPONSE), encoding="utf-8")
    return path


@pytest.fixture
def corrupt_json_file(tmp_path: Path) -> Path:
    """A .json OCR dump that is not valid JSON."""
    path = tmp_path / "corrupt.json"
    path.write_text("{this is not json", encoding="utf-8")
    return path
