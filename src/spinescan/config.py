# ABOUTME: Runtime configuration for spinescan, read from the environment and an optional .env file.
# ABOUTME: Settings is a frozen dataclass; CLI options override the loaded values.

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from dotenv import load_dotenv

ENV_FILE: Final[str] = ".env"
DEFAULT_HOME: Final[Path] = Path.home() / ".spinescan"
DEFAULT_CACHE_PATH: Final[Path] = DEFAULT_HOME / "cache.db"
DEFAULT_LOOKUP_SOURCE: Final[str] = "openlibrary"
DEFAULT_LOG_LEVEL: Final[int] = logging.WARNING
LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Everything a scan needs to know that is not in the OCR input itself.

    Attributes:
        lookup_source: Lookup mode: a single source name, "both" or "all".
        google_api_key: Optional Google Books key (raises the anonymous quota).
        europeana_api_key: Europeana key; without it Europeana is skipped.
        barcode_mode: Treat OCR input as ISBNs rather than spine text.
        offline: Skip catalog lookups and mark every book for review.
        cache_path: SQLite lookup cache location, or None to disable caching.
        openlibrary_interval: Minimum seconds between Open Library requests.
    """

    lookup_source: str = DEFAULT_LOOKUP_SOURCE
    google_api_key: str = ""
    europeana_api_key: str = ""
    barcode_mode: bool = False
    offline: bool = False
    cache_path: Path | None = DEFAULT_CACHE_PATH
    openlibrary_interval: float = 1.0


def load_settings() -> Settings:
    """Load settings from SPINESCAN_* environment variables.

    A `.env` file in the working directory is read first; variables already
    set in the environment take precedence over it.
    """
    load_dotenv(ENV_FILE)
    cache_env = os.getenv("SPINESCAN_CACHE_PATH")
    return Settings(
        lookup_source=os.getenv("SPINESCAN_LOOKUP_SOURCE", DEFAULT_LOOKUP_SOURCE),
        google_api_key=os.getenv("SPINESCAN_GOOGLE_API_KEY", ""),
        europeana_api_key=os.getenv("SPINESCAN_EUROPEANA_API_KEY", ""),
        cache_path=Path(cache_env).expanduser() if cache_env else DEFAULT_CACHE_PATH,
    )


def configure_logging(level: int = DEFAULT_LOG_LEVEL) -> None:
    """Configure the root logger for CLI runs."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
