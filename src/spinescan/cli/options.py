# ABOUTME: Shared Click options for spinescan CLI commands.
# ABOUTME: Provides reusable decorators for lookup, cache, and output flags, and settings assembly.

from dataclasses import replace
from pathlib import Path

import click

from spinescan.config import DEFAULT_CACHE_PATH, Settings, load_settings
from spinescan.metadata.resolver import LOOKUP_MODES

lookup_option = click.option(
    "--lookup",
    "lookup_source",
    type=click.Choice(list(LOOKUP_MODES)),
    default=None,
    help="Catalog(s) to search (default: $SPINESCAN_LOOKUP_SOURCE or openlibrary).",
)

offline_option = click.option(
    "--offline",
    is_flag=True,
    default=False,
    help="Skip catalog lookups; every book is marked for review.",
)

cache_option = click.option(
    "--cache",
    "cache_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Lookup cache database (default: {DEFAULT_CACHE_PATH})",
)

no_cache_option = click.option(
    "--no-cache",
    is_flag=True,
    default=False,
    help="Do not read or write the lookup cache.",
)

json_option = click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)


def build_settings(
    *,
    lookup_source: str | None = None,
    offline: bool = False,
    cache_path: Path | None = None,
    no_cache: bool = False,
    barcode_mode: bool = False,
) -> Settings:
    """Environment settings with command-line overrides applied."""
    settings = load_settings()
    overrides: dict[str, object] = {"offline": offline, "barcode_mode": barcode_mode}
    if lookup_source:
        overrides["lookup_source"] = lookup_source
    if no_cache:
        overrides["cache_path"] = None
    elif cache_path is not None:
        overrides["cache_path"] = cache_path
    return replace(settings, **overrides)
