# ABOUTME: The `spinescan cache` command group for maintaining the lookup cache.
# ABOUTME: Clears all entries or purges only the expired ones.

from pathlib import Path

import click
from rich.console import Console

from spinescan.cli.options import cache_option
from spinescan.config import load_settings
from spinescan.metadata.cache import LookupCache

console = Console()


def _open_cache(cache_path: Path | None) -> LookupCache | None:
    path = cache_path or load_settings().cache_path
    return LookupCache(path) if path is not None else None


@click.group()
def cache() -> None:
    """Maintain the catalog lookup cache."""


@cache.command("clear")
@cache_option
def clear(cache_path: Path | None) -> None:
    """Remove every cached lookup."""
    lookup_cache = _open_cache(cache_path)
    if lookup_cache is None:
        console.print("[yellow]Caching is disabled.[/yellow]")
        return
    removed = lookup_cache.clear()
    lookup_cache.close()
    console.print(f"Removed {removed} cached lookup(s).")


@cache.command("purge")
@cache_option
def purge(cache_path: Path | None) -> None:
    """Remove cached lookups older than a week."""
    lookup_cache = _open_cache(cache_path)
    if lookup_cache is None:
        console.print("[yellow]Caching is disabled.[/yellow]")
        return
    removed = lookup_cache.purge_expired()
    lookup_cache.close()
    console.print(f"Purged {removed} expired lookup(s).")
