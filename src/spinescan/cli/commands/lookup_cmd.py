# ABOUTME: The `spinescan lookup` command for resolving a single title query.
# ABOUTME: Shows which catalog answered, the candidates, and the confidence rating.

from pathlib import Path

import click
from rich.console import Console

from spinescan.cli.options import (
    build_settings,
    cache_option,
    json_option,
    lookup_option,
    no_cache_option,
)
from spinescan.cli.render import echo_json, print_candidates
from spinescan.core.pipeline import build_resolver
from spinescan.metadata.confidence import SimilarityConfidence
from spinescan.metadata.resolver import sources_for

console = Console()


@click.command()
@click.argument("query")
@lookup_option
@cache_option
@no_cache_option
@json_option
def lookup(
    query: str,
    lookup_source: str | None,
    cache_path: Path | None,
    no_cache: bool,
    json_output: bool,
) -> None:
    """Look up one title in the configured catalogs."""
    settings = build_settings(lookup_source=lookup_source, cache_path=cache_path, no_cache=no_cache)
    resolver = build_resolver(settings)
    try:
        resolution = resolver.resolve(query, sources_for(settings.lookup_source))
    finally:
        resolver.close()
    confidence = SimilarityConfidence().classify(query, resolution.best)

    if json_output:
        echo_json(
            {
                "query": query,
                "source": resolution.source,
                "confidence": confidence.value,
                "best": resolution.best.to_dict() if resolution.best else None,
                "candidates": [c.to_dict() for c in resolution.candidates],
            }
        )
        return

    if resolution.best is None:
        console.print(f"[yellow]No match for[/yellow] {query}")
        return

    print_candidates(console, resolution.candidates, title=f"{resolution.source}: {query}")
    console.print(f"Best match: [bold]{resolution.best.title}[/bold] ({confidence.value})")
