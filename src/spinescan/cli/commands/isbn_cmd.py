# ABOUTME: The `spinescan isbn` command for barcode-mode lookups.
# ABOUTME: Resolves ISBNs given as arguments or read from an OCR text file.

from pathlib import Path

import click
from rich.console import Console

from spinescan.cli.options import (
    build_settings,
    cache_option,
    json_option,
    no_cache_option,
    offline_option,
)
from spinescan.cli.render import echo_json, print_books, print_summary
from spinescan.core.pipeline import build_context, isbns_in_text, scan_isbns
from spinescan.layout.vision import OcrInputError, load_ocr_file

console = Console()


@click.command()
@click.argument("isbns", nargs=-1)
@click.option(
    "--from-text",
    "text_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read ISBNs out of an OCR text file.",
)
@offline_option
@cache_option
@no_cache_option
@json_option
def isbn(
    isbns: tuple[str, ...],
    text_path: Path | None,
    offline: bool,
    cache_path: Path | None,
    no_cache: bool,
    json_output: bool,
) -> None:
    """Look books up by ISBN (as read from barcodes)."""
    reads = list(isbns)
    if text_path is not None:
        try:
            page = load_ocr_file(text_path)
        except OcrInputError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise SystemExit(1) from exc
        reads.extend(isbns_in_text(page.text))

    if not reads:
        console.print("[yellow]No ISBNs given.[/yellow]")
        raise SystemExit(1)

    settings = build_settings(
        offline=offline, cache_path=cache_path, no_cache=no_cache, barcode_mode=True
    )
    context = build_context(settings)
    try:
        books = scan_isbns(context, reads)
    finally:
        context.close()

    if json_output:
        echo_json([book.to_dict() for book in books])
        return

    print_books(console, books, title="ISBN lookup")
    print_summary(console, books)
