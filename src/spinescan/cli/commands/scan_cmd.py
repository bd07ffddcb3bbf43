# ABOUTME: The `spinescan scan` command: OCR dumps in, catalog-matched books out.
# ABOUTME: Processes files one after another, reporting unreadable files without stopping.

from pathlib import Path

import click
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from spinescan.cli.options import (
    build_settings,
    cache_option,
    json_option,
    lookup_option,
    no_cache_option,
    offline_option,
)
from spinescan.cli.render import echo_json, print_books, print_summary
from spinescan.core.pipeline import build_context, process_batch

console = Console()


def _make_progress(console: Console) -> Progress:
    """Create a Rich progress bar for batch processing."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    )


@click.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--barcode",
    "barcode_mode",
    is_flag=True,
    default=False,
    help="Read the input as ISBN barcodes instead of spine text.",
)
@lookup_option
@offline_option
@cache_option
@no_cache_option
@json_option
def scan(
    paths: tuple[Path, ...],
    barcode_mode: bool,
    lookup_source: str | None,
    offline: bool,
    cache_path: Path | None,
    no_cache: bool,
    json_output: bool,
) -> None:
    """Scan OCR output files (.txt or structured .json) for books."""
    settings = build_settings(
        lookup_source=lookup_source,
        offline=offline,
        cache_path=cache_path,
        no_cache=no_cache,
        barcode_mode=barcode_mode,
    )
    context = build_context(settings)
    try:
        if json_output:
            batch = process_batch(context, paths)
        else:
            with _make_progress(console) as progress:
                task_id = progress.add_task("Scanning", total=len(paths))

                def _advance(path: Path) -> None:
                    progress.update(task_id, description=path.name)
                    progress.advance(task_id)

                batch = process_batch(context, paths, on_progress=_advance)
    finally:
        context.close()

    if json_output:
        echo_json(
            {
                "books": [book.to_dict() for book in batch.books],
                "errors": [{"file": e.name, "message": e.message} for e in batch.errors],
                "messages": batch.messages,
            }
        )
        return

    for error in batch.errors:
        console.print(f"[red]Error processing {error.name}:[/red] {error.message}")
    for message in batch.messages:
        console.print(f"[yellow]{message}[/yellow]")

    if not batch.books:
        console.print("[yellow]No books found.[/yellow]")
        return

    print_books(console, batch.books)
    print_summary(console, batch.books)
    if offline:
        console.print("[dim]Offline: lookup skipped.[/dim]")
