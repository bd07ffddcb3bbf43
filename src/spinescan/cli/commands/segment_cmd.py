# ABOUTME: The `spinescan segment` command for previewing title/author extraction.
# ABOUTME: Runs grouping and segmentation on one OCR file without any catalog lookup.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from spinescan.cli.options import json_option
from spinescan.cli.render import echo_json
from spinescan.core.pipeline import candidates_for_page
from spinescan.layout.vision import OcrInputError, load_ocr_file

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@json_option
def segment(path: Path, json_output: bool) -> None:
    """Show the title/author candidates parsed from an OCR file."""
    try:
        page = load_ocr_file(path)
    except OcrInputError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    candidates = candidates_for_page(page)

    if json_output:
        echo_json(
            [
                {
                    "raw_text": c.raw_text,
                    "possible_title": c.possible_title,
                    "possible_author": c.possible_author,
                }
                for c in candidates
            ]
        )
        return

    if not candidates:
        console.print("[yellow]No candidates found.[/yellow]")
        return

    mode = "spine groups" if page.is_structured else "plain text"
    table = Table(title=f"{path.name} ({mode})")
    table.add_column("#", style="dim", width=3)
    table.add_column("Title", style="bold")
    table.add_column("Author")

    for i, candidate in enumerate(candidates, start=1):
        table.add_row(str(i), candidate.possible_title, candidate.possible_author or "[dim]-[/dim]")

    console.print(table)
