# ABOUTME: Rich and JSON rendering of scan results for CLI commands.
# ABOUTME: Shows books in a table colored by confidence tier, with a per-tier summary.

import json

import click
from rich.console import Console
from rich.table import Table

from spinescan.core.book import Book, count_by_confidence
from spinescan.metadata.confidence import Confidence
from spinescan.metadata.types import CatalogRecord

_TIER_STYLE = {
    Confidence.HIGH: "green",
    Confidence.MEDIUM: "yellow",
    Confidence.NONE: "red",
}


def print_books(console: Console, books: list[Book], title: str = "Books") -> None:
    """Print books as a table: OCR title, catalog title, author, ISBN, confidence."""
    table = Table(title=title)
    table.add_column("#", style="dim", width=3)
    table.add_column("Scanned", style="bold")
    table.add_column("Catalog")
    table.add_column("Author")
    table.add_column("ISBN")
    table.add_column("Confidence")

    for i, book in enumerate(books, start=1):
        style = _TIER_STYLE[book.confidence]
        table.add_row(
            str(i),
            book.preliminary_title,
            book.booktitle or "[dim]-[/dim]",
            book.author or "[dim]unknown[/dim]",
            book.isbn or "[dim]-[/dim]",
            f"[{style}]{book.confidence.value}[/{style}]",
        )

    console.print(table)


def print_summary(console: Console, books: list[Book]) -> None:
    """Print a one-line high/medium/none tally."""
    counts = count_by_confidence(books)
    parts = [
        f"[{_TIER_STYLE[tier]}]{counts[tier]} {tier.value}[/{_TIER_STYLE[tier]}]"
        for tier in (Confidence.HIGH, Confidence.MEDIUM, Confidence.NONE)
    ]
    console.print(f"\n{len(books)} book(s): {', '.join(parts)}")


def print_candidates(console: Console, records: list[CatalogRecord], title: str) -> None:
    """Print catalog records as a numbered table."""
    table = Table(title=title)
    table.add_column("#", style="bold", width=3)
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("ISBN")
    table.add_column("Year")
    table.add_column("Publisher")

    for i, record in enumerate(records, start=1):
        table.add_row(
            str(i),
            record.title,
            record.author or "—",
            record.isbn or "—",
            record.year or "—",
            record.publisher or "—",
        )

    console.print(table)


def echo_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))
