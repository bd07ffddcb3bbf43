# ABOUTME: CLI package for spinescan, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click

from spinescan.cli.commands import cache_cmd, isbn_cmd, lookup_cmd, scan_cmd, segment_cmd
from spinescan.config import configure_logging


@click.group()
@click.version_option(package_name="spinescan")
@click.option("-v", "--verbose", count=True, help="Log more detail (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """spinescan - turn bookshelf OCR text into catalog book records."""
    if verbose:
        configure_logging(logging.DEBUG if verbose > 1 else logging.INFO)


cli.add_command(scan_cmd.scan)
cli.add_command(isbn_cmd.isbn)
cli.add_command(lookup_cmd.lookup)
cli.add_command(segment_cmd.segment)
cli.add_command(cache_cmd.cache)
