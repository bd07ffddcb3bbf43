# ABOUTME: End-to-end tests for the spinescan isbn, lookup, and cache commands.
# ABOUTME: Uses a fake catalog client patched into the command modules.

import json
from dataclasses import replace
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from spinescan.cli import cli
from spinescan.config import Settings
from spinescan.core.pipeline import ScanContext, build_context, build_resolver
from spinescan.metadata.cache import LookupCache
from spinescan.metadata.resolver import CatalogResolver
from spinescan.metadata.types import CatalogRecord, LookupResult
from tests.fixtures import googlebooks_responses, openlibrary_responses
from tests.fixtures.fake_http import FakeHttpClient


class TestIsbnCommand:
    """E2e tests for `spinescan isbn`."""

    def test_offline_isbn13_is_medium(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["isbn", "--offline", "--json", "978-0-14-103614-4"])
        assert result.exit_code == 0
        book = json.loads(result.stdout)[0]
        assert book["isbn"] == "9780141036144"
        assert book["confidence"] == "medium"
        assert book["booktitle"].startswith("https://search.worldcat.org/")

    def test_from_text_file(self, tmp_path: Path) -> None:
        path = tmp_path / "back.txt"
        path.write_text("Penguin Books\nISBN 0-14-103614-1\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["isbn", "--offline", "--json", "--from-text", str(path)])
        assert result.exit_code == 0
        assert [b["isbn"] for b in json.loads(result.stdout)] == ["0141036141"]

    def test_no_isbns_fails(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["isbn", "--offline"])
        assert result.exit_code == 1
        assert "No ISBNs given" in result.output

    def test_online_match(self) -> None:
        client = FakeHttpClient({"openlibrary.org": openlibrary_responses.ISBN_SEARCH_RESPONSE})

        def factory(settings: Settings) -> ScanContext:
            return build_context(replace(settings, openlibrary_interval=0.0), http_client=client)

        with patch("spinescan.cli.commands.isbn_cmd.build_context", factory):
            runner = CliRunner()
            result = runner.invoke(cli, ["isbn", "--no-cache", "--json", "9780141036144"])

        assert result.exit_code == 0
        book = json.loads(result.stdout)[0]
        assert book["booktitle"] == "Nineteen Eighty-Four"
        assert book["confidence"] == "high"


class TestLookupCommand:
    """E2e tests for `spinescan lookup`."""

    def test_lookup_google(self) -> None:
        client = FakeHttpClient({"googleapis.com": googlebooks_responses.VOLUMES_RESPONSE})

        def factory(settings: Settings) -> CatalogResolver:
            return build_resolver(settings, http_client=client)

        with patch("spinescan.cli.commands.lookup_cmd.build_resolver", factory):
            runner = CliRunner()
            result = runner.invoke(
                cli,
                [
                    "lookup",
                    "--lookup",
                    "googlebooks",
                    "--no-cache",
                    "--json",
                    "Nineteen Eighty-Four",
                ],
            )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["source"] == "googlebooks"
        assert data["confidence"] == "high"
        assert len(data["candidates"]) == 2

    def test_no_match(self) -> None:
        client = FakeHttpClient({"openlibrary.org": openlibrary_responses.SEARCH_RESPONSE_EMPTY})

        def factory(settings: Settings) -> CatalogResolver:
            return build_resolver(replace(settings, openlibrary_interval=0.0), http_client=client)

        with patch("spinescan.cli.commands.lookup_cmd.build_resolver", factory):
            runner = CliRunner()
            result = runner.invoke(cli, ["lookup", "--no-cache", "Zzyzx"])

        assert result.exit_code == 0
        assert "No match for" in result.output


class TestCacheCommand:
    """E2e tests for `spinescan cache`."""

    def _seed(self, path: Path) -> None:
        cache = LookupCache(path)
        result = LookupResult.from_records([CatalogRecord(title="Dune")])
        assert result is not None
        cache.set("openlibrary", "dune", result)
        cache.close()

    def test_clear(self, tmp_path: Path) -> None:
        path = tmp_path / "lookups.db"
        self._seed(path)
        runner = CliRunner()
        result = runner.invoke(cli, ["cache", "clear", "--cache", str(path)])
        assert result.exit_code == 0
        assert "Removed 1 cached lookup(s)." in result.output
        assert LookupCache(path).get("openlibrary", "dune") is None

    def test_purge_keeps_fresh_entries(self, tmp_path: Path) -> None:
        path = tmp_path / "lookups.db"
        self._seed(path)
        runner = CliRunner()
        result = runner.invoke(cli, ["cache", "purge", "--cache", str(path)])
        assert result.exit_code == 0
        assert "Purged 0 expired lookup(s)." in result.output
