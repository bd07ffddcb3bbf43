# ABOUTME: Unit tests for CatalogRecord and LookupResult.
# ABOUTME: Covers empty-string defaults, dict conversion, and building results from ranked records.

from spinescan.metadata.types import MAX_CANDIDATES, CatalogRecord, LookupResult, as_text


class TestAsText:
    """Tests for as_text()."""

    def test_none_is_empty(self) -> None:
        assert as_text(None) == ""

    def test_scalars_rendered(self) -> None:
        assert as_text(5) == "5"
        assert as_text("Dune") == "Dune"


class TestCatalogRecord:
    """Tests for the normalized record type."""

    def test_defaults_are_empty_strings(self) -> None:
        record = CatalogRecord()
        assert all(value == "" for value in record.to_dict().values())

    def test_from_dict_ignores_unknown_and_none(self) -> None:
        """Unknown keys are dropped and None becomes an empty string."""
        record = CatalogRecord.from_dict({"title": "Dune", "author": None, "rating": 5})
        assert record == CatalogRecord(title="Dune")

    def test_from_dict_coerces_to_str(self) -> None:
        assert CatalogRecord.from_dict({"year": 1965}).year == "1965"


class TestLookupResult:
    """Tests for LookupResult."""

    def test_from_records_takes_first_as_best(self) -> None:
        records = [CatalogRecord(title="Dune"), CatalogRecord(title="Dune Messiah")]
        result = LookupResult.from_records(records)
        assert result is not None
        assert result.best == records[0]
        assert result.candidates == records

    def test_from_records_empty_is_none(self) -> None:
        assert LookupResult.from_records([]) is None

    def test_candidates_capped(self) -> None:
        records = [CatalogRecord(title=f"Dune {i}") for i in range(8)]
        result = LookupResult.from_records(records)
        assert result is not None
        assert len(result.candidates) == MAX_CANDIDATES

    def test_has_title(self) -> None:
        assert LookupResult(best=CatalogRecord(title="Emma")).has_title
        assert not LookupResult(best=CatalogRecord(author="Anon")).has_title
        assert not LookupResult(best=None).has_title

    def test_dict_round_trip(self) -> None:
        result = LookupResult.from_records([CatalogRecord(title="Emma", author="Jane Austen")])
        assert result is not None
        assert LookupResult.from_dict(result.to_dict()) == result

    def test_from_dict_without_best(self) -> None:
        result = LookupResult.from_dict({"best": None, "candidates": []})
        assert result.best is None
        assert result.candidates == []
