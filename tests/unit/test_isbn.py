# ABOUTME: Unit tests for ISBN helpers used in barcode mode.
# ABOUTME: Covers digit cleanup, ISBN-13 detection, and extraction from OCR text.

from spinescan.parsing.isbn import clean_isbn, extract_isbns, is_isbn13


class TestCleanIsbn:
    """Tests for clean_isbn()."""

    def test_strips_hyphens_and_spaces(self) -> None:
        assert clean_isbn("978-0-14-103614-4") == "9780141036144"
        assert clean_isbn(" 978 0141 036144 ") == "9780141036144"

    def test_strips_prefix(self) -> None:
        assert clean_isbn("ISBN: 0141036141") == "0141036141"

    def test_no_digits(self) -> None:
        assert clean_isbn("no barcode") == ""


class TestIsIsbn13:
    """Tests for is_isbn13()."""

    def test_thirteen_digits(self) -> None:
        assert is_isbn13("978-0-14-103614-4")

    def test_ten_digits(self) -> None:
        assert not is_isbn13("0141036141")

    def test_empty(self) -> None:
        assert not is_isbn13("")


class TestExtractIsbns:
    """Tests for extract_isbns()."""

    def test_prefixed_isbns(self) -> None:
        text = "ISBN 978-0-14-103614-4\nsome text\nisbn:0141036141"
        assert extract_isbns(text) == ["9780141036144", "0141036141"]

    def test_bare_digit_runs(self) -> None:
        assert extract_isbns("9780743273565") == ["9780743273565"]

    def test_wrong_length_ignored(self) -> None:
        """Digit runs that are neither 10 nor 13 digits are not ISBNs."""
        assert extract_isbns("Call number 823.912 / shelf 12345678901") == []

    def test_duplicates_kept(self) -> None:
        text = "9780743273565\n9780743273565"
        assert extract_isbns(text) == ["9780743273565", "9780743273565"]

    def test_separate_lines_not_merged(self) -> None:
        """Digits on different lines are never combined into one ISBN."""
        assert extract_isbns("978014\n1036144") == []

    def test_no_isbns(self) -> None:
        assert extract_isbns("THE GREAT GATSBY") == []
