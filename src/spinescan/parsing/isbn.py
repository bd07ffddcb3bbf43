# ABOUTME: ISBN helpers for barcode mode: extraction from OCR text and digit cleanup.
# ABOUTME: Used when no barcode reader result is available and ISBNs must be read from text.

import re

# "ISBN 978-0-14-118776-1", "isbn:0141187761", or a bare run of digits.
_ISBN_RE = re.compile(r"(?:ISBN[: \t-]*)?(\d[\d \t-]{8,16}\d)", re.IGNORECASE)
_NON_DIGIT_RE = re.compile(r"\D")


def clean_isbn(value: str) -> str:
    """Strip everything but digits from an ISBN-like string."""
    return _NON_DIGIT_RE.sub("", value)


def is_isbn13(value: str) -> bool:
    """Whether the cleaned value has the 13 digits of an EAN/ISBN-13."""
    return len(clean_isbn(value)) == 13


def extract_isbns(text: str) -> list[str]:
    """Pull 10- and 13-digit ISBNs out of OCR text, in reading order.

    Duplicates are kept; a shelf can hold two copies of the same book.
    """
    isbns: list[str] = []
    for match in _ISBN_RE.finditer(text):
        digits = clean_isbn(match.group(1))
        if len(digits) in (10, 13):
            isbns.append(digits)
    return isbns
