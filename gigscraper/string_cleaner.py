"""Helpers that turn text scraped from a page into clean values."""

from __future__ import annotations

import re


class StringCleanerError(ValueError):
    """Raised when scraped text cannot be turned into the requested value."""


class StringCleaner:
    """Extracts numbers and plain text from scraped strings."""

    _NON_DIGITS = re.compile(r"[^0-9]")
    _NON_SIMPLE_TEXT = re.compile(r"[^0-9A-Za-z ]")

    def as_int(self, text: str) -> int:
        """Return the number formed by all ASCII digits in ``text``."""
        digits = self._NON_DIGITS.sub("", text)
        if not digits:
            raise StringCleanerError(f"Invalid digit: {text}")
        return int(digits)

    def as_simple_text(self, text: str) -> str:
        """Keep only ASCII letters, digits and spaces, trimmed at both ends."""
        return self._NON_SIMPLE_TEXT.sub("", text).strip()


STRING_CLEANER = StringCleaner()