"""CSS selectors that can be refined step by step."""

from __future__ import annotations


class Selector(str):
    """An immutable CSS selector string with helpers to build narrower selectors."""

    __slots__ = ()

    def nth_child(self, index: int) -> Selector:
        """Return this selector restricted to the ``index``-th child (1-based)."""
        return Selector(f"{self}:nth-child({index})")

    def append(self, selector: str) -> Selector:
        """Return a descendant selector: this selector followed by ``selector``."""
        return Selector(f"{self} {selector}")

    def __repr__(self) -> str:
        return f"Selector({str.__repr__(self)})"