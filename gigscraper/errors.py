"""Exceptions raised while driving the browser, scraping and storing results."""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for every error raised by the scraper."""


class UnexpectedError(ScraperError):
    """A situation the scraper does not know how to handle."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Unexpected: {self.message}"


class MarkupInteractionError(ScraperError):
    """Interacting with the page element matched by a selector failed."""

    def __init__(self, error: object, selector: str) -> None:
        super().__init__(str(error), str(selector))
        self.error = str(error)
        self.selector = str(selector)

    def __str__(self) -> str:
        return f"{self.error}: '{self.selector}'"


class AttributeNotFoundError(ScraperError):
    """An element lacks an attribute that it was expected to have."""

    def __init__(self, name: str, selector: str) -> None:
        super().__init__(name, str(selector))
        self.name = name
        self.selector = str(selector)

    def __str__(self) -> str:
        return f"'{self.name}' attribute not found for '{self.selector}'"


class ElementNotFoundError(ScraperError):
    """No element matched a selector that had to match."""

    def __init__(self, selector: str) -> None:
        super().__init__(str(selector))
        self.selector = str(selector)

    def __str__(self) -> str:
        return f"ElementNotFound: {self.selector}"


class GetTitleError(ScraperError):
    """Reading the tab's title failed."""

    def __init__(self, cause: object) -> None:
        super().__init__(str(cause))
        self.cause = str(cause)

    def __str__(self) -> str:
        return f"Error getting tab's title: {self.cause}"


class WaitUntilNavigatedError(ScraperError):
    """Waiting for a navigation to finish failed."""

    def __init__(self, cause: object) -> None:
        super().__init__(str(cause))
        self.cause = str(cause)

    def __str__(self) -> str:
        return f"Error waiting for navigation: {self.cause}"


class NavigateToError(ScraperError):
    """Navigating the tab to a URL failed."""

    def __init__(self, url: str, cause: object) -> None:
        super().__init__(url, str(cause))
        self.url = url
        self.cause = str(cause)

    def __str__(self) -> str:
        return f"Error navigating to '{self.url}': {self.cause}"


class DatabaseError(ScraperError):
    """A database query failed."""

    def __init__(self, cause: object) -> None:
        super().__init__(str(cause))
        self.cause = str(cause)

    def __str__(self) -> str:
        return self.cause