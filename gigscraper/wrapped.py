"""Browser tab and element wrappers that attach selectors to every failure."""

from __future__ import annotations

from typing import Any

from .errors import (
    AttributeNotFoundError,
    GetTitleError,
    MarkupInteractionError,
    NavigateToError,
    WaitUntilNavigatedError,
)
from .selector import Selector


class WrappedElement:
    """A page element together with the selector that found it."""

    def __init__(self, element: Any, selector: str) -> None:
        self._element = element
        self.selector = Selector(selector)

    def _failed(self, error: Exception) -> MarkupInteractionError:
        return MarkupInteractionError(error, self.selector)

    def get_content(self) -> str:
        """Return the element's outer HTML."""
        try:
            return self._element.get_content()
        except Exception as error:
            raise self._failed(error) from error

    def get_inner_text(self) -> str:
        """Return the element's rendered text."""
        try:
            return self._element.get_inner_text()
        except Exception as error:
            raise self._failed(error) from error

    def get_attribute_value(self, name: str) -> str | None:
        """Return the value of attribute ``name``, or None when it is absent."""
        try:
            return self._element.get_attribute_value(name)
        except Exception as error:
            raise self._failed(error) from error

    def get_expected_attribute_value(self, name: str) -> str:
        """Return the value of attribute ``name``; raise if it is absent."""
        value = self.get_attribute_value(name)
        if value is None:
            raise AttributeNotFoundError(name, self.selector)
        return value

    def click(self) -> WrappedElement:
        """Click the element."""
        try:
            self._element.click()
        except Exception as error:
            raise self._failed(error) from error
        return self

    def move_mouse_over(self) -> WrappedElement:
        """Hover the mouse over the element."""
        try:
            self._element.move_mouse_over()
        except Exception as error:
            raise self._failed(error) from error
        return self

    def scroll_into_view(self) -> WrappedElement:
        """Scroll the page until the element is visible."""
        try:
            self._element.scroll_into_view()
        except Exception as error:
            raise self._failed(error) from error
        return self

    def __repr__(self) -> str:
        return f"WrappedElement(selector={str(self.selector)!r})"


class WrappedTab:
    """A browser tab whose lookups yield WrappedElement objects."""

    def __init__(self, tab: Any) -> None:
        self._tab = tab

    def get_title(self) -> str:
        """Return the title of the tab's current page."""
        try:
            return self._tab.get_title()
        except Exception as error:
            raise GetTitleError(error) from error

    def find_element(self, selector: str) -> WrappedElement:
        """Return the first element matching ``selector``."""
        selector = Selector(selector)
        try:
            element = self._tab.find_element(str(selector))
        except Exception as error:
            raise MarkupInteractionError(error, selector) from error
        return WrappedElement(element, selector)

    def find_elements(self, selector: str) -> list[WrappedElement]:
        """Return every element matching ``selector``."""
        selector = Selector(selector)
        try:
            elements = self._tab.find_elements(str(selector))
        except Exception as error:
            raise MarkupInteractionError(error, selector) from error
        return [WrappedElement(element, selector) for element in elements]

    def wait_for_element(self, selector: str) -> WrappedElement:
        """Wait with the default timeout for an element matching ``selector``."""
        selector = Selector(selector)
        try:
            element = self._tab.wait_for_element(str(selector))
        except Exception as error:
            raise MarkupInteractionError(error, selector) from error
        return WrappedElement(element, selector)

    def wait_for_element_with_custom_timeout(
        self, selector: str, timeout: float
    ) -> WrappedElement:
        """Wait up to ``timeout`` seconds for an element matching ``selector``."""
        selector = Selector(selector)
        try:
            element = self._tab.wait_for_element_with_custom_timeout(
                str(selector), timeout
            )
        except Exception as error:
            raise MarkupInteractionError(error, selector) from error
        return WrappedElement(element, selector)

    def wait_until_navigated(self) -> None:
        """Block until the current navigation has finished."""
        try:
            self._tab.wait_until_navigated()
        except Exception as error:
            raise WaitUntilNavigatedError(error) from error

    def navigate_to(self, url: str) -> None:
        """Point the tab at ``url``."""
        try:
            self._tab.navigate_to(url)
        except Exception as error:
            raise NavigateToError(url, error) from error