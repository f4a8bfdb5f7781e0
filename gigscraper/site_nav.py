"""Site-wide navigation."""

from __future__ import annotations

from .selector import Selector
from .wrapped import WrappedTab

HOME_BUTTON_SELECTOR = Selector("#Header a.site-logo")


class SiteNav:
    """Navigation controls found in the site header."""

    def __init__(self, tab: WrappedTab) -> None:
        self._tab = tab

    def go_home(self) -> None:
        """Click the site logo to return to the home page."""
        self._tab.find_element(HOME_BUTTON_SELECTOR).click()