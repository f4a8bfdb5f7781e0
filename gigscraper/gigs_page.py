"""The listing page of a gig category: gig cards and pagination."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from .errors import MarkupInteractionError, UnexpectedError
from .selector import Selector
from .string_cleaner import STRING_CLEANER
from .wrapped import WrappedElement, WrappedTab

log = logging.getLogger(__name__)

GIG_CARDS_SELECTOR = Selector(
    "#main-wrapper .listings-perseus .listing-container .gig-card-layout"
)
CURRENT_PAGE_SELECTOR = Selector(
    '#main-wrapper .listings-perseus div:has([aria-label="Previous"]) > div > '
    'a:not([aria-label="Next"]):not([aria-label="Previous"]):not([href])'
)
PAGE_NUMBER_ELS_SELECTOR = Selector(
    '#main-wrapper .listings-perseus div:has([aria-label="Previous"]) > div > '
    'a:not([aria-label="Next"]):not([aria-label="Previous"])'
)


@dataclass(frozen=True)
class GigCard:
    """A gig listed on a category page."""

    url: str
    page: int


def gig_cards(tab: WrappedTab, page: int, minimum_rating: int) -> Iterator[GigCard]:
    """Yield the gig cards with more than ``minimum_rating`` ratings.

    Counts written in thousands (containing "k") always qualify.
    """
    index = 1
    while True:
        selector = GIG_CARDS_SELECTOR.nth_child(index)
        url_selector = selector.append('a[aria-label="Go to gig"]')
        try:
            anchor = tab.find_element(url_selector)
        except MarkupInteractionError as error:
            log.debug("Expected iterator error: %s", MarkupInteractionError(error, selector))
            return
        url = anchor.get_expected_attribute_value("href")
        ratings_count_selector = selector.append(
            ".orca-rating .ratings-count .rating-count-number"
        )
        ratings_count = tab.find_element(ratings_count_selector).get_inner_text()
        index += 1
        if "k" in ratings_count or STRING_CLEANER.as_int(ratings_count) > minimum_rating:
            yield GigCard(url=url, page=page)


class GigsPage:
    """A category's gig listing."""

    DEFAULT_MINIMUM_RATING = 200

    def __init__(self, tab: WrappedTab, minimum_rating: int = DEFAULT_MINIMUM_RATING) -> None:
        self._tab = tab
        self.minimum_rating = minimum_rating

    @staticmethod
    def gig_els_selector() -> Selector:
        """Selector matching every gig card on the page."""
        return GIG_CARDS_SELECTOR

    def gigs(self) -> Iterator[GigCard]:
        """Return an iterator over the qualifying gig cards of the current page."""
        return gig_cards(self._tab, self.get_current_page(), self.minimum_rating)

    def get_current_page(self) -> int:
        """The number of the page being shown."""
        text = self._tab.find_element(CURRENT_PAGE_SELECTOR).get_inner_text()
        return STRING_CLEANER.as_int(text)

    def _page_number(self, element: WrappedElement) -> int:
        text = self._tab.find_element(element.selector.append("p")).get_inner_text()
        return STRING_CLEANER.as_int(text)

    def _follow(self, element: WrappedElement, timeout: float) -> None:
        element.click()
        self._tab.wait_until_navigated()
        self._tab.wait_for_element_with_custom_timeout(PAGE_NUMBER_ELS_SELECTOR, timeout)

    def go_to_page(self, target_page_number: int) -> bool:
        """Move through the pagination until ``target_page_number`` is shown.

        Returns False when the target page cannot be reached.
        """
        last_max_page_number = 0
        while True:
            page_number_els = self._tab.find_elements(PAGE_NUMBER_ELS_SELECTOR)
            if not page_number_els:
                raise UnexpectedError("Empty pagination component")

            first = page_number_els[0]
            if self._page_number(first) > target_page_number:
                self._follow(first, 30)
                continue

            last = page_number_els[-1]
            page_number = self._page_number(last)
            if page_number < target_page_number:
                self._follow(last, 60)
                continue

            if page_number == last_max_page_number:
                return False
            last_max_page_number = page_number

            target = None
            for element in page_number_els:
                if self._page_number(element) == target_page_number:
                    target = element
            if target is None:
                raise UnexpectedError(
                    f"Expected target page({target_page_number}) to be in pagination component"
                )
            target.click()
            self._tab.wait_until_navigated()
            return True