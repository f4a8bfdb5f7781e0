"""Reads the details of a single gig from its page."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from dataclasses import dataclass, field

from .errors import ElementNotFoundError, MarkupInteractionError, UnexpectedError
from .gig_packages import GigPackage, get_gig_packages
from .gig_visuals import GalleryVisual, get_gig_visuals
from .selector import Selector
from .string_cleaner import STRING_CLEANER
from .wrapped import WrappedTab

log = logging.getLogger(__name__)

_MAIN = "#main-wrapper > .main-content .gig-page > .main"

TITLE_SELECTOR = Selector(f"{_MAIN} > .gig-overview > h1")
DESCRIPTION_SELECTOR = Selector(
    f"{_MAIN} > .gig-description > .description-wrapper > .description-content"
)
GIG_RATING_SELECTOR = Selector(
    f"{_MAIN} > .gig-overview > .seller-overview div:has(button) > strong"
)
GIG_REVIEWS_COUNT_SELECTOR = Selector(
    f"{_MAIN} > .gig-overview > .seller-overview div:has(button) > button"
)
SELLER_DESCRIPTION_SELECTOR = Selector(f"{_MAIN} .seller-card .seller-desc > .inner")
SELLER_LEVEL_SELECTOR = Selector(
    f"{_MAIN} .seller-card div:has(.rating-score) div:has(p) > p"
)
SELLER_RATING_SELECTOR = Selector(f"{_MAIN} .seller-card .rating-score")
SELLER_RATINGS_COUNT_SELECTOR = Selector(f"{_MAIN} .seller-card .ratings-count > span")
SELLER_STATS_SELECTOR = Selector(f"{_MAIN} .seller-card .user-stats > li")
METADATA_SELECTOR = Selector(
    f"{_MAIN} > .gig-description > .metadata > .metadata-attribute"
)
FAQ_ITEMS_SELECTOR = Selector(f"{_MAIN} article.faq-collapsible")
REVIEW_ITEMS_SELECTOR = Selector(
    f"{_MAIN} .gig-page-reviews .review-item-component-wrapper"
)
SHOW_MORE_REVIEWS_SELECTOR = Selector(
    f"{_MAIN} .gig-page-reviews .reviews-wrap > div > button"
)
PRICE_DURATION_ITEM = (
    "div:has(p:nth-child(1)):has(p:nth-child(2):last-child) > p:first-child"
)

_LOAD_MORE_ATTEMPTS = 3
_EXPAND_PAUSE = 0.5


@dataclass(frozen=True)
class GigMetadata:
    """A named metadata attribute of a gig and its values."""

    name: str
    values: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SellerStat:
    """One statistic shown on the seller card."""

    name: str
    value: str


@dataclass(frozen=True)
class GigFaq:
    """A question and answer from the gig's FAQ."""

    question: str
    answer: str


@dataclass(frozen=True)
class GigReview:
    """A buyer's review of the gig."""

    country: str
    rating: str
    price: str
    duration: str
    description: str


class GigPage:
    """A gig's page and the details that can be read from it."""

    def __init__(self, tab: WrappedTab) -> None:
        self._tab = tab

    @staticmethod
    def title_selector() -> Selector:
        """Selector of the gig's title heading."""
        return TITLE_SELECTOR

    def _text(self, selector: Selector) -> str:
        return self._tab.find_element(selector).get_inner_text()

    def get_title(self) -> str:
        """The gig's title."""
        return self._text(TITLE_SELECTOR)

    def get_gig_description(self) -> str:
        """The HTML of the gig's description."""
        return self._tab.find_element(DESCRIPTION_SELECTOR).get_content()

    def get_gig_rating(self) -> str:
        """The gig's rating as displayed."""
        return self._text(GIG_RATING_SELECTOR)

    def get_gig_reviews_count(self) -> int:
        """The number of reviews the gig has."""
        return STRING_CLEANER.as_int(self._text(GIG_REVIEWS_COUNT_SELECTOR))

    def get_seller_description(self) -> str:
        """The seller's self description."""
        return self._text(SELLER_DESCRIPTION_SELECTOR)

    def get_seller_level(self) -> str:
        """The seller's level, reduced to plain text."""
        elements = self._tab.find_elements(SELLER_LEVEL_SELECTOR)
        if not elements:
            raise UnexpectedError("Seller lever element not found!")
        return STRING_CLEANER.as_simple_text(elements[-1].get_inner_text())

    def get_seller_rating(self) -> str:
        """The seller's rating as displayed."""
        return self._text(SELLER_RATING_SELECTOR)

    def get_seller_ratings_count(self) -> int:
        """The number of ratings the seller has."""
        return STRING_CLEANER.as_int(self._text(SELLER_RATINGS_COUNT_SELECTOR))

    def get_seller_stats(self) -> list[SellerStat]:
        """The statistics listed on the seller card."""
        stats = []
        for element in self._tab.find_elements(SELLER_STATS_SELECTOR):
            name = element.get_inner_text()
            value = self._text(element.selector.append("strong"))
            stats.append(
                SellerStat(
                    name=STRING_CLEANER.as_simple_text(name),
                    value=STRING_CLEANER.as_simple_text(value),
                )
            )
        return stats

    def get_gig_metadata(self) -> list[GigMetadata]:
        """The metadata attributes listed under the description."""
        metadata = []
        for element in self._tab.find_elements(METADATA_SELECTOR):
            name = self._text(element.selector.append("p"))
            values = [
                value.get_inner_text()
                for value in self._tab.find_elements(element.selector.append("li"))
            ]
            metadata.append(GigMetadata(name=name, values=values))
        return metadata

    def get_gig_faqs(self) -> Iterator[GigFaq]:
        """Yield the gig's FAQ entries in page order."""
        index = 1
        while True:
            item_selector = FAQ_ITEMS_SELECTOR.nth_child(index)
            try:
                self._tab.find_element(item_selector)
            except MarkupInteractionError:
                return
            question = self._text(item_selector.append(".faq-collapsible-title p"))
            answer = self._text(item_selector.append(".faq-collapsible-content p"))
            index += 1
            yield GigFaq(question=question, answer=answer)

    def _load_more_reviews(self, review_selector: Selector) -> bool:
        """Press "show more" until the review at ``review_selector`` appears."""
        for _ in range(_LOAD_MORE_ATTEMPTS):
            try:
                button = self._tab.find_element(SHOW_MORE_REVIEWS_SELECTOR)
            except MarkupInteractionError as error:
                log.debug("Show more button find error: %s", error)
                return False
            button.click()
            try:
                self._tab.wait_for_element(review_selector)
            except MarkupInteractionError as error:
                log.debug("Error waiting for element: '%s' : %s", review_selector, error)
                continue
            return True
        return False

    def get_gig_reviews(self) -> Iterator[GigReview]:
        """Yield the gig's reviews, loading more of them as needed."""
        index = 1
        while True:
            review_selector = REVIEW_ITEMS_SELECTOR.nth_child(index)
            try:
                review = self._tab.find_element(review_selector)
            except MarkupInteractionError:
                if self._load_more_reviews(review_selector):
                    continue
                return
            review.scroll_into_view()
            country = self._text(review.selector.append(".country p"))
            rating = self._text(review.selector.append("strong.rating-score"))

            try:
                expand_button = self._tab.find_element(
                    review.selector.append(".expand-button button")
                )
            except MarkupInteractionError:
                pass
            else:
                expand_button.click()
                time.sleep(_EXPAND_PAUSE)

            description = self._text(review_selector.append(".review-description p"))

            price_duration_selector = review.selector.append(PRICE_DURATION_ITEM)
            price_duration = self._tab.find_elements(price_duration_selector)
            if len(price_duration) < 1:
                raise ElementNotFoundError(price_duration_selector.nth_child(1))
            price = price_duration[0].get_inner_text()
            if len(price_duration) < 2:
                raise ElementNotFoundError(price_duration_selector.nth_child(2))
            duration = price_duration[1].get_inner_text()

            index += 1
            yield GigReview(
                country=country,
                rating=rating,
                price=price,
                duration=duration,
                description=description,
            )

    def get_gig_packages(self) -> list[GigPackage]:
        """The pricing packages the gig offers."""
        return get_gig_packages(self._tab)

    def get_gig_visuals(self) -> list[GalleryVisual]:
        """The images and videos of the gig's gallery."""
        return get_gig_visuals(self._tab)