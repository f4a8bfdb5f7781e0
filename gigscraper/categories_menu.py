"""Walks the site's categories menu: main categories, category groups and their links."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from .errors import MarkupInteractionError, UnexpectedError
from .selector import Selector
from .wrapped import WrappedElement, WrappedTab

log = logging.getLogger(__name__)

MAIN_CATEGORIES_SELECTOR = Selector('#CategoriesMenu .categories li[data-level="top"]')
RIGHT_NAV_BUTTON_SELECTOR = Selector("#CategoriesMenu nav .right")
CATEGORY_LINK_ITEM = ".sub-menu-item:not(.linked-title):not(.spotlight-item)"


@dataclass(frozen=True)
class Category:
    """A gig category together with the menu entries it sits under."""

    main_category: str
    category_group: str
    name: str
    url: str


@dataclass(frozen=True)
class CategoryLink:
    """A single category link inside a category group."""

    name: str
    url: str


class MainCategoryElement:
    """A top-level entry of the categories menu."""

    def __init__(self, tab: WrappedTab, element: WrappedElement) -> None:
        self._tab = tab
        self._element = element

    @property
    def selector(self) -> Selector:
        """The selector that located this entry."""
        return self._element.selector

    def menu_panel_selector(self) -> Selector:
        """Selector of the panel that opens when the entry is hovered."""
        return self.selector.append(".menu-panel")

    def name(self) -> str:
        """The entry's visible name."""
        return self._tab.find_element(self.selector.append("a")).get_inner_text()


class CategoryGroupElement:
    """A group of categories inside a main category's panel."""

    def __init__(self, tab: WrappedTab, element: WrappedElement) -> None:
        self._tab = tab
        self._element = element

    @property
    def selector(self) -> Selector:
        """The selector that located this group."""
        return self._element.selector

    def name(self) -> str:
        """The group's title."""
        name_selector = self.selector.append(".linked-title:first-child :first-child")
        return self._tab.find_element(name_selector).get_inner_text()


def main_categories(tab: WrappedTab) -> Iterator[MainCategoryElement]:
    """Yield each main category, hovering it so its panel opens."""
    index = 1
    while True:
        selector = MAIN_CATEGORIES_SELECTOR.nth_child(index)
        try:
            element = tab.find_element(selector)
        except MarkupInteractionError as error:
            log.debug("%s : %s", error, selector)
            return
        element.move_mouse_over()
        main_category = MainCategoryElement(tab, element)
        panel_selector = main_category.menu_panel_selector()
        try:
            tab.wait_for_element(panel_selector)
        except MarkupInteractionError:
            tab.find_element(RIGHT_NAV_BUTTON_SELECTOR)
            tab.wait_for_element(panel_selector)
        index += 1
        yield main_category


def category_groups(tab: WrappedTab, base_selector: str) -> Iterator[CategoryGroupElement]:
    """Yield each category group under the main category at ``base_selector``."""
    base = Selector(base_selector)
    index = 1
    while True:
        selector = base.append(".menu-bucket").nth_child(index)
        try:
            element = tab.find_element(selector)
        except MarkupInteractionError as error:
            log.debug("%s : %s", error, selector)
            return
        index += 1
        yield CategoryGroupElement(tab, element)


def category_group_categories(tab: WrappedTab, base_selector: str) -> Iterator[CategoryLink]:
    """Yield each category link of the group at ``base_selector``."""
    base = Selector(base_selector)
    index = 2
    while True:
        selector = base.append(CATEGORY_LINK_ITEM).nth_child(index).append("a")
        try:
            element = tab.find_element(selector)
        except MarkupInteractionError as error:
            log.debug("%s : %s", error, selector)
            return
        name = element.get_inner_text()
        href = element.get_expected_attribute_value("href")
        index += 1
        yield CategoryLink(name=name, url=href)


class CategoriesMenu:
    """The categories menu shown in the site header."""

    def __init__(self, tab: WrappedTab) -> None:
        self._tab = tab

    def get_gig_categories(self) -> Iterator[Category]:
        """Return an iterator over every category in the menu.

        Raises UnexpectedError at once when the menu has no main category or
        the first main category has no group.
        """
        mains = main_categories(self._tab)
        main = next(mains, None)
        if main is None:
            raise UnexpectedError("Empty main categories iterator")
        groups = category_groups(self._tab, main.selector)
        group = next(groups, None)
        if group is None:
            raise UnexpectedError("Empty category group iterator")
        return self._walk(mains, main, groups, group)

    def _walk(
        self,
        mains: Iterator[MainCategoryElement],
        main: MainCategoryElement,
        groups: Iterator[CategoryGroupElement],
        group: CategoryGroupElement,
    ) -> Iterator[Category]:
        while True:
            for link in category_group_categories(self._tab, group.selector):
                yield Category(
                    main_category=main.name(),
                    category_group=group.name(),
                    name=link.name,
                    url=link.url,
                )
            next_group = next(groups, None)
            while next_group is None:
                next_main = next(mains, None)
                if next_main is None:
                    return
                main = next_main
                groups = category_groups(self._tab, main.selector)
                next_group = next(groups, None)
            group = next_group