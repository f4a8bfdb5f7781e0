"""Reads the pricing packages table of a gig page."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from .errors import MarkupInteractionError, UnexpectedError
from .selector import Selector
from .string_cleaner import STRING_CLEANER
from .wrapped import WrappedElement, WrappedTab

log = logging.getLogger(__name__)

_PACKAGES_TABLE = (
    "#main-wrapper > .main-content .gig-page > .main "
    ".gig-page-packages-table table tbody"
)
HEADER_CELLS_SELECTOR = Selector(f"{_PACKAGES_TABLE} tr.package-type th")
DESCRIPTION_CELLS_SELECTOR = Selector(f"{_PACKAGES_TABLE} tr.description td")
CHECK_MARK_SPANS_SELECTOR = Selector(f"{_PACKAGES_TABLE} tr td span:has(svg)")
PROPERTY_ROWS_SELECTOR = Selector(f"{_PACKAGES_TABLE} tr:not([class])")
DELIVERY_TIME_CELLS_SELECTOR = Selector(f"{_PACKAGES_TABLE} tr.delivery-time td")


@dataclass
class GigPackage:
    """One pricing tier offered by a gig."""

    package_type: str
    price: int
    title: str
    description: str | None = None
    properties: dict[str, str] = field(default_factory=dict)
    delivery_time: str | None = None


def _class_count(class_attribute: str) -> int:
    return len(class_attribute.split(" "))


def _package_columns(
    packages: list[GigPackage], cells: list[WrappedElement]
) -> Iterator[tuple[GigPackage, WrappedElement]]:
    """Pair each package with its column, skipping the row's label cell."""
    columns = cells[1:]
    if len(columns) > len(packages):
        raise UnexpectedError(
            f"Packages table has {len(columns)} columns but only {len(packages)} packages"
        )
    return zip(packages, columns)


def _inner_text(tab: WrappedTab, selector: Selector) -> str:
    return tab.find_element(selector).get_inner_text()


def get_gig_packages(tab: WrappedTab) -> list[GigPackage]:
    """Read every package from the gig page's packages table."""
    packages = []
    for header in tab.find_elements(HEADER_CELLS_SELECTOR)[1:]:
        price = STRING_CLEANER.as_int(_inner_text(tab, header.selector.append(".price-wrapper")))
        packages.append(
            GigPackage(
                package_type=_inner_text(tab, header.selector.append(".type")),
                price=price,
                title=_inner_text(tab, header.selector.append(".title")),
            )
        )

    description_cells = tab.find_elements(DESCRIPTION_CELLS_SELECTOR)
    for package, cell in _package_columns(packages, description_cells):
        package.description = cell.get_inner_text()

    # A ticked check mark is the svg span carrying the most classes.
    checked_class_count = 0
    for span in tab.find_elements(CHECK_MARK_SPANS_SELECTOR):
        class_attribute = span.get_attribute_value("class")
        if class_attribute is not None:
            log.debug("SVG span class: %s", class_attribute)
            checked_class_count = max(checked_class_count, _class_count(class_attribute))
    log.debug("SVG span class count for checked: %s", checked_class_count)

    for row in tab.find_elements(PROPERTY_ROWS_SELECTOR):
        cells = tab.find_elements(row.selector.append("td"))
        if not cells:
            raise UnexpectedError("Encountered a packages table row without cells")
        row_property = cells[0].get_inner_text()
        for package, cell in _package_columns(packages, cells):
            try:
                span = tab.find_element(cell.selector.append("span:has(svg)"))
            except MarkupInteractionError:
                value = cell.get_inner_text()
            else:
                span_class = span.get_attribute_value("class")
                if span_class is None:
                    raise UnexpectedError(
                        "Encountered a span element without a class attribute"
                    )
                value = str(_class_count(span_class) == checked_class_count).lower()
            package.properties[row_property] = value

    delivery_cells = tab.find_elements(DELIVERY_TIME_CELLS_SELECTOR)
    for package, cell in _package_columns(packages, delivery_cells):
        package.delivery_time = _inner_text(tab, cell.selector.append("span:not([class])"))

    return packages