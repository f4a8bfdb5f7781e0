import pytest

from gigscraper.errors import UnexpectedError
from gigscraper.gig_packages import get_gig_packages
from gigscraper.string_cleaner import StringCleanerError
from gigscraper.wrapped import WrappedTab

TABLE = (
    "#main-wrapper > .main-content .gig-page > .main "
    ".gig-page-packages-table table tbody tr"
)
HEADER = TABLE + ".package-type th"
DESCRIPTION = TABLE + ".description td"
SVG_SPANS = TABLE + " td span:has(svg)"
ROWS = TABLE + ":not([class])"
ROW_CELLS = ROWS + " td"
ROW_SPAN = ROW_CELLS + " span:has(svg)"
DELIVERY = TABLE + ".delivery-time td"
DELIVERY_SPAN = DELIVERY + " span:not([class])"


class FakeElement:
    def __init__(self, text="", attributes=None):
        self.text = text
        self.attributes = attributes or {}

    def get_content(self):
        return self.text

    def get_inner_text(self):
        return self.text

    def get_attribute_value(self, name):
        return self.attributes.get(name)

    def click(self):
        pass

    def move_mouse_over(self):
        pass

    def scroll_into_view(self):
        pass


class FakeTab:
    def __init__(self, elements):
        self.elements = elements

    def find_element(self, selector):
        found = self.elements.get(str(selector))
        if not found:
            raise LookupError("not found")
        return found[0]

    def find_elements(self, selector):
        return list(self.elements.get(str(selector), []))

    def wait_for_element(self, selector):
        return self.find_element(selector)

    def wait_for_element_with_custom_timeout(self, selector, timeout):
        return self.find_element(selector)


def _page(price="$25", row_value=None, row_span=None):
    elements = {
        HEADER: [FakeElement(""), FakeElement("Basic")],
        HEADER + " .price-wrapper": [FakeElement(price)],
        HEADER + " .type": [FakeElement("Basic")],
        HEADER + " .title": [FakeElement("Starter logo")],
        DESCRIPTION: [FakeElement(""), FakeElement("One concept")],
        SVG_SPANS: [
            FakeElement(attributes={"class": "icon a b"}),
            FakeElement(attributes={"class": "icon a"}),
        ],
        ROWS: [FakeElement()],
        ROW_CELLS: [FakeElement("Revisions"), FakeElement(row_value or "")],
        DELIVERY: [FakeElement(""), FakeElement("")],
        DELIVERY_SPAN: [FakeElement("3 days")],
    }
    if row_span is not None:
        elements[ROW_SPAN] = [row_span]
    return WrappedTab(FakeTab(elements))


def test_package_fields_collected():
    packages = get_gig_packages(_page(row_value="3"))
    assert len(packages) == 1
    package = packages[0]
    assert package.price == 25
    assert package.title == "Starter logo"
    assert package.description == "One concept"
    assert package.delivery_time == "3 days"
    assert package.properties == {"Revisions": "3"}


def test_checked_mark_detected_by_class_count():
    span = FakeElement(attributes={"class": "icon a b"})
    packages = get_gig_packages(_page(row_span=span))
    assert packages[0].properties == {"Revisions": "true"}


def test_unchecked_mark_detected_by_class_count():
    span = FakeElement(attributes={"class": "icon a"})
    packages = get_gig_packages(_page(row_span=span))
    assert packages[0].properties == {"Revisions": "false"}


def test_span_without_class_is_unexpected():
    with pytest.raises(UnexpectedError):
        get_gig_packages(_page(row_span=FakeElement()))


def test_price_without_digits_fails():
    with pytest.raises(StringCleanerError):
        get_gig_packages(_page(price="free"))


def test_empty_table_gives_no_packages():
    assert get_gig_packages(WrappedTab(FakeTab({}))) == []