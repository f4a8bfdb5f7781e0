import pytest

from gigscraper.categories_menu import (
    CATEGORY_LINK_ITEM,
    MAIN_CATEGORIES_SELECTOR,
    CategoriesMenu,
    Category,
    CategoryLink,
    category_group_categories,
    category_groups,
    main_categories,
)
from gigscraper.errors import AttributeNotFoundError, MarkupInteractionError, UnexpectedError
from gigscraper.selector import Selector
from gigscraper.wrapped import WrappedTab


class FakeElement:
    def __init__(self, text="", attributes=None):
        self.text = text
        self.attributes = attributes or {}
        self.hovered = 0

    def get_inner_text(self):
        return self.text

    def get_content(self):
        return self.text

    def get_attribute_value(self, name):
        return self.attributes.get(name)

    def click(self):
        pass

    def move_mouse_over(self):
        self.hovered += 1

    def scroll_into_view(self):
        pass


class FakeTab:
    def __init__(self, elements):
        self.elements = elements

    def find_element(self, selector):
        try:
            return self.elements[selector]
        except KeyError:
            raise LookupError("no element") from None

    def find_elements(self, selector):
        return []

    def wait_for_element(self, selector):
        return self.find_element(selector)


def build_menu(menu):
    dom = {}
    for i, (main_name, groups) in enumerate(menu, start=1):
        main = MAIN_CATEGORIES_SELECTOR.nth_child(i)
        dom[main] = FakeElement()
        dom[main.append("a")] = FakeElement(main_name)
        dom[main.append(".menu-panel")] = FakeElement()
        for j, (group_name, links) in enumerate(groups, start=1):
            group = main.append(".menu-bucket").nth_child(j)
            dom[group] = FakeElement()
            dom[group.append(".linked-title:first-child :first-child")] = FakeElement(group_name)
            for k, (name, href) in enumerate(links, start=2):
                link = group.append(CATEGORY_LINK_ITEM).nth_child(k).append("a")
                dom[link] = FakeElement(name, {"href": href})
    return dom


MENU = [
    (
        "Graphics",
        [
            ("Logo", [("Logo Design", "/categories/logo"), ("Brand Style", "/categories/brand")]),
            ("Print", [("Flyers", "/categories/flyers")]),
        ],
    ),
    ("Music", [("Audio", [("Mixing", "/categories/mixing")])]),
]


def test_walks_every_category_in_menu_order():
    tab = WrappedTab(FakeTab(build_menu(MENU)))
    categories = list(CategoriesMenu(tab).get_gig_categories())
    assert categories == [
        Category("Graphics", "Logo", "Logo Design", "/categories/logo"),
        Category("Graphics", "Logo", "Brand Style", "/categories/brand"),
        Category("Graphics", "Print", "Flyers", "/categories/flyers"),
        Category("Music", "Audio", "Mixing", "/categories/mixing"),
    ]


def test_main_category_without_groups_in_the_middle_is_skipped():
    menu = [MENU[0], ("Empty", []), MENU[1]]
    tab = WrappedTab(FakeTab(build_menu(menu)))
    mains = [c.main_category for c in CategoriesMenu(tab).get_gig_categories()]
    assert "Empty" not in mains
    assert mains[-1] == "Music"


def test_empty_menu_raises_unexpected():
    tab = WrappedTab(FakeTab({}))
    with pytest.raises(UnexpectedError) as info:
        CategoriesMenu(tab).get_gig_categories()
    assert str(info.value) == "Unexpected: Empty main categories iterator"


def test_first_main_category_without_groups_raises_unexpected():
    tab = WrappedTab(FakeTab(build_menu([("Lonely", [])])))
    with pytest.raises(UnexpectedError) as info:
        CategoriesMenu(tab).get_gig_categories()
    assert str(info.value) == "Unexpected: Empty category group iterator"


def test_menu_panel_selector_follows_main_category():
    tab = WrappedTab(FakeTab(build_menu(MENU)))
    first = next(main_categories(tab))
    assert first.menu_panel_selector() == (
        '#CategoriesMenu .categories li[data-level="top"]:nth-child(1) .menu-panel'
    )
    assert first.name() == "Graphics"


def test_main_categories_are_hovered():
    dom = build_menu(MENU)
    tab = WrappedTab(FakeTab(dom))
    names = [main.name() for main in main_categories(tab)]
    assert names == ["Graphics", "Music"]
    assert dom[MAIN_CATEGORIES_SELECTOR.nth_child(1)].hovered == 1
    assert dom[MAIN_CATEGORIES_SELECTOR.nth_child(2)].hovered == 1


def test_missing_panel_and_right_nav_raises():
    dom = build_menu(MENU)
    del dom[MAIN_CATEGORIES_SELECTOR.nth_child(1).append(".menu-panel")]
    tab = WrappedTab(FakeTab(dom))
    with pytest.raises(MarkupInteractionError) as info:
        next(main_categories(tab))
    assert info.value.selector == "#CategoriesMenu nav .right"


def test_missing_panel_with_right_nav_still_needs_panel():
    dom = build_menu(MENU)
    panel = MAIN_CATEGORIES_SELECTOR.nth_child(1).append(".menu-panel")
    del dom[panel]
    dom[Selector("#CategoriesMenu nav .right")] = FakeElement()
    tab = WrappedTab(FakeTab(dom))
    with pytest.raises(MarkupInteractionError) as info:
        next(main_categories(tab))
    assert info.value.selector == panel


def test_category_groups_yield_names_in_order():
    tab = WrappedTab(FakeTab(build_menu(MENU)))
    base = MAIN_CATEGORIES_SELECTOR.nth_child(1)
    assert [group.name() for group in category_groups(tab, base)] == ["Logo", "Print"]


def test_group_links_start_at_second_child():
    dom = build_menu(MENU)
    group = MAIN_CATEGORIES_SELECTOR.nth_child(2).append(".menu-bucket").nth_child(1)
    dom[group.append(CATEGORY_LINK_ITEM).nth_child(1).append("a")] = FakeElement(
        "Title", {"href": "/title"}
    )
    tab = WrappedTab(FakeTab(dom))
    links = list(category_group_categories(tab, group))
    assert links == [CategoryLink("Mixing", "/categories/mixing")]


def test_link_without_href_raises():
    dom = build_menu(MENU)
    group = MAIN_CATEGORIES_SELECTOR.nth_child(2).append(".menu-bucket").nth_child(1)
    link = group.append(CATEGORY_LINK_ITEM).nth_child(2).append("a")
    dom[link] = FakeElement("Mixing")
    tab = WrappedTab(FakeTab(dom))
    with pytest.raises(AttributeNotFoundError) as info:
        list(category_group_categories(tab, group))
    assert info.value.name == "href"
    assert info.value.selector == link