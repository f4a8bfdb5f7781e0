"""The scraping loop: walks the gig categories and reads one unscraped gig of each."""

from __future__ import annotations

import argparse
import itertools
import logging
import sys
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin, urlparse

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError

from .categories_menu import CategoriesMenu, Category
from .cdp import Browser, CdpError
from .config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from .db import CreateParams, GigCategoryGigs, GigCategoryRepo, GigRepo, ScrapeGigsOutput
from .errors import ScraperError, UnexpectedError
from .gig_page import GigPage
from .gigs_page import GigsPage
from .site_nav import SiteNav
from .wrapped import WrappedTab

log = logging.getLogger(__name__)

BASE_URL = "https://www.fiverr.com/"
SITE_TAB_MARKER = "fiverr"
PAGE_LOAD_TIMEOUT = 60
MAX_CONNECTIONS = 5


@dataclass(frozen=True)
class GigToScrape:
    """A gig that has no record yet and the listing page it was found on."""

    url: str
    page: int


@dataclass(frozen=True)
class _Repositories:
    categories: GigCategoryRepo
    gigs: GigRepo
    category_gigs: GigCategoryGigs


def find_gig_to_scrape(
    gigs_page: Any, gig_repo: Any, start_page: int, base_url: str = BASE_URL
) -> GigToScrape | None:
    """Find the first listed gig, from ``start_page`` on, that has no record yet."""
    for page in itertools.count(start_page):
        log.info("Navigating to page %s", page)
        if not gigs_page.go_to_page(page):
            return None
        for card in gigs_page.gigs():
            url = urljoin(base_url, card.url)
            path = urlparse(url).path
            if gig_repo.exists_by_path(path):
                log.info("%s - scraped", path)
                continue
            return GigToScrape(url=url, page=card.page)
    return None


def log_gig_details(gig_page: Any) -> None:
    """Read every detail of the gig page and write it to the log."""
    log.info("Gig title: %s", gig_page.get_title())
    log.info("Rating: %s", gig_page.get_gig_rating())
    log.info("Reviews count: %s", gig_page.get_gig_reviews_count())
    log.info("Description: %s", gig_page.get_gig_description())
    log.info("Metadata:")
    for entry in gig_page.get_gig_metadata():
        log.info("\t %r", entry)
    log.info("Seller rating: %s", gig_page.get_seller_rating())
    log.info("Seller ratings count: %s", gig_page.get_seller_ratings_count())
    log.info("Seller level: %s", gig_page.get_seller_level())
    log.info("Seller stats:")
    for entry in gig_page.get_seller_stats():
        log.info("\t %r", entry)
    log.info("Seller description: %s", gig_page.get_seller_description())
    visuals = gig_page.get_gig_visuals()
    log.info("Gallery visuals:")
    for entry in visuals:
        log.info("\t %r", entry)
    log.info("Gig packages:")
    log.info("%r", gig_page.get_gig_packages())
    log.info("Gig FAQs:")
    for faq in gig_page.get_gig_faqs():
        log.info("%r", faq)
    log.info("Gig reviews:")
    first_review = next(iter(gig_page.get_gig_reviews()), None)
    if first_review is not None:
        log.info("%r", first_review)


def _log_level(spec: str) -> int:
    name = spec.split(",")[0].strip().upper()
    name = {"WARN": "WARNING", "TRACE": "DEBUG"}.get(name, name)
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"invalid log level '{spec}'")
    return level


def _database_url(url: str) -> str:
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def _find_site_tab(browser: Browser) -> WrappedTab:
    scratch = browser.new_tab()
    scratch.close()
    for tab in browser.get_tabs():
        if SITE_TAB_MARKER in tab.get_url():
            return WrappedTab(tab)
    raise UnexpectedError(f"no open tab shows a '{SITE_TAB_MARKER}' page")


def _category_record(repos: _Repositories, category: Category, path: str) -> ScrapeGigsOutput:
    record = repos.categories.get_scrape_gigs(path)
    if record is not None:
        return record
    record_id = repos.categories.create(
        CreateParams(
            path=path,
            name=category.name,
            sub_group_name=category.category_group,
            main_group_name=category.main_category,
        )
    )
    return ScrapeGigsOutput(scrape_gigs=False, name=category.name, id=record_id)


def _start_page(repos: _Repositories, category_id: int, minimum_gigs: int) -> int:
    if minimum_gigs == 0:
        return 1
    page = repos.gigs.get_page_of_last_scraped_gig(category_id)
    if page is None:
        log.warning("Application not expected to reach this point!")
        return 1
    return page


def _process_category(tab: WrappedTab, repos: _Repositories, category: Category) -> None:
    category_url = urljoin(BASE_URL, category.url)
    path = urlparse(category_url).path
    log.info(
        "Processing: %s > %s > %s (%s)",
        category.main_category,
        category.category_group,
        category.name,
        category_url,
    )

    record = _category_record(repos, category, path)
    if not record.scrape_gigs:
        return

    deleted = repos.gigs.delete_partially_scraped_gigs()
    log.info("Deleted %s partially scraped gigs", deleted)

    minimum_gigs = repos.category_gigs.least_gigs_count_for_categories()
    if repos.gigs.count_for_category(record.id) != minimum_gigs:
        return

    tab.navigate_to(category_url)
    tab.wait_for_element_with_custom_timeout(GigsPage.gig_els_selector(), PAGE_LOAD_TIMEOUT)

    start_page = _start_page(repos, record.id, minimum_gigs)
    gig = find_gig_to_scrape(GigsPage(tab), repos.gigs, start_page, BASE_URL)
    if gig is None:
        log.warning("No more gigs to scrape in the %s category!", record.name)
        return

    tab.navigate_to(gig.url)
    tab.wait_for_element_with_custom_timeout(GigPage.title_selector(), PAGE_LOAD_TIMEOUT)
    log_gig_details(GigPage(tab))


def run(config: AppConfig) -> None:
    """Scrape gigs category by category, without end."""
    logging.basicConfig(level=_log_level(config.log_level))

    engine = create_engine(
        _database_url(config.database_url), pool_size=MAX_CONNECTIONS, max_overflow=0
    )
    repos = _Repositories(
        categories=GigCategoryRepo(engine),
        gigs=GigRepo(engine),
        category_gigs=GigCategoryGigs(engine),
    )

    browser = Browser.connect(config.browser_ws_url)
    tab = _find_site_tab(browser)
    log.info("Fiverr tab title: %s", tab.get_title())

    while True:
        SiteNav(tab).go_home()
        for category in CategoriesMenu(tab).get_gig_categories():
            _process_category(tab, repos, category)


def main(argv: list[str] | None = None) -> int:
    """Command line entry point."""
    parser = argparse.ArgumentParser(
        prog="gigscraper", description="Scrape gigs through a running Chrome tab."
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_PATH, help="path of the YAML configuration file"
    )
    args = parser.parse_args(argv)
    try:
        run(load_config(args.config))
    except (ScraperError, CdpError, SQLAlchemyError, ImportError, ValueError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())