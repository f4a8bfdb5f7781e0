"""Database access for gig categories and scraped gigs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError

from .errors import DatabaseError, UnexpectedError

_NO_ROWS = "no rows returned by a query that expected to return at least one row"
_NO_RETURNED_RECORD = (
    "expected record to be returned after successful execution of create "
)

_LEAST_GIGS_QUERY = """
    SELECT gc.id, gc.path, gc.name, COALESCE(gig_count, 0) as gig_count
    FROM gig_category gc
    LEFT JOIN (
        SELECT category_id, COUNT(*) as gig_count
        FROM gig
        GROUP BY category_id
    ) g ON gc.id = g.category_id
    WHERE gc.scrape_gigs = true
    ORDER BY gig_count ASC
    LIMIT 1
"""


@dataclass(frozen=True)
class CreateParams:
    """Values of a new gig category record."""

    path: str
    name: str
    sub_group_name: str
    main_group_name: str


@dataclass(frozen=True)
class ScrapeGigsOutput:
    """Whether a category's gigs are to be scraped, with its name and id."""

    scrape_gigs: bool
    name: str
    id: int


def _fetch_one(engine: Engine, sql: str, **params: Any) -> Row | None:
    try:
        with engine.begin() as connection:
            return connection.execute(text(sql), params).first()
    except SQLAlchemyError as error:
        raise DatabaseError(error) from error


def _require(row: Row | None) -> Row:
    if row is None:
        raise DatabaseError(_NO_ROWS)
    return row


class GigCategoryGigs:
    """Queries spanning gig categories and their gigs."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def least_gigs_count_for_categories(self) -> int:
        """The smallest number of gigs stored for any category marked for scraping."""
        row = _require(_fetch_one(self._engine, _LEAST_GIGS_QUERY))
        if row.gig_count is None:
            raise UnexpectedError("expected gig_count to have a value")
        return int(row.gig_count)


class GigCategoryRepo:
    """Stores gig categories."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_scrape_gigs(self, path: str) -> ScrapeGigsOutput | None:
        """The category stored under ``path``, or None when there is none."""
        row = _fetch_one(
            self._engine,
            "SELECT id, scrape_gigs, name FROM gig_category WHERE path = :path",
            path=path,
        )
        if row is None:
            return None
        return ScrapeGigsOutput(
            scrape_gigs=bool(row.scrape_gigs), name=row.name, id=int(row.id)
        )

    def create(self, params: CreateParams) -> int:
        """Insert a category and return its id."""
        row = _fetch_one(
            self._engine,
            """
            INSERT INTO gig_category (path, name, sub_group_name, main_group_name)
            VALUES (:path, :name, :sub_group_name, :main_group_name)
            RETURNING id
            """,
            path=params.path,
            name=params.name,
            sub_group_name=params.sub_group_name,
            main_group_name=params.main_group_name,
        )
        if row is None:
            raise UnexpectedError(_NO_RETURNED_RECORD)
        return int(row.id)

    def record_with_least_gigs(self) -> int:
        """The id of the category marked for scraping that has the fewest gigs."""
        row = _fetch_one(self._engine, _LEAST_GIGS_QUERY)
        if row is None:
            raise UnexpectedError(_NO_RETURNED_RECORD)
        return int(row.id)


class GigRepo:
    """Stores scraped gigs."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def count_for_category(self, category_id: int) -> int:
        """The number of gigs stored for a category; raises if it has none."""
        row = _require(
            _fetch_one(
                self._engine,
                """
                SELECT COUNT(*) as gig_count
                FROM gig
                WHERE category_id = :category_id
                GROUP BY category_id
                """,
                category_id=category_id,
            )
        )
        if row.gig_count is None:
            raise UnexpectedError("expected gig_count to have a value")
        return int(row.gig_count)

    def delete_partially_scraped_gigs(self) -> int:
        """Delete every gig whose scrape did not complete; return how many went."""
        try:
            with self._engine.begin() as connection:
                result = connection.execute(
                    text("DELETE FROM gig WHERE scrape_completed = false")
                )
                return int(result.rowcount)
        except SQLAlchemyError as error:
            raise DatabaseError(error) from error

    def get_page_of_last_scraped_gig(self, category_id: int) -> int | None:
        """The listing page of the category's most recently stored gig, if any."""
        row = _fetch_one(
            self._engine,
            """
            SELECT page
            FROM gig
            WHERE category_id = :category_id
            ORDER BY id DESC
            LIMIT 1
            """,
            category_id=category_id,
        )
        return None if row is None else int(row.page)

    def exists_by_path(self, path: str) -> bool:
        """Whether a gig with this path is stored."""
        row = _fetch_one(
            self._engine, "SELECT id FROM gig WHERE path = :path LIMIT 1", path=path
        )
        return row is not None