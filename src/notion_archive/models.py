"""Domain models for the Notion archive."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

# Pages and databases are stored exactly as the API returns them.
Entity = dict[str, Any]

# Entity id -> raw block children response, in fetch order.
ContentMapping = dict[str, Any]


class EntityKind(str, Enum):
    """Object types accepted by the search filter."""

    PAGE = "page"
    DATABASE = "database"


class Artifact(str, Enum):
    """Named JSON files produced by one backup run."""

    PAGES = "pages"
    DATABASES = "databases"
    PAGES_CONTENT = "pagesContent"
    ERROR = "error"


@dataclass(frozen=True)
class SearchQuery:
    """A search request for one entity kind.

    A query without a cursor always asks for the first page of results.
    """

    kind: EntityKind
    cursor: str | None = None
    page_size: int = 100

    def with_cursor(self, cursor: str) -> "SearchQuery":
        """Return the same query positioned at ``cursor``."""
        return replace(self, cursor=cursor)

    def to_body(self) -> dict[str, Any]:
        """Render the JSON body for the search endpoint."""
        body: dict[str, Any] = {
            "filter": {"value": self.kind.value, "property": "object"},
            "page_size": self.page_size,
        }
        if self.cursor is not None:
            body["start_cursor"] = self.cursor
        return body


@dataclass(frozen=True)
class SearchResultPage:
    """One page of search results."""

    results: tuple[Entity, ...]
    has_more: bool
    next_cursor: str | None = None

    def __post_init__(self) -> None:
        if self.has_more and not self.next_cursor:
            msg = "search page has more results but no next cursor"
            raise ValueError(msg)

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "SearchResultPage":
        """Build a page from a raw search response."""
        return cls(
            results=tuple(response.get("results") or ()),
            has_more=bool(response.get("has_more")),
            next_cursor=response.get("next_cursor"),
        )


@dataclass(frozen=True)
class BackupSummary:
    """Counts reported after a successful run."""

    pages: int
    databases: int
    page_contents: int
