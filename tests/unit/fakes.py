"""Fake implementations for testing the backup tool."""

import json
from collections.abc import Callable
from typing import Any

from notion_archive.models import EntityKind, SearchQuery, SearchResultPage


class FakeApi:
    """In-memory fake for NotionApi.

    Search pages are keyed by (kind, cursor). Records all calls for assertions.
    """

    def __init__(self) -> None:
        self.pages: dict[tuple[EntityKind, str | None], SearchResultPage] = {}
        self.children: dict[str, dict[str, Any]] = {}
        self.failures: dict[str, Callable[[], Exception | None]] = {}
        self.calls: list[tuple[str, Any]] = []

    def add_search_page(
        self,
        kind: EntityKind,
        results: list[dict[str, Any]],
        *,
        cursor: str | None = None,
        next_cursor: str | None = None,
    ) -> None:
        """Register the page returned for ``kind`` at ``cursor``."""
        self.pages[(kind, cursor)] = SearchResultPage(
            results=tuple(results),
            has_more=next_cursor is not None,
            next_cursor=next_cursor,
        )

    def add_children(self, block_id: str, response: dict[str, Any]) -> None:
        """Register the block children response for ``block_id``."""
        self.children[block_id] = response

    def fail(self, key: str, error: Exception, *, times: int | None = None) -> None:
        """Make calls for ``key`` raise ``error``, forever or for the first ``times`` calls.

        ``key`` is a block id, ``"search:<kind>"``, or ``"search:<kind>:<cursor>"``.
        """
        remaining = [times]

        def next_error() -> Exception | None:
            if remaining[0] is None:
                return error
            if remaining[0] <= 0:
                return None
            remaining[0] -= 1
            return error

        self.failures[key] = next_error

    def _maybe_fail(self, key: str) -> None:
        if key in self.failures:
            error = self.failures[key]()
            if error is not None:
                raise error

    async def search(self, query: SearchQuery) -> SearchResultPage:
        """Return the registered page and record the call."""
        self.calls.append(("search", query))
        self._maybe_fail(f"search:{query.kind.value}")
        if query.cursor is not None:
            self._maybe_fail(f"search:{query.kind.value}:{query.cursor}")
        key = (query.kind, query.cursor)
        if key not in self.pages:
            if query.cursor is None:
                return SearchResultPage(results=(), has_more=False)
            msg = f"FakeApi: no search page registered for {key!r}"
            raise KeyError(msg)
        return self.pages[key]

    async def list_children(self, block_id: str) -> dict[str, Any]:
        """Return the registered children and record the call."""
        self.calls.append(("list_children", block_id))
        self._maybe_fail(block_id)
        if block_id not in self.children:
            msg = f"FakeApi: no children registered for {block_id!r}"
            raise KeyError(msg)
        return self.children[block_id]

    def calls_to(self, name: str) -> list[Any]:
        return [arg for call, arg in self.calls if call == name]


class FakeWriter:
    """In-memory fake for ArtifactWriter."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.writes: list[str] = []
        self.error: Exception | None = None

    async def persist(self, name: str, data: Any) -> None:
        """Store the artifact as JSON text, or raise the configured error."""
        self.writes.append(name)
        if self.error is not None:
            raise self.error
        self.files[name] = json.dumps(data, indent=4) + "\n"

    def read(self, name: str) -> Any:
        return json.loads(self.files[name])


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays and returns at once."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
