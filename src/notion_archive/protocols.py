"""Protocols for dependency injection in the backup tool."""

from typing import Any, Protocol, runtime_checkable

from notion_archive.models import SearchQuery, SearchResultPage


@runtime_checkable
class ApiProtocol(Protocol):
    """Protocol for Notion API clients."""

    async def search(self, query: SearchQuery) -> SearchResultPage:
        """Return one page of search results for ``query``."""
        ...

    async def list_children(self, block_id: str) -> dict[str, Any]:
        """Return the child blocks of a page or block."""
        ...


@runtime_checkable
class WriterProtocol(Protocol):
    """Protocol for artifact writers used by the orchestrator."""

    async def persist(self, name: str, data: Any) -> None:
        """Write ``data`` as the JSON artifact called ``name``."""
        ...
