"""Follow search cursors until every result has been fetched."""

import asyncio

from loguru import logger

from notion_archive.models import Entity, SearchQuery
from notion_archive.protocols import ApiProtocol
from notion_archive.retry import RetryPolicy, Sleep, unwrap, with_policy


async def fetch_all(api: ApiProtocol, query: SearchQuery) -> list[Entity]:
    """Return the results of every page of ``query``, in page order.

    Errors from the API are not caught: a failure on any page aborts the
    whole traversal.
    """
    results: list[Entity] = []
    while True:
        page = await api.search(query)
        results.extend(page.results)
        if not page.has_more:
            logger.debug("no more search results for {!r}", query)
            return results
        logger.debug("load more, cursor: {}", page.next_cursor)
        query = query.with_cursor(page.next_cursor)  # type: ignore[arg-type]


async def search(
    api: ApiProtocol,
    query: SearchQuery,
    policy: RetryPolicy,
    *,
    sleep: Sleep = asyncio.sleep,
) -> list[Entity]:
    """Fetch all results of ``query``, retrying the traversal as a whole.

    A retry starts again from the first page, not from the cursor that failed.
    Raises the last error once the retries are used up.
    """
    return unwrap(await with_policy(fetch_all, policy, sleep=sleep)(api, query))
