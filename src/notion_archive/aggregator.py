"""Fetch the content of pages one after another."""

import asyncio
from collections.abc import Iterable

from loguru import logger

from notion_archive.models import ContentMapping
from notion_archive.protocols import ApiProtocol
from notion_archive.retry import Failure, RetryPolicy, Sleep, with_policy


async def fetch_contents(
    api: ApiProtocol,
    ids: Iterable[str],
    policy: RetryPolicy,
    *,
    sleep: Sleep = asyncio.sleep,
) -> ContentMapping:
    """Fetch the child blocks of each id, strictly in order.

    Only one request is in flight at a time. Each fetch gets its own retry
    budget; the first fetch that runs out of retries raises its error and the
    remaining ids are not fetched.

    Returns:
        Mapping of id to the raw block children response, in fetch order.
    """
    contents: ContentMapping = {}
    for block_id in ids:
        fetch = with_policy(api.list_children, policy, sleep=sleep)
        result = await fetch(block_id)
        if isinstance(result, Failure):
            logger.debug("giving up on content of {} after {} tries", block_id, result.attempts)
            result.raise_error()
        contents[block_id] = result
    logger.debug("fetched content of {} pages", len(contents))
    return contents
