"""Notion API client."""

import asyncio
from typing import Any

import requests
from loguru import logger

from notion_archive.config import NOTION_API_URL, NOTION_API_VERSION, BackupConfig
from notion_archive.models import SearchQuery, SearchResultPage


class NotionApi:
    """Thin Notion API client.

    Requests go through a blocking ``requests.Session``; the async methods run
    them in a worker thread so the event loop only waits on I/O.
    """

    def __init__(self, config: BackupConfig) -> None:
        self.timeout = config.request_timeout
        self.sess = requests.Session()
        self.sess.headers.update(
            {
                "Authorization": f"Bearer {config.token}",
                "Notion-Version": NOTION_API_VERSION,
                "Content-Type": "application/json",
            }
        )
        if config.proxy:
            self.sess.proxies.update({"http": config.proxy, "https": config.proxy})

        logger.debug(
            "API ready: timeout {}s, proxy {!r}, version {}",
            self.timeout,
            config.proxy,
            NOTION_API_VERSION,
        )

    def call(self, method: str, path: str, body: dict[str, Any] | None = None) -> dict[str, Any]:
        """Invoke the Notion API, return json."""
        logger.debug("Making request: {} {!r} {}", method, path, repr(body)[:64])

        r = self.sess.request(
            method,
            f"{NOTION_API_URL}/{path}",
            json=body,
            timeout=self.timeout,
        )
        try:
            rv: dict[str, Any] = r.json()
        except ValueError:
            rv = {}
        if not r.ok or rv.get("object") == "error":
            msg = (
                f"API call failed: ({method} {path!r}) -> "
                f"({r.status_code!r}, {rv.get('code')!r}, {rv.get('message')!r})"
            )
            raise RuntimeError(msg)
        return rv

    async def search(self, query: SearchQuery) -> SearchResultPage:
        """Fetch one page of search results."""
        rv = await asyncio.to_thread(self.call, "POST", "search", query.to_body())
        return SearchResultPage.from_response(rv)

    async def list_children(self, block_id: str) -> dict[str, Any]:
        """Fetch the child blocks of ``block_id``. A page id is a valid block id."""
        return await asyncio.to_thread(self.call, "GET", f"blocks/{block_id}/children")
