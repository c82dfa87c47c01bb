"""Top-level backup workflow."""

import asyncio
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from notion_archive.aggregator import fetch_contents
from notion_archive.config import BackupConfig
from notion_archive.fetcher import search
from notion_archive.models import Artifact, BackupSummary, EntityKind, SearchQuery
from notion_archive.protocols import ApiProtocol, WriterProtocol
from notion_archive.retry import Failure, Sleep, with_policy


class BackupState(str, Enum):
    """Stages of a backup run."""

    FETCHING_PAGES = "fetching-pages"
    FETCHING_CONTENT = "fetching-content"
    FETCHING_DATABASES = "fetching-databases"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class BackupResult:
    """Outcome of ``BackupOrchestrator.run``."""

    state: BackupState
    summary: BackupSummary | None = None
    error: str | None = None

    @property
    def exit_code(self) -> int:
        return 0 if self.state is BackupState.DONE else 1


class BackupOrchestrator:
    """Download pages, their content and databases, then write them out.

    The whole download is retried with the task budget. Every attempt starts
    from scratch: nothing fetched by a failed attempt is reused.
    """

    def __init__(
        self,
        api: ApiProtocol,
        writer: WriterProtocol,
        config: BackupConfig,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._api = api
        self._writer = writer
        self._config = config
        self._sleep = sleep
        self.state: BackupState | None = None
        self.history: list[BackupState] = []

    def _enter(self, state: BackupState) -> None:
        self.state = state
        self.history.append(state)

    async def download(self) -> BackupSummary:
        """Run one complete backup attempt."""
        policy = self._config.api_policy

        self._enter(BackupState.FETCHING_PAGES)
        logger.debug("get pages...")
        pages = await search(self._api, SearchQuery(EntityKind.PAGE), policy, sleep=self._sleep)

        self._enter(BackupState.FETCHING_CONTENT)
        logger.debug("get page contents...")
        pages_content = await fetch_contents(
            self._api, [page["id"] for page in pages], policy, sleep=self._sleep
        )

        self._enter(BackupState.FETCHING_DATABASES)
        logger.debug("get databases...")
        databases = await search(
            self._api, SearchQuery(EntityKind.DATABASE), policy, sleep=self._sleep
        )

        self._enter(BackupState.PERSISTING)
        logger.debug("writing pages...")
        await self._writer.persist(Artifact.PAGES.value, pages)
        logger.debug("writing page contents...")
        await self._writer.persist(Artifact.PAGES_CONTENT.value, pages_content)
        logger.debug("writing databases...")
        await self._writer.persist(Artifact.DATABASES.value, databases)

        summary = BackupSummary(
            pages=len(pages), databases=len(databases), page_contents=len(pages_content)
        )
        logger.info(
            "downloaded pages {}, databases {}, page contents {}",
            summary.pages,
            summary.databases,
            summary.page_contents,
        )
        return summary

    async def run(self) -> BackupResult:
        """Run the backup with retries.

        Never raises for a failed backup. Once the retries are used up the
        error message is written to the error artifact instead.
        """
        policy = self._config.task_policy
        result = await with_policy(self.download, policy, sleep=self._sleep)()

        if isinstance(result, Failure):
            logger.info("task failed err: {}", result.message)
            try:
                await self._writer.persist(Artifact.ERROR.value, {"err": result.message})
            except Exception:
                logger.exception("Failed to write the error artifact")
            self._enter(BackupState.FAILED)
            return BackupResult(state=BackupState.FAILED, error=result.message)

        self._enter(BackupState.DONE)
        logger.info("Success")
        return BackupResult(state=BackupState.DONE, summary=result)
