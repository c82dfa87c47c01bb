"""Notion workspace backup tools."""

from notion_archive.api import NotionApi
from notion_archive.config import BackupConfig
from notion_archive.orchestrator import BackupOrchestrator, BackupResult, BackupState
from notion_archive.protocols import ApiProtocol, WriterProtocol
from notion_archive.retry import Failure, RetryPolicy, with_retry
from notion_archive.writer import ArtifactWriter

__all__ = [
    "ApiProtocol",
    "ArtifactWriter",
    "BackupConfig",
    "BackupOrchestrator",
    "BackupResult",
    "BackupState",
    "Failure",
    "NotionApi",
    "RetryPolicy",
    "WriterProtocol",
    "with_retry",
]
