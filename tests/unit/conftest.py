"""Shared test fixtures."""

from collections.abc import Iterator

import pytest
from loguru import logger


@pytest.fixture
def log_records() -> Iterator[list[tuple[str, str]]]:
    """Collect (level, message) pairs logged through loguru."""
    records: list[tuple[str, str]] = []
    handler_id = logger.add(
        lambda message: records.append(
            (message.record["level"].name, message.record["message"])
        ),
        level="DEBUG",
    )
    yield records
    logger.remove(handler_id)
