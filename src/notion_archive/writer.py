"""Write backup artifacts into a per-run directory."""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger


def run_directory_name(now: datetime | None = None) -> str:
    """Name of a run directory, e.g. ``20240131_235959``."""
    return (now or datetime.now()).strftime("%Y%m%d_%H%M%S")


class ArtifactWriter:
    """Write JSON artifacts for one backup run.

    All artifacts land in ``<base_dir>/<run_name>/<name>.json``. The run name is
    fixed when the writer is created, so retries of the same run overwrite the
    artifacts they wrote before instead of starting a new directory.
    """

    def __init__(
        self,
        base_dir: str | Path,
        *,
        run_name: str | None = None,
        dry_run: bool = False,
    ) -> None:
        self.run_dir = Path(base_dir).resolve() / (run_name or run_directory_name())
        self.dry_run = dry_run

        # Artifacts written this run, in write order. Rewrites are listed once.
        self.written: list[Path] = []

        logger.debug("Writer ready, run_dir {!r}, dry_run {!r}", str(self.run_dir), dry_run)

    def path_for(self, name: str) -> Path:
        """Absolute path of the artifact called ``name``."""
        if Path(name).is_absolute():
            msg = f"must be relative: {name!r}"
            raise ValueError(msg)
        path = (self.run_dir / f"{name}.json").resolve()
        if not path.is_relative_to(self.run_dir):
            msg = f"Path escapes run directory: {str(path)!r}"
            raise ValueError(msg)
        return path

    async def persist(self, name: str, data: Any) -> None:
        """Serialize ``data`` as JSON and write it as artifact ``name``.

        Raises OSError if the storage write fails.
        """
        path = self.path_for(name)
        contents = json.dumps(data, ensure_ascii=False, indent=4) + "\n"

        if self.dry_run:
            logger.info("dry-run: would write {!r} ({} bytes)", str(path), len(contents))
            return

        await asyncio.to_thread(self._write, path, contents)
        if path not in self.written:
            self.written.append(path)

    def _write(self, path: Path, contents: str) -> None:
        logger.debug("Writing {!r}", str(path))
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(contents)
