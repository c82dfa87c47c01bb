"""Configuration for notion-archive."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from notion_archive.retry import RetryPolicy

# API token location, used when NOTION_TOKEN is not set. First file found is used.
API_TOKEN_FILES: list[Path] = [
    Path("~/.config/notion-archive-token.txt").expanduser(),
    Path("~/.config/secret/notion-archive-token.txt").expanduser(),
]

NOTION_API_URL: str = "https://api.notion.com/v1"
NOTION_API_VERSION: str = "2022-06-28"

DEFAULT_OUTPUT_DIR: str = "files"

# Defaults in milliseconds, the unit of the environment variables.
DEFAULT_CLIENT_TIMEOUT_MS: int = 10_000
DEFAULT_API_RETRY_MS: int = 1_000
DEFAULT_TASK_RETRY_MS: int = 3_000

DEFAULT_TASK_ATTEMPTS: int = 10
DEFAULT_API_ATTEMPTS: int = 3

LOG_LEVELS: tuple[str, ...] = ("info", "debug")


def _env_int(environ: Mapping[str, str], name: str, default: int, *, keep_zero: bool) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ValueError(msg) from None
    if value == 0 and not keep_zero:
        return default
    return value


def _find_token(environ: Mapping[str, str]) -> str:
    token = environ.get("NOTION_TOKEN", "").strip()
    if token:
        return token
    for token_path in API_TOKEN_FILES:
        try:
            token = token_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            continue
        if token:
            return token
    msg = f"NOTION_TOKEN is not set and no token file found, was looking at {API_TOKEN_FILES!r}"
    raise ValueError(msg)


@dataclass(frozen=True)
class BackupConfig:
    """Settings for one backup run, resolved once at startup."""

    token: str
    request_timeout: float = DEFAULT_CLIENT_TIMEOUT_MS / 1000
    task_attempts: int = DEFAULT_TASK_ATTEMPTS
    task_delay: float = DEFAULT_TASK_RETRY_MS / 1000
    api_attempts: int = DEFAULT_API_ATTEMPTS
    api_delay: float = DEFAULT_API_RETRY_MS / 1000
    log_level: str = "info"
    proxy: str | None = None
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)

    @property
    def verbose(self) -> bool:
        return self.log_level == "debug"

    @property
    def task_policy(self) -> RetryPolicy:
        """Retry budget for the whole backup workflow."""
        return RetryPolicy(self.task_attempts, self.task_delay)

    @property
    def api_policy(self) -> RetryPolicy:
        """Retry budget for a single API call."""
        return RetryPolicy(self.api_attempts, self.api_delay)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BackupConfig":
        """Build the configuration from environment variables.

        Durations are read in milliseconds. A zero or empty value falls back to
        the default, except SEARCH_TRY_TIME where 0 disables API retries.
        """
        env = os.environ if environ is None else environ

        log_level = env.get("LOG_LEVEL", "").strip().lower() or "info"
        if log_level not in LOG_LEVELS:
            msg = f"LOG_LEVEL must be one of {LOG_LEVELS!r}, got {log_level!r}"
            raise ValueError(msg)

        timeout_ms = _env_int(env, "CLIENT_TIMEOUT", DEFAULT_CLIENT_TIMEOUT_MS, keep_zero=False)
        task_ms = _env_int(env, "TASK_RETRY_TIME", DEFAULT_TASK_RETRY_MS, keep_zero=False)
        api_ms = _env_int(env, "API_RETRY_TIME", DEFAULT_API_RETRY_MS, keep_zero=False)

        return cls(
            token=_find_token(env),
            request_timeout=timeout_ms / 1000,
            task_attempts=_env_int(env, "TASK_TRY_TIME", DEFAULT_TASK_ATTEMPTS, keep_zero=False),
            task_delay=task_ms / 1000,
            api_attempts=_env_int(env, "SEARCH_TRY_TIME", DEFAULT_API_ATTEMPTS, keep_zero=True),
            api_delay=api_ms / 1000,
            log_level=log_level,
            proxy=env.get("http_proxy") or None,
            output_dir=Path(env.get("OUTPUT_DIR") or DEFAULT_OUTPUT_DIR).expanduser(),
        )
