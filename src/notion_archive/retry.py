"""Bounded retries that hand back the last failure instead of raising it."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeVar

from loguru import logger

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class Failure:
    """The error left over once a wrapped operation has run out of attempts."""

    error: Exception
    attempts: int

    @property
    def message(self) -> str:
        return str(self.error)

    def raise_error(self) -> NoReturn:
        raise self.error


@dataclass(frozen=True)
class RetryPolicy:
    """Number of retries after the first try, and the pause between tries."""

    attempts: int
    delay: float

    def __post_init__(self) -> None:
        if self.attempts < 0:
            object.__setattr__(self, "attempts", 0)
        if self.delay < 0:
            msg = f"retry delay must not be negative: {self.delay!r}"
            raise ValueError(msg)


class RetryingCall(Generic[T]):
    """An async callable that retries ``op`` and returns ``T | Failure``.

    Every call starts with a fresh attempt budget.
    """

    def __init__(
        self,
        op: Callable[..., Awaitable[T]],
        attempts: int,
        delay: float,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.op = op
        self.attempts = max(attempts, 0)
        self.delay = delay
        self._sleep = sleep
        self.name = getattr(op, "__qualname__", None) or repr(op)

    async def __call__(self, *args: Any, **kwargs: Any) -> T | Failure:
        remaining = self.attempts
        tries = 0
        while True:
            tries += 1
            logger.debug("requesting... {} {!r}", self.name, args)
            try:
                return await self.op(*args, **kwargs)
            except Exception as e:
                if remaining <= 0:
                    return Failure(error=e, attempts=tries)
                remaining -= 1
                logger.info(
                    "wait for {}s, remaining attempts {}, {} {!r}: {}",
                    self.delay,
                    remaining,
                    self.name,
                    args,
                    e,
                )
                await self._sleep(self.delay)


def with_retry(
    op: Callable[..., Awaitable[T]],
    attempts: int,
    delay: float,
    *,
    sleep: Sleep = asyncio.sleep,
) -> RetryingCall[T]:
    """Wrap ``op`` so that it is retried up to ``attempts`` more times.

    Args:
        op: Coroutine function to call.
        attempts: Retries after the first try. 0 means a single try;
            negative values are treated as 0.
        delay: Seconds to wait between two tries.
        sleep: Awaitable used for the pause between tries.

    Returns:
        A callable taking the same arguments as ``op``. It returns the result
        of the first successful try, or a ``Failure`` holding the last error
        once the attempts are used up. It never raises ``Exception``.
    """
    return RetryingCall(op, attempts, delay, sleep=sleep)


def with_policy(
    op: Callable[..., Awaitable[T]],
    policy: RetryPolicy,
    *,
    sleep: Sleep = asyncio.sleep,
) -> RetryingCall[T]:
    """Same as ``with_retry`` with the budget taken from ``policy``."""
    return RetryingCall(op, policy.attempts, policy.delay, sleep=sleep)


def unwrap(result: T | Failure) -> T:
    """Return ``result``, raising the captured error if it is a ``Failure``."""
    if isinstance(result, Failure):
        raise result.error
    return result
