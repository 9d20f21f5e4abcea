"""Bounded polling for conditions that settle asynchronously."""
from __future__ import annotations

import asyncio
import inspect
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)

Predicate = Callable[[], Union[Any, Awaitable[Any]]]


@dataclass(slots=True, frozen=True)
class WaitPolicy:
    """Timeout and retry interval for a polling wait, both in seconds."""

    timeout: float = 2.0
    interval: float = 0.05

    def __post_init__(self) -> None:
        if self.timeout < 0:
            raise ValueError("timeout must be >= 0")
        if self.interval <= 0:
            raise ValueError("interval must be > 0")


async def wait_for(predicate: Predicate, policy: WaitPolicy | None = None) -> Any:
    """Call ``predicate`` until it stops raising ``AssertionError``.

    The predicate may be a plain callable or return an awaitable. It is
    always attempted at least once. When the deadline passes, the last
    ``AssertionError`` is re-raised unchanged; any other exception
    propagates on the attempt that raised it.
    """

    policy = policy or WaitPolicy()
    deadline = time.monotonic() + policy.timeout
    attempts = 0
    last_error: Optional[AssertionError] = None
    while True:
        attempts += 1
        try:
            result = predicate()
            if inspect.isawaitable(result):
                result = await result
            return result
        except AssertionError as exc:
            last_error = exc
        if time.monotonic() >= deadline:
            break
        await asyncio.sleep(policy.interval)
    logger.debug("wait_for gave up after %d attempts (timeout=%ss)", attempts, policy.timeout)
    raise last_error


__all__ = ["WaitPolicy", "wait_for"]
