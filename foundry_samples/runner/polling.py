"""Generic "poll until terminal status" loop shared by runs, vector stores and evaluations."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, TypeVar

import structlog

from foundry_samples.common.constants import (
    POLL_BACKOFF,
    POLL_INTERVAL_SECS,
    POLL_MAX_ATTEMPTS,
    POLL_MAX_INTERVAL_SECS,
)
from foundry_samples.common.errors import PollTimeoutError

T = TypeVar("T")

_log = structlog.get_logger("polling")


@dataclass(frozen=True)
class PollPolicy:
    """Sleep schedule and attempt budget for one polling loop."""

    interval: float = POLL_INTERVAL_SECS
    backoff: float = POLL_BACKOFF
    max_interval: float = POLL_MAX_INTERVAL_SECS
    max_attempts: int = POLL_MAX_ATTEMPTS

    def delays(self) -> Iterable[float]:
        """Yield the sleep before each re-poll (``max_attempts - 1`` values)."""
        delay = self.interval
        for _ in range(max(self.max_attempts - 1, 0)):
            yield min(delay, self.max_interval)
            delay *= self.backoff


def normalize_status(value: Any) -> str:
    """Lower-case text of an SDK status (plain string or str-enum)."""
    if value is None:
        return ""
    return str(getattr(value, "value", value)).lower()


def wait_for_status(
    fetch: Callable[[], T],
    terminal: Iterable[str],
    *,
    policy: PollPolicy | None = None,
    describe: str = "resource",
    status_of: Callable[[T], Any] = lambda obj: getattr(obj, "status", None),
) -> T:
    """Call *fetch* until its status is one of *terminal*; return the last result.

    The first fetch happens immediately.  Raises PollTimeoutError once
    ``policy.max_attempts`` fetches all came back non-terminal.
    """
    policy = policy or PollPolicy()
    terminal = {normalize_status(s) for s in terminal}

    obj = fetch()
    status = normalize_status(status_of(obj))
    attempts = 1
    for delay in policy.delays():
        if status in terminal:
            return obj
        _log.debug("poll_wait", what=describe, status=status, attempt=attempts, sleep=delay)
        time.sleep(delay)
        obj = fetch()
        status = normalize_status(status_of(obj))
        attempts += 1

    if status in terminal:
        return obj
    raise PollTimeoutError(describe, attempts, status)
