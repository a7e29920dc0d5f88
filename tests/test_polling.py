from enum import Enum
from types import SimpleNamespace as NS

import pytest

from foundry_samples.common.errors import PollTimeoutError
from foundry_samples.runner.polling import PollPolicy, normalize_status, wait_for_status


class RunStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def test_terminal_on_first_fetch_does_not_sleep(sleeps):
    obj = NS(status="completed")
    assert wait_for_status(lambda: obj, {"completed"}) is obj
    assert sleeps == []


def test_backoff_is_capped(sleeps):
    seq = iter([
        NS(status="queued"),
        NS(status="in_progress"),
        NS(status="in_progress"),
        NS(status="completed"),
    ])
    policy = PollPolicy(interval=1.0, backoff=2.0, max_interval=3.0, max_attempts=10)

    result = wait_for_status(lambda: next(seq), {"completed", "failed"}, policy=policy)

    assert result.status == "completed"
    assert sleeps == [1.0, 2.0, 3.0]


def test_attempt_budget_exhausted(sleeps):
    policy = PollPolicy(interval=0.5, backoff=1.0, max_attempts=3)

    with pytest.raises(PollTimeoutError) as err:
        wait_for_status(
            lambda: NS(status="in_progress"), {"completed"},
            policy=policy, describe="run run_1",
        )

    assert err.value.attempts == 3
    assert err.value.last_status == "in_progress"
    assert "run run_1" in str(err.value)
    assert sleeps == [0.5, 0.5]


def test_enum_statuses_match_plain_terminal_names():
    seq = iter([NS(status=RunStatus.IN_PROGRESS), NS(status=RunStatus.COMPLETED)])
    result = wait_for_status(lambda: next(seq), {"Completed"})
    assert result.status is RunStatus.COMPLETED


def test_custom_status_accessor():
    result = wait_for_status(lambda: {"state": "done"}, {"done"}, status_of=lambda d: d["state"])
    assert result == {"state": "done"}


def test_normalize_status():
    assert normalize_status(RunStatus.COMPLETED) == "completed"
    assert normalize_status("FAILED") == "failed"
    assert normalize_status(None) == ""


def test_delays_length_matches_attempts():
    assert len(list(PollPolicy(max_attempts=5).delays())) == 4
    assert list(PollPolicy(max_attempts=1).delays()) == []
