"""Thread / message / run orchestration for a single question."""

from __future__ import annotations

from typing import Any

import structlog

from foundry_samples.common.constants import RUN_TERMINAL_STATES
from foundry_samples.runner.agent import RunOutcome
from foundry_samples.runner.polling import PollPolicy, normalize_status, wait_for_status

_log = structlog.get_logger("conversation")


def describe_error(error: Any) -> str:
    """Flatten an SDK run error (model, mapping or string) into one line."""
    if not error:
        return "unknown error"
    if isinstance(error, str):
        return error
    get = error.get if hasattr(error, "get") else lambda k: getattr(error, k, None)
    code, message = get("code"), get("message")
    if code and message:
        return f"{code}: {message}"
    return str(message or code or error)


def start_thread(agents: Any) -> str:
    thread = agents.threads.create()
    _log.info("thread_created", thread_id=thread.id)
    return thread.id


def run_conversation(
    agents: Any,
    agent_id: str,
    message: str,
    *,
    thread_id: str | None = None,
    policy: PollPolicy | None = None,
) -> RunOutcome:
    """Post *message* as the user and block until the agent's run is terminal.

    A new thread is created unless *thread_id* is given.  A failed run is
    returned (with its error detail), never raised; PollTimeoutError is
    raised if the run outlives the poll budget.
    """
    thread_id = thread_id or start_thread(agents)
    agents.messages.create(thread_id=thread_id, role="user", content=message)
    run = agents.runs.create(thread_id=thread_id, agent_id=agent_id)
    _log.info("run_started", thread_id=thread_id, run_id=run.id, agent_id=agent_id)

    run = wait_for_status(
        lambda: agents.runs.get(thread_id=thread_id, run_id=run.id),
        RUN_TERMINAL_STATES,
        policy=policy,
        describe=f"run {run.id}",
    )
    status = normalize_status(run.status)
    last_error = ""
    if status != "completed":
        last_error = describe_error(run.last_error) if run.last_error else f"run {status}"
    outcome = RunOutcome(thread_id=thread_id, run_id=run.id, status=status, last_error=last_error)
    if outcome.completed:
        _log.info("run_completed", thread_id=thread_id, run_id=run.id)
    else:
        _log.warning("run_not_completed", thread_id=thread_id, run_id=run.id,
                     status=status, error=outcome.last_error)
    return outcome
