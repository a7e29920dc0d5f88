"""Reading agent replies back out of a thread."""

from __future__ import annotations

from typing import Any

from azure.ai.agents.models import ListSortOrder

from foundry_samples.common.constants import NO_RESPONSE
from foundry_samples.runner.agent import RunOutcome
from foundry_samples.runner.polling import normalize_status


def message_text(message: Any) -> str:
    """Concatenate the text parts of one thread message."""
    parts = getattr(message, "text_messages", None) or []
    return "\n".join(p.text.value for p in parts if getattr(p, "text", None))


def last_assistant_text(agents: Any, thread_id: str, run_id: str | None = None) -> str:
    """Text of the newest assistant message in the thread, or NO_RESPONSE.

    With *run_id*, only messages produced by that run count, so an earlier
    answer on a reused thread is never mistaken for this run's reply.
    """
    for message in agents.messages.list(thread_id=thread_id, order=ListSortOrder.DESCENDING):
        if normalize_status(message.role) != "assistant":
            continue
        if run_id and getattr(message, "run_id", None) != run_id:
            continue
        text = message_text(message)
        if text:
            return text
    return NO_RESPONSE


def reply_text(agents: Any, outcome: RunOutcome) -> str:
    """What to show for a finished run: its error unless it completed, else its reply."""
    if not outcome.completed:
        return f"Error: {outcome.last_error}"
    return last_assistant_text(agents, outcome.thread_id, outcome.run_id)


def transcript(agents: Any, thread_id: str) -> list[tuple[str, str]]:
    """All ``(role, text)`` pairs of a thread, oldest first."""
    return [
        (normalize_status(m.role), message_text(m))
        for m in agents.messages.list(thread_id=thread_id, order=ListSortOrder.ASCENDING)
    ]
