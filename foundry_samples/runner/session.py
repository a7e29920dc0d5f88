"""Scoped agent session: provision on entry, converse, tear down on exit."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any, Iterable

import structlog

from foundry_samples.common import redis as ledger
from foundry_samples.runner.agent import OwnedResources, ProvisionedAgent, Reply
from foundry_samples.runner.conversation import run_conversation, start_thread
from foundry_samples.runner.extraction import reply_text
from foundry_samples.runner.polling import PollPolicy
from foundry_samples.runner.provisioning import provision_agent
from foundry_samples.runner.teardown import ResourceStack, teardown


class AgentSession:
    """Context manager owning one agent (and its file-search resources).

    Usage::

        with AgentSession(project.agents, model=..., instructions=...) as session:
            reply = session.ask("What is the capital of France?")
        # agent, vector store and files are deleted here

    With ``track=True`` the owned-resource record is mirrored into the Redis
    ledger for the session's lifetime so :func:`sweep_orphans` can reclaim it
    if the process dies.
    """

    def __init__(
        self,
        agents: Any,
        *,
        model: str,
        instructions: str,
        name: str | None = None,
        files: Iterable[Path | str] = (),
        policy: PollPolicy | None = None,
        track: bool = False,
    ) -> None:
        self._agents = agents
        self._model = model
        self._instructions = instructions
        self._name = name
        self._files = list(files)
        self._policy = policy
        self.session_id = f"session-{uuid.uuid4().hex[:12]}"
        self.thread_id: str | None = None
        self.provisioned: ProvisionedAgent | None = None
        self.failures: list[tuple[str, str]] = []
        self._log = structlog.get_logger("session").bind(session_id=self.session_id)
        self._stack = ResourceStack(agents, on_change=self._record if track else None)

    @property
    def agent_id(self) -> str:
        if self.provisioned is None:
            raise RuntimeError("session is not open")
        return self.provisioned.agent_id

    @property
    def resources(self) -> OwnedResources:
        return self._stack.owned

    def __enter__(self) -> AgentSession:
        try:
            self.provisioned = provision_agent(
                self._agents,
                self._model,
                self._instructions,
                files=self._files,
                name=self._name,
                stack=self._stack,
                policy=self._policy,
            )
        except BaseException:
            self.close()
            raise
        self._log.info("session_open", agent_id=self.provisioned.agent_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        """Release every owned resource (idempotent)."""
        self.failures = self._stack.close()
        if self.failures:
            self._log.warning("session_teardown_incomplete", failures=self.failures)
        else:
            self._log.info("session_closed")

    def ask(self, question: str, *, new_thread: bool = False) -> Reply:
        """Ask one question; the session thread is reused unless *new_thread*."""
        if new_thread or self.thread_id is None:
            self.thread_id = start_thread(self._agents)
        outcome = run_conversation(
            self._agents,
            self.agent_id,
            question,
            thread_id=self.thread_id,
            policy=self._policy,
        )
        return Reply(text=reply_text(self._agents, outcome), outcome=outcome)

    def _record(self, owned: OwnedResources) -> None:
        if owned:
            ledger.record_session(self.session_id, owned.to_dict())
        else:
            ledger.forget_session(self.session_id)


def sweep_orphans(agents: Any) -> dict[str, list[tuple[str, str]]]:
    """Tear down every session left in the ledger by a process that died.

    Returns ``{session_id: failures}``; sessions whose teardown fully
    succeeded are removed from the ledger.
    """
    log = structlog.get_logger("ledger")
    report: dict[str, list[tuple[str, str]]] = {}
    for session_id, record in ledger.pending_sessions().items():
        log.info("sweeping_session", session_id=session_id, **record)
        failures = teardown(agents, OwnedResources.from_dict(record))
        report[session_id] = failures
        if not failures:
            ledger.forget_session(session_id)
    return report
