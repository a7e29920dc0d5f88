"""Guaranteed, best-effort release of remote resources.

Every resource a sample creates is pushed onto a :class:`ResourceStack` the
moment it exists.  Closing the stack deletes them in reverse acquisition
order (agent, then vector store, then files); each delete is guarded on its
own so one failure never stops the rest.
"""

from __future__ import annotations

from typing import Any, Callable

import structlog
from azure.core.exceptions import ResourceNotFoundError

from foundry_samples.runner.agent import OwnedResources

_log = structlog.get_logger("teardown")

# resource kind -> delete call on an AgentsClient
_RELEASERS: dict[str, Callable[[Any, str], Any]] = {
    "agent": lambda agents, rid: agents.delete_agent(rid),
    "vector_store": lambda agents, rid: agents.vector_stores.delete(rid),
    "file": lambda agents, rid: agents.files.delete(rid),
}


class ResourceStack:
    """Context manager holding release operations for owned remote resources.

    Usage::

        with ResourceStack(project.agents) as stack:
            uploaded = agents.files.upload_and_poll(...)
            stack.push("file", uploaded.id)
            ...
        # everything pushed has been deleted here, even on error
    """

    def __init__(
        self,
        agents: Any,
        *,
        on_change: Callable[[OwnedResources], None] | None = None,
    ) -> None:
        self._agents = agents
        self._entries: list[tuple[str, str]] = []
        self._on_change = on_change

    @property
    def owned(self) -> OwnedResources:
        """Structured view of what is currently held."""
        return _as_record(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, kind: str, resource_id: str) -> str:
        """Register *resource_id* for deletion; returns it for chaining."""
        if kind not in _RELEASERS:
            raise ValueError(f"unknown resource kind: {kind}")
        self._entries.append((kind, resource_id))
        _log.debug("resource_acquired", kind=kind, resource_id=resource_id)
        self._changed(self.owned)
        return resource_id

    def close(self) -> list[tuple[str, str]]:
        """Release everything in reverse order.

        Returns the ``(kind, resource_id)`` pairs whose delete failed.
        """
        failures: list[tuple[str, str]] = []
        while self._entries:
            kind, rid = self._entries.pop()
            if not release(self._agents, kind, rid):
                failures.append((kind, rid))
        # whatever could not be deleted stays on record for a later sweep
        self._changed(_as_record(failures))
        return failures

    def detach(self) -> OwnedResources:
        """Stop tracking (without deleting) and return what was held."""
        owned = self.owned
        self._entries.clear()
        return owned

    def __enter__(self) -> ResourceStack:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()

    def _changed(self, owned: OwnedResources) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(owned)
        except Exception as exc:
            _log.warning("resource_ledger_update_failed", error=str(exc))


def _as_record(entries: list[tuple[str, str]]) -> OwnedResources:
    owned = OwnedResources()
    for kind, rid in entries:
        if kind == "agent":
            owned.agent_id = rid
        elif kind == "vector_store":
            owned.vector_store_id = rid
        else:
            owned.file_ids.append(rid)
    return owned


def release(agents: Any, kind: str, resource_id: str) -> bool:
    """Delete one resource; log and swallow any failure.  True on success."""
    try:
        _RELEASERS[kind](agents, resource_id)
    except ResourceNotFoundError:
        _log.info("resource_already_released", kind=kind, resource_id=resource_id)
        return True
    except Exception as exc:
        _log.warning(
            "resource_release_failed",
            kind=kind,
            resource_id=resource_id,
            error=str(exc),
            exc_info=True,
        )
        return False
    _log.info("resource_released", kind=kind, resource_id=resource_id)
    return True


def teardown(agents: Any, resources: OwnedResources) -> list[tuple[str, str]]:
    """Delete the agent, vector store and files recorded in *resources*.

    Safe to call repeatedly on the same record: deletes of resources that
    are already gone are logged and skipped.
    """
    stack = ResourceStack(agents)
    for file_id in resources.file_ids:
        stack.push("file", file_id)
    if resources.vector_store_id:
        stack.push("vector_store", resources.vector_store_id)
    if resources.agent_id:
        stack.push("agent", resources.agent_id)
    return stack.close()
