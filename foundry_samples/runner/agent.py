"""Local records describing provisioned agents and finished runs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class OwnedResources:
    """Remote resources a sample created and must delete when it is done."""

    agent_id: str = ""
    vector_store_id: str = ""
    file_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> OwnedResources:
        return cls(
            agent_id=data.get("agent_id") or "",
            vector_store_id=data.get("vector_store_id") or "",
            file_ids=list(data.get("file_ids") or []),
        )

    def __bool__(self) -> bool:
        return bool(self.agent_id or self.vector_store_id or self.file_ids)


@dataclass
class ProvisionedAgent:
    """SDK agent handle plus the record of everything created for it."""

    agent: Any
    resources: OwnedResources

    @property
    def agent_id(self) -> str:
        return self.agent.id


@dataclass
class RunOutcome:
    """Terminal state of one agent run."""

    thread_id: str
    run_id: str
    status: str                  # completed | failed | cancelled | expired
    last_error: str = ""

    @property
    def completed(self) -> bool:
        return self.status == "completed"

    @property
    def failed(self) -> bool:
        return self.status == "failed"


@dataclass
class Reply:
    """Text shown to the user for one question, with the run it came from."""

    text: str
    outcome: RunOutcome
