"""Shared fixtures: a fake AgentsClient and a no-op sleep for every poll loop."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace as NS
from unittest.mock import MagicMock

import pytest

from foundry_samples.runner import polling


def message(role: str, text: str, run_id: str | None = "run_1") -> NS:
    """Thread message shaped like the SDK's ThreadMessage."""
    return NS(role=role, run_id=run_id if role == "assistant" else None,
              text_messages=[NS(text=NS(value=text))])


@pytest.fixture(autouse=True)
def sleeps(monkeypatch):
    """Record poll sleeps instead of sleeping."""
    calls: list[float] = []
    monkeypatch.setattr(polling, "time", NS(sleep=calls.append))
    return calls


@pytest.fixture
def agents():
    """MagicMock AgentsClient whose calls all succeed immediately."""
    client = MagicMock(name="AgentsClient")
    client.create_agent.side_effect = lambda **kw: NS(id="asst_1", name=kw["name"])
    client.threads.create.return_value = NS(id="thread_1")
    client.runs.create.return_value = NS(id="run_1", status="queued")
    client.runs.get.return_value = NS(id="run_1", status="completed", last_error=None)
    client.files.upload_and_poll.side_effect = (
        lambda file_path, purpose: NS(id=f"file_{Path(file_path).stem}")
    )
    client.vector_stores.create.return_value = NS(id="vs_1", status="in_progress")
    client.vector_stores.get.return_value = NS(id="vs_1", status="completed")
    client.messages.list.return_value = [
        message("assistant", "The capital of France is Paris."),
        message("user", "What is the capital of France?"),
    ]
    return client


@pytest.fixture
def documents(tmp_path):
    paths = []
    for stem in ("product_info", "pricing_info"):
        path = tmp_path / f"{stem}.md"
        path.write_text(f"# {stem}\n")
        paths.append(path)
    return paths
