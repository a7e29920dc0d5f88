"""Agent, file and vector-store provisioning."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any, Iterable

import structlog
from azure.ai.agents.models import FilePurpose, FileSearchTool

from foundry_samples.common.constants import VECTOR_STORE_TERMINAL_STATES
from foundry_samples.common.errors import ProvisioningError
from foundry_samples.runner.agent import ProvisionedAgent
from foundry_samples.runner.polling import PollPolicy, normalize_status, wait_for_status
from foundry_samples.runner.teardown import ResourceStack

_log = structlog.get_logger("provisioning")


def _suffix() -> str:
    return uuid.uuid4().hex[:8]


def create_agent(
    agents: Any,
    model: str,
    instructions: str,
    *,
    name: str | None = None,
    tools: list | None = None,
    tool_resources: Any = None,
) -> Any:
    """Create an agent; tool arguments are only sent when given."""
    kwargs: dict[str, Any] = {
        "model": model,
        "name": name or f"agent-{_suffix()}",
        "instructions": instructions,
    }
    if tools:
        kwargs["tools"] = tools
    if tool_resources is not None:
        kwargs["tool_resources"] = tool_resources
    agent = agents.create_agent(**kwargs)
    _log.info("agent_created", agent_id=agent.id, name=kwargs["name"], model=model)
    return agent


def upload_files(agents: Any, paths: Iterable[Path | str], stack: ResourceStack) -> list[str]:
    """Upload each file for agent use and return the new file IDs.

    Each file is pushed onto *stack* as soon as it exists.  The first failed
    upload propagates unchanged; files uploaded before it stay on the stack.
    """
    file_ids: list[str] = []
    for path in paths:
        try:
            uploaded = agents.files.upload_and_poll(
                file_path=str(path), purpose=FilePurpose.AGENTS
            )
        except Exception as exc:
            _log.error("file_upload_failed", path=str(path), error=str(exc))
            raise
        stack.push("file", uploaded.id)
        file_ids.append(uploaded.id)
        _log.info("file_uploaded", path=str(path), file_id=uploaded.id)
    return file_ids


def create_vector_store(
    agents: Any,
    file_ids: list[str],
    stack: ResourceStack,
    *,
    name: str | None = None,
    policy: PollPolicy | None = None,
) -> str:
    """Create a vector store over *file_ids* and wait until it is indexed."""
    name = name or f"vectorstore-{_suffix()}"
    store = agents.vector_stores.create(file_ids=file_ids, name=name)
    stack.push("vector_store", store.id)
    _log.info("vector_store_created", vector_store_id=store.id, files=len(file_ids))

    store = wait_for_status(
        lambda: agents.vector_stores.get(store.id),
        VECTOR_STORE_TERMINAL_STATES,
        policy=policy,
        describe=f"vector store {store.id}",
    )
    status = normalize_status(store.status)
    if status != "completed":
        raise ProvisioningError(f"Vector store {store.id} ended in status '{status}'")
    return store.id


def provision_agent(
    agents: Any,
    model: str,
    instructions: str,
    *,
    files: Iterable[Path | str] = (),
    name: str | None = None,
    stack: ResourceStack | None = None,
    policy: PollPolicy | None = None,
) -> ProvisionedAgent:
    """Create an agent, with a file-search vector store when *files* are given.

    Everything created is pushed onto *stack*.  Without a stack, a private
    one is used: on failure it is unwound (deleting partial uploads), on
    success it is detached and its contents returned in the record.
    """
    own_stack = stack is None
    stack = stack if stack is not None else ResourceStack(agents)
    files = list(files)

    try:
        tools, tool_resources = None, None
        if files:
            file_ids = upload_files(agents, files, stack)
            vector_store_id = create_vector_store(agents, file_ids, stack, policy=policy)
            file_search = FileSearchTool(vector_store_ids=[vector_store_id])
            tools, tool_resources = file_search.definitions, file_search.resources
            name = name or f"search-agent-{_suffix()}"

        agent = create_agent(
            agents, model, instructions,
            name=name, tools=tools, tool_resources=tool_resources,
        )
        stack.push("agent", agent.id)
    except BaseException:
        if own_stack:
            stack.close()
        raise

    resources = stack.detach() if own_stack else stack.owned
    return ProvisionedAgent(agent=agent, resources=resources)
