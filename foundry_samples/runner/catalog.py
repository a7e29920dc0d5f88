"""Connections, deployments and search indexes of a Foundry project."""

from __future__ import annotations

from typing import Any

import structlog
from azure.ai.projects.models import AzureAISearchIndex

_log = structlog.get_logger("catalog")


def plain(value: Any) -> Any:
    """Unwrap SDK str-enums to their plain value."""
    return getattr(value, "value", value)


def list_connections(project: Any) -> list[Any]:
    return list(project.connections.list())


def get_connection(project: Any, name: str) -> Any:
    return project.connections.get(name=name)


def list_deployments(project: Any) -> list[Any]:
    return list(project.deployments.list())


def get_deployment(project: Any, name: str) -> Any:
    return project.deployments.get(name=name)


def create_search_index(
    project: Any,
    name: str,
    version: str,
    connection_name: str,
    index_name: str,
) -> Any:
    """Create (or update) a project index version backed by Azure AI Search."""
    index = project.indexes.create_or_update(
        name=name,
        version=version,
        index=AzureAISearchIndex(connection_name=connection_name, index_name=index_name),
    )
    _log.info("index_saved", name=name, version=version, search_index=index_name)
    return index


def describe_connection(connection: Any) -> str:
    lines = [
        f"- {connection.name} (Type: {plain(getattr(connection, 'type', None))})",
    ]
    target = getattr(connection, "target", None)
    if target:
        lines.append(f"  Target: {target}")
    for key, value in (getattr(connection, "metadata", None) or {}).items():
        lines.append(f"  {key}: {value}")
    return "\n".join(lines)


def describe_deployment(deployment: Any) -> str:
    lines = [
        f"- Name: {deployment.name}",
        f"- Type: {plain(getattr(deployment, 'type', None))}",
    ]
    model = getattr(deployment, "model_name", None)
    if model:
        version = getattr(deployment, "model_version", None)
        lines.append(f"- Model: {model}" + (f" ({version})" if version else ""))
    publisher = getattr(deployment, "model_publisher", None)
    if publisher:
        lines.append(f"- Publisher: {publisher}")
    connection = getattr(deployment, "connection_name", None)
    if connection:
        lines.append(f"- Connection: {connection}")
    return "\n".join(lines)
