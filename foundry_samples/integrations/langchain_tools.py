"""LangChain tools that let an LLM agent inspect a Foundry project.

Usage::

    tools = build_project_tools(project)
    assistant = ProjectAssistant(model, tools)
"""

from __future__ import annotations

from typing import Any

from langchain_core.tools import BaseTool, tool

from foundry_samples.runner import catalog


def build_project_tools(project: Any) -> list[BaseTool]:
    """Return ``[list_connections, get_deployment_info]`` bound to *project*."""

    @tool
    def list_connections() -> str:
        """Lists all connections available in the Azure AI Foundry project."""
        try:
            connections = catalog.list_connections(project)
        except Exception as e:
            return f"Error listing connections: {e}"
        if not connections:
            return "No connections found."
        return "Available connections:\n" + "\n".join(
            catalog.describe_connection(c) for c in connections
        )

    @tool
    def get_deployment_info(deployment_name: str) -> str:
        """Gets information about a specific model deployment by name."""
        try:
            deployment = catalog.get_deployment(project, deployment_name)
        except Exception as e:
            return f"Error getting deployment info: {e}"
        return "Deployment information:\n" + catalog.describe_deployment(deployment)

    return [list_connections, get_deployment_info]
