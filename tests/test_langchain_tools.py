from types import SimpleNamespace as NS
from unittest.mock import MagicMock

import pytest

from foundry_samples.integrations.langchain_tools import build_project_tools


@pytest.fixture
def project():
    return MagicMock(name="AIProjectClient")


@pytest.fixture
def tools(project):
    return {t.name: t for t in build_project_tools(project)}


def test_tool_names(tools):
    assert set(tools) == {"list_connections", "get_deployment_info"}


def test_list_connections(tools, project):
    project.connections.list.return_value = [
        NS(name="aoai", type="AzureOpenAI", target="https://aoai.example.com", metadata={}),
    ]
    result = tools["list_connections"].invoke({})
    assert result.startswith("Available connections:\n")
    assert "- aoai (Type: AzureOpenAI)" in result
    assert "Target: https://aoai.example.com" in result


def test_list_connections_empty(tools, project):
    project.connections.list.return_value = []
    assert tools["list_connections"].invoke({}) == "No connections found."


def test_list_connections_error(tools, project):
    project.connections.list.side_effect = RuntimeError("forbidden")
    assert tools["list_connections"].invoke({}) == "Error listing connections: forbidden"


def test_get_deployment_info(tools, project):
    project.deployments.get.return_value = NS(
        name="gpt-4o", type="ModelDeployment", model_name="gpt-4o",
        model_version="2024-08-06", model_publisher="OpenAI", connection_name="aoai",
    )
    result = tools["get_deployment_info"].invoke({"deployment_name": "gpt-4o"})

    project.deployments.get.assert_called_once_with(name="gpt-4o")
    assert result.startswith("Deployment information:\n")
    assert "- Model: gpt-4o (2024-08-06)" in result
    assert "- Connection: aoai" in result


def test_get_deployment_info_error(tools, project):
    project.deployments.get.side_effect = RuntimeError("not found")
    result = tools["get_deployment_info"].invoke({"deployment_name": "nope"})
    assert result == "Error getting deployment info: not found"
