import argparse
from types import SimpleNamespace as NS
from unittest.mock import MagicMock

import pytest
from langchain_core.messages import AIMessage

from foundry_samples.common.config import Settings
from foundry_samples.common.constants import CHAT_SYSTEM_PROMPT, CHAT_USER_PROMPT, LANGCHAIN_PLAIN_PROMPT
from foundry_samples.common.errors import ConfigurationError
from foundry_samples.runner import cli


@pytest.fixture
def settings():
    return Settings(
        endpoint="https://example.services.ai.azure.com/api/projects/demo",
        model_deployment_name="gpt-4o",
        deployment_name="gpt-4o",
        openai_endpoint="https://example.services.ai.azure.com",
    )


@pytest.fixture
def project(monkeypatch):
    client = MagicMock(name="AIProjectClient")
    client.__enter__.return_value = client
    client.deployments.get.return_value = NS(
        name="gpt-4o", type="ModelDeployment", model_name="gpt-4o",
        model_version="2024-08-06", model_publisher="OpenAI", connection_name="aoai",
    )
    client.connections.list.return_value = [
        NS(name="aoai", type="AzureOpenAI", target="https://aoai.example.com", metadata={}),
    ]
    monkeypatch.setattr(cli, "build_project_client", lambda settings: client)
    return client


def completion(text):
    return NS(choices=[NS(message=NS(content=text))])


def test_chat_sends_system_and_user_prompt(monkeypatch, settings, project, capsys):
    openai_client = MagicMock(name="AzureOpenAI")
    openai_client.chat.completions.create.return_value = completion("Roses bloom in spring.")
    monkeypatch.setattr(cli, "build_chat_client", lambda project, settings: openai_client)

    args = cli.build_parser().parse_args(["chat"])
    args.func(args, settings)

    openai_client.chat.completions.create.assert_called_once_with(
        model="gpt-4o",
        messages=[
            {"role": "system", "content": CHAT_SYSTEM_PROMPT},
            {"role": "user", "content": CHAT_USER_PROMPT},
        ],
    )
    assert "Roses bloom in spring." in capsys.readouterr().out


def test_chat_needs_a_model(settings, project):
    args = cli.build_parser().parse_args(["chat", "-m", "Hi"])
    with pytest.raises(ConfigurationError, match="MODEL_DEPLOYMENT_NAME"):
        args.func(args, Settings(endpoint=settings.endpoint))


def test_langchain_answers_both_prompts_with_tools(monkeypatch, settings, project, capsys):
    model = MagicMock(name="AzureChatOpenAI")
    model.invoke.return_value = AIMessage(content="The Azure SDK for Python is a set of libraries.")
    model.bind_tools.return_value.invoke.side_effect = [
        AIMessage(content="", tool_calls=[{"name": "list_connections", "args": {}, "id": "call_1"}]),
        AIMessage(content="You have one connection: aoai."),
        AIMessage(content="", tool_calls=[
            {"name": "get_deployment_info", "args": {"deployment_name": "gpt-4o"}, "id": "call_2"},
        ]),
        AIMessage(content="gpt-4o runs OpenAI gpt-4o (2024-08-06)."),
    ]
    monkeypatch.setattr(cli, "build_chat_model", lambda settings: model)

    args = cli.build_parser().parse_args(["langchain"])
    args.func(args, settings)

    out = capsys.readouterr().out
    model.invoke.assert_called_once_with(LANGCHAIN_PLAIN_PROMPT)
    assert "Using deployment: gpt-4o (Type: ModelDeployment)" in out
    assert "You have one connection: aoai." in out
    assert "gpt-4o runs OpenAI gpt-4o (2024-08-06)." in out
    project.connections.list.assert_called_once()
    project.deployments.get.assert_called_with(name="gpt-4o")


def test_subcommands_registered():
    parser = cli.build_parser()
    for command in ("agent", "file-search", "chat", "langchain", "connections", "deployments", "index", "sweep"):
        assert isinstance(parser.parse_args([command]), argparse.Namespace)
