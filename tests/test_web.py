from types import SimpleNamespace as NS
from unittest.mock import MagicMock

import pytest
from azure.core.exceptions import HttpResponseError, ResourceNotFoundError
from fastapi.testclient import TestClient

from foundry_samples.web.app import app, get_chat_service, get_project_service
from foundry_samples.web.services import ChatService, ProjectService


def connection(name, type_="AzureOpenAI", **extra):
    return NS(name=name, id=f"/connections/{name}", type=type_, target="https://example.azure.com",
              is_default=False, metadata=extra)


def deployment():
    return NS(name="test-deployment", type="ModelDeployment", model_name="gpt-4o",
              model_version="2024-08-06", model_publisher="OpenAI", connection_name=None)


def completion(text):
    return NS(choices=[NS(message=NS(content=text))])


@pytest.fixture
def project():
    return MagicMock(name="AIProjectClient")


@pytest.fixture
def chat_client():
    client = MagicMock(name="AzureOpenAI")
    client.chat.completions.create.return_value = completion("This is a test deployment")
    return client


@pytest.fixture
def client(project, chat_client):
    projects = ProjectService(project)
    app.dependency_overrides[get_project_service] = lambda: projects
    app.dependency_overrides[get_chat_service] = lambda: ChatService(chat_client, projects, "gpt-4o")
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_list_connections_keeps_order(client, project):
    project.connections.list.return_value = iter([connection("connection1"), connection("connection2")])

    response = client.get("/api/ai/connections")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["connection1", "connection2"]
    assert response.json()[0]["type"] == "AzureOpenAI"


def test_get_connection(client, project):
    project.connections.get.return_value = connection("search", "CognitiveSearch", region="eastus")

    body = client.get("/api/ai/connections/search").json()

    project.connections.get.assert_called_once_with(name="search")
    assert body["metadata"] == {"region": "eastus"}


def test_missing_connection_is_404(client, project):
    project.connections.get.side_effect = ResourceNotFoundError("Connection 'nope' not found")

    response = client.get("/api/ai/connections/nope")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_upstream_failure_is_502(client, project):
    project.deployments.list.side_effect = HttpResponseError("service unavailable")
    response = client.get("/api/ai/deployments")
    assert response.status_code == 502
    assert response.json()["error"] == "upstream_error"


def test_get_deployment(client, project):
    project.deployments.get.return_value = deployment()
    body = client.get("/api/ai/deployments/test-deployment").json()
    assert body["model_name"] == "gpt-4o"
    assert body["model_publisher"] == "OpenAI"


def test_chat_about_deployment(client, project, chat_client):
    project.deployments.get.return_value = deployment()

    response = client.get("/api/chat/deployments/test-deployment")

    assert response.status_code == 200
    assert response.text == "This is a test deployment"
    messages = chat_client.chat.completions.create.call_args.kwargs["messages"]
    assert "test-deployment" in messages[0]["content"]
    assert messages[1] == {"role": "user", "content": "Tell me about this deployment"}


def test_chat_about_unknown_deployment(client, project):
    project.deployments.get.side_effect = ResourceNotFoundError("Deployment 'x' not found")
    response = client.get("/api/chat/deployments/x")
    assert response.status_code == 200
    assert response.text.startswith("Error getting information about deployment:")


def test_chat_plain_text(client, chat_client):
    chat_client.chat.completions.create.return_value = completion("Hello there!")

    response = client.post("/api/chat", content="Hello", headers={"Content-Type": "text/plain"})

    assert response.text == "Hello there!"
    assert chat_client.chat.completions.create.call_args.kwargs == {
        "model": "gpt-4o",
        "messages": [{"role": "user", "content": "Hello"}],
    }


def test_chat_empty_body(client):
    response = client.post("/api/chat", content="  ")
    assert response.status_code == 400


def test_service_without_http(project, chat_client):
    project.deployments.get.return_value = deployment()
    service = ChatService(chat_client, ProjectService(project), "gpt-4o")
    assert service.chat_about_deployment("test-deployment") == "This is a test deployment"
