"""Services behind the AI API: project catalog access and chat."""

from __future__ import annotations

from typing import Any

import structlog

from foundry_samples.common.constants import DEPLOYMENT_SYSTEM_PROMPT, DEPLOYMENT_USER_PROMPT
from foundry_samples.runner import catalog
from foundry_samples.web.schemas import ConnectionOut, DeploymentOut

_log = structlog.get_logger("web")


class ProjectService:
    """Connections and deployments of one project, as DTOs."""

    def __init__(self, project: Any) -> None:
        self._project = project

    def list_connections(self) -> list[ConnectionOut]:
        return [ConnectionOut.from_sdk(c) for c in catalog.list_connections(self._project)]

    def get_connection(self, name: str) -> ConnectionOut:
        return ConnectionOut.from_sdk(catalog.get_connection(self._project, name))

    def list_deployments(self) -> list[DeploymentOut]:
        return [DeploymentOut.from_sdk(d) for d in catalog.list_deployments(self._project)]

    def get_deployment(self, name: str) -> DeploymentOut:
        return DeploymentOut.from_sdk(catalog.get_deployment(self._project, name))


class ChatService:
    """Chat completions against one model deployment."""

    def __init__(self, chat_client: Any, projects: ProjectService, model: str) -> None:
        self._client = chat_client
        self._projects = projects
        self._model = model

    def complete(self, messages: list[dict[str, str]]) -> str:
        response = self._client.chat.completions.create(model=self._model, messages=messages)
        return response.choices[0].message.content or ""

    def chat(self, message: str) -> str:
        return self.complete([{"role": "user", "content": message}])

    def chat_about_deployment(self, name: str) -> str:
        """Describe deployment *name*; failures come back as an error sentence."""
        try:
            deployment = self._projects.get_deployment(name)
            model = deployment.model_name or "unknown"
            if deployment.model_version:
                model = f"{model} ({deployment.model_version})"
            system = DEPLOYMENT_SYSTEM_PROMPT.format(
                name=deployment.name,
                type=deployment.type or "unknown",
                model=model,
            )
            return self.complete([
                {"role": "system", "content": system},
                {"role": "user", "content": DEPLOYMENT_USER_PROMPT},
            ])
        except Exception as exc:
            _log.warning("deployment_chat_failed", deployment=name, error=str(exc), exc_info=True)
            return f"Error getting information about deployment: {exc}"
