"""Construction of the Azure AI Foundry SDK clients."""

from __future__ import annotations

from azure.ai.projects import AIProjectClient
from azure.identity import DefaultAzureCredential, get_bearer_token_provider

from foundry_samples.common.config import Settings
from foundry_samples.common.constants import COGNITIVE_SERVICES_SCOPE


def build_project_client(settings: Settings) -> AIProjectClient:
    """Create an AIProjectClient for the configured project endpoint.

    Credentials are resolved by DefaultAzureCredential (environment,
    managed identity, Azure CLI login, ...).
    """
    settings.require("AZURE_AI_ENDPOINT")
    return AIProjectClient(
        endpoint=settings.endpoint,
        credential=DefaultAzureCredential(),
    )


def build_chat_client(project: AIProjectClient, settings: Settings):
    """Return an AzureOpenAI client bound to the project's default AI Services connection."""
    return project.inference.get_azure_openai_client(
        api_version=settings.openai_api_version
    )


def build_chat_model(settings: Settings):
    """Return a LangChain ``AzureChatOpenAI`` for DEPLOYMENT_NAME, authenticated with Entra ID."""
    from langchain_openai import AzureChatOpenAI

    settings.require("AZURE_OPENAI_ENDPOINT", "DEPLOYMENT_NAME")
    token_provider = get_bearer_token_provider(DefaultAzureCredential(), COGNITIVE_SERVICES_SCOPE)
    return AzureChatOpenAI(
        azure_endpoint=settings.openai_endpoint,
        azure_deployment=settings.deployment_name,
        api_version=settings.openai_api_version,
        azure_ad_token_provider=token_provider,
    )
