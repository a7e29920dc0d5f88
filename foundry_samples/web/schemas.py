"""Pydantic response schemas for the AI API."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from foundry_samples.runner.catalog import plain


class ConnectionOut(BaseModel):
    name: str
    id: Optional[str] = None
    type: Optional[str] = None
    target: Optional[str] = None
    is_default: Optional[bool] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_sdk(cls, connection: Any) -> ConnectionOut:
        return cls(
            name=connection.name,
            id=getattr(connection, "id", None),
            type=plain(getattr(connection, "type", None)),
            target=getattr(connection, "target", None),
            is_default=getattr(connection, "is_default", None),
            metadata=dict(getattr(connection, "metadata", None) or {}),
        )


class DeploymentOut(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    name: str
    type: Optional[str] = None
    model_name: Optional[str] = None
    model_version: Optional[str] = None
    model_publisher: Optional[str] = None
    connection_name: Optional[str] = None

    @classmethod
    def from_sdk(cls, deployment: Any) -> DeploymentOut:
        return cls(
            name=deployment.name,
            type=plain(getattr(deployment, "type", None)),
            model_name=getattr(deployment, "model_name", None),
            model_version=getattr(deployment, "model_version", None),
            model_publisher=getattr(deployment, "model_publisher", None),
            connection_name=getattr(deployment, "connection_name", None),
        )


class ErrorOut(BaseModel):
    error: str
    message: str
