"""FastAPI app exposing project connections, deployments and chat.

Run:
    python3 serve_api.py
Or:
    uvicorn foundry_samples.web.app:app --reload --port 8080
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import List

import structlog
from azure.core.exceptions import HttpResponseError, ResourceNotFoundError
from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from foundry_samples.common.config import Settings, load_settings
from foundry_samples.common.errors import ConfigurationError
from foundry_samples.common.platform import build_chat_client, build_project_client
from foundry_samples.web.schemas import ConnectionOut, DeploymentOut, ErrorOut
from foundry_samples.web.services import ChatService, ProjectService

_log = structlog.get_logger("web")

app = FastAPI(title="Foundry Samples AI API", version="1.0.0")

frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_origin, "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─────────────────────────────────────────────────────────────
# Dependencies
# ─────────────────────────────────────────────────────────────

@lru_cache
def get_settings() -> Settings:
    return load_settings()


@lru_cache
def _project_client():
    return build_project_client(get_settings())


@lru_cache
def _chat_client():
    return build_chat_client(_project_client(), get_settings())


def get_project_service() -> ProjectService:
    return ProjectService(_project_client())


def get_chat_service(
    projects: ProjectService = Depends(get_project_service),
) -> ChatService:
    settings = get_settings().require("MODEL_DEPLOYMENT_NAME")
    return ChatService(_chat_client(), projects, settings.model_deployment_name)


# ─────────────────────────────────────────────────────────────
# Error handlers
# ─────────────────────────────────────────────────────────────

def _error(status: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(ErrorOut(error=error, message=message).model_dump(), status_code=status)


@app.exception_handler(ResourceNotFoundError)
async def not_found(request: Request, exc: ResourceNotFoundError):
    return _error(404, "not_found", exc.message or str(exc))


@app.exception_handler(HttpResponseError)
async def upstream_error(request: Request, exc: HttpResponseError):
    _log.warning("upstream_error", path=request.url.path, status=exc.status_code, error=str(exc))
    return _error(502, "upstream_error", exc.message or str(exc))


@app.exception_handler(ConfigurationError)
async def configuration_error(request: Request, exc: ConfigurationError):
    _log.error("configuration_error", path=request.url.path, error=str(exc))
    return _error(500, "configuration_error", str(exc))


# ─────────────────────────────────────────────────────────────
# Routes
# ─────────────────────────────────────────────────────────────

@app.get("/health")
def health():
    return {"ok": True}


@app.get("/api/ai/connections", response_model=List[ConnectionOut])
def list_connections(service: ProjectService = Depends(get_project_service)):
    return service.list_connections()


@app.get("/api/ai/connections/{name}", response_model=ConnectionOut)
def get_connection(name: str, service: ProjectService = Depends(get_project_service)):
    return service.get_connection(name)


@app.get("/api/ai/deployments", response_model=List[DeploymentOut])
def list_deployments(service: ProjectService = Depends(get_project_service)):
    return service.list_deployments()


@app.get("/api/ai/deployments/{name}", response_model=DeploymentOut)
def get_deployment(name: str, service: ProjectService = Depends(get_project_service)):
    return service.get_deployment(name)


@app.post("/api/chat", response_class=PlainTextResponse)
async def chat(request: Request, service: ChatService = Depends(get_chat_service)):
    """Plain-text body in, plain-text model reply out."""
    message = (await request.body()).decode("utf-8").strip()
    if not message:
        return _error(400, "bad_request", "message body is empty")
    return await run_in_threadpool(service.chat, message)


@app.get("/api/chat/deployments/{name}", response_class=PlainTextResponse)
def chat_about_deployment(name: str, service: ChatService = Depends(get_chat_service)):
    return service.chat_about_deployment(name)
