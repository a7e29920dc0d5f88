"""Structured logging configuration (structlog).

Two sinks: the process-wide logger (console or JSON lines on stdout) that
every module gets through ``structlog.get_logger(name)``, and per-run JSONL
files holding evaluation results.
"""

from __future__ import annotations

import logging
from pathlib import Path

import structlog

# Chatty stdlib loggers of the Azure SDK and its HTTP stack.
_SDK_LOGGERS = ("azure", "urllib3", "httpx")


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def configure_structlog(level: str = "INFO", fmt: str = "console", **context: str) -> None:
    """Configure structlog for the sample process.

    *fmt* is ``"console"`` for human-readable lines or ``"json"`` for one
    JSON object per event.  Extra keyword arguments are bound as context on
    every event (e.g. ``sample="file-search"``).  Call once at startup.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # SDK request logging only surfaces at DEBUG
    for name in _SDK_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if numeric <= logging.DEBUG else logging.WARNING)

    structlog.contextvars.clear_contextvars()
    if context:
        structlog.contextvars.bind_contextvars(**context)


def results_logger(results_dir: Path, filename: str = "evaluations.jsonl") -> structlog.BoundLogger:
    """Logger appending JSON lines to ``results_dir / filename``.

    Backed by its own stdlib FileHandler, so it ignores the console
    configuration and always records at DEBUG.
    """
    path = results_dir / filename
    path.parent.mkdir(parents=True, exist_ok=True)

    sink = logging.getLogger(f"foundry_samples.results.{path}")
    sink.handlers = [logging.FileHandler(str(path), mode="a")]
    sink.setLevel(logging.DEBUG)
    sink.propagate = False

    return structlog.wrap_logger(
        sink,
        processors=[
            *_shared_processors(),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(default=str),
        ],
    )
