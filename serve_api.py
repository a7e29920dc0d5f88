#!/usr/bin/env python3
"""
Azure AI Foundry — AI API Server
================================
Thin entry-point. The app lives in foundry_samples.web.app.

Usage:
    python3 serve_api.py               # http://127.0.0.1:8080
    PORT=9000 python3 serve_api.py
"""

import os

import uvicorn

from foundry_samples.common.config import load_settings
from foundry_samples.common.logging import configure_structlog

if __name__ == "__main__":
    settings = load_settings()
    configure_structlog(settings.log_level, settings.log_format)
    uvicorn.run(
        "foundry_samples.web.app:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8080")),
    )
