"""Redis-backed ledger of remote resources owned by live sample sessions.

A session mirrors its owned-resource record here while it runs and deletes
the entry after teardown, so anything still listed belongs to a process that
died before cleaning up.
"""

from __future__ import annotations

import json
import os

import redis


_REDIS_HOST = os.environ.get("REDIS_HOST", "localhost")
_REDIS_PORT = int(os.environ.get("REDIS_PORT", "6379"))
_REDIS_DB = int(os.environ.get("REDIS_DB", "0"))
_REDIS_PASSWORD = os.environ.get("REDIS_PASSWORD") or None

SESSIONS_KEY = "foundry:sessions"

_client: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Return a shared Redis client (lazy singleton)."""
    global _client
    if _client is None:
        _client = redis.Redis(
            host=_REDIS_HOST,
            port=_REDIS_PORT,
            db=_REDIS_DB,
            password=_REDIS_PASSWORD,
            decode_responses=True,
            socket_connect_timeout=2,
        )
    return _client


def record_session(session_id: str, owned: dict) -> None:
    """Store (or overwrite) the owned-resource record of *session_id*."""
    get_redis().hset(SESSIONS_KEY, session_id, json.dumps(owned))


def forget_session(session_id: str) -> None:
    """Drop *session_id* from the ledger once its resources are released."""
    get_redis().hdel(SESSIONS_KEY, session_id)


def pending_sessions() -> dict[str, dict]:
    """Return every recorded session as ``{session_id: owned_record}``."""
    raw = get_redis().hgetall(SESSIONS_KEY)
    result: dict[str, dict] = {}
    for session_id, value in raw.items():
        try:
            result[session_id] = json.loads(value)
        except (json.JSONDecodeError, TypeError):
            continue
    return result
