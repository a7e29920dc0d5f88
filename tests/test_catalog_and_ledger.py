import json
from types import SimpleNamespace as NS
from unittest.mock import MagicMock

import pytest

from foundry_samples.common import redis as ledger
from foundry_samples.runner import catalog


def test_describe_deployment_skips_missing_fields():
    text = catalog.describe_deployment(NS(name="embed", type="ModelDeployment"))
    assert text == "- Name: embed\n- Type: ModelDeployment"


def test_describe_connection():
    text = catalog.describe_connection(
        NS(name="search", type="CognitiveSearch", target=None, metadata={"region": "eastus"})
    )
    assert text == "- search (Type: CognitiveSearch)\n  region: eastus"


def test_create_search_index():
    project = MagicMock()
    catalog.create_search_index(project, "product-index", "1", "search-conn", "products")

    kwargs = project.indexes.create_or_update.call_args.kwargs
    assert kwargs["name"] == "product-index"
    assert kwargs["version"] == "1"
    assert kwargs["index"].connection_name == "search-conn"
    assert kwargs["index"].index_name == "products"


@pytest.fixture
def redis_client(monkeypatch):
    client = MagicMock(name="Redis")
    monkeypatch.setattr(ledger, "get_redis", lambda: client)
    return client


def test_record_and_forget(redis_client):
    ledger.record_session("session-1", {"agent_id": "asst_1"})
    redis_client.hset.assert_called_once_with(
        ledger.SESSIONS_KEY, "session-1", json.dumps({"agent_id": "asst_1"})
    )

    ledger.forget_session("session-1")
    redis_client.hdel.assert_called_once_with(ledger.SESSIONS_KEY, "session-1")


def test_pending_sessions_skips_unreadable_entries(redis_client):
    redis_client.hgetall.return_value = {
        "session-1": json.dumps({"agent_id": "asst_1", "file_ids": []}),
        "session-2": "{not json",
    }
    assert ledger.pending_sessions() == {"session-1": {"agent_id": "asst_1", "file_ids": []}}
