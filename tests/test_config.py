import pytest

from foundry_samples.common import config
from foundry_samples.common.config import Settings, load_dotenv, load_settings, poll_policy
from foundry_samples.common.constants import DEFAULT_OPENAI_API_VERSION
from foundry_samples.common.errors import ConfigurationError


@pytest.fixture
def environ(monkeypatch):
    """Isolated os.environ for config reads."""
    env: dict[str, str] = {}
    monkeypatch.setattr(config.os, "environ", env)
    return env


def test_defaults(environ):
    environ["MODEL_DEPLOYMENT_NAME"] = "gpt-4o"

    settings = load_settings(dotenv=False)

    assert settings.endpoint == ""
    assert settings.openai_endpoint == ""
    assert settings.model_deployment_name == "gpt-4o"
    assert settings.deployment_name == "gpt-4o"
    assert settings.openai_api_version == DEFAULT_OPENAI_API_VERSION
    assert settings.log_level == "INFO"
    assert settings.log_format == "console"


def test_values_from_environment(environ):
    environ.update({
        "AZURE_AI_ENDPOINT": "https://example.services.ai.azure.com/api/projects/demo",
        "MODEL_DEPLOYMENT_NAME": "gpt-4o",
        "DEPLOYMENT_NAME": "gpt-4o-mini",
        "POLL_INTERVAL_SECS": "0.25",
        "POLL_MAX_ATTEMPTS": "7",
        "LOG_LEVEL": "debug",
        "LOG_FORMAT": "JSON",
    })

    settings = load_settings(dotenv=False)

    assert settings.deployment_name == "gpt-4o-mini"
    assert settings.openai_endpoint == "https://example.services.ai.azure.com"
    assert settings.poll_interval == 0.25
    assert settings.poll_max_attempts == 7
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"

    policy = poll_policy(settings)
    assert policy.interval == 0.25
    assert policy.max_attempts == 7


def test_bad_number_is_a_configuration_error(environ):
    environ["POLL_MAX_ATTEMPTS"] = "many"
    with pytest.raises(ConfigurationError, match="POLL_MAX_ATTEMPTS"):
        load_settings(dotenv=False)


def test_require_lists_every_missing_variable():
    settings = Settings(model_deployment_name="gpt-4o")

    with pytest.raises(ConfigurationError) as err:
        settings.require("AZURE_AI_ENDPOINT", "MODEL_DEPLOYMENT_NAME", "CONNECTION_NAME")

    assert err.value.missing == ["AZURE_AI_ENDPOINT", "CONNECTION_NAME"]
    assert "AZURE_AI_ENDPOINT" in str(err.value)
    assert settings.require("MODEL_DEPLOYMENT_NAME") is settings


def test_dotenv_does_not_overwrite(environ, tmp_path):
    environ["MODEL_DEPLOYMENT_NAME"] = "from-shell"
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "MODEL_DEPLOYMENT_NAME=from-file\n"
        'export AZURE_AI_ENDPOINT="https://example/api/projects/demo"\n'
        "not a pair\n"
    )

    assert load_dotenv(env_file) is True
    assert environ["MODEL_DEPLOYMENT_NAME"] == "from-shell"
    assert environ["AZURE_AI_ENDPOINT"] == "https://example/api/projects/demo"


def test_missing_dotenv(tmp_path):
    assert load_dotenv(tmp_path / ".env") is False


def test_explicit_openai_endpoint_wins(environ):
    environ.update({
        "AZURE_AI_ENDPOINT": "https://example.services.ai.azure.com/api/projects/demo",
        "AZURE_OPENAI_ENDPOINT": "https://example.openai.azure.com",
    })
    assert load_settings(dotenv=False).openai_endpoint == "https://example.openai.azure.com"
