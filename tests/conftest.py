"""Pytest configuration and fixtures for the test suite."""

import logging
import os

import pytest

from auto_anki.cli_commands.shared import reset_cli_state
from auto_anki.config import (
    AIProvider,
    Config,
    GenerationOptions,
    MultimodalSettings,
    ProviderSettings,
    reset_config,
)
from auto_anki.utils.logging import configure_logging
from tests.fixtures import InMemoryContentStore

OPENAI_URL = "https://api.openai.com/v1"
OLLAMA_URL = "http://localhost:11434"

_SETTINGS_ENV_KEYS = {name.upper() for name in Config.model_fields} | {"AUTO_ANKI_CONFIG"}


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run every test without ambient env vars, .env or config.yaml."""
    for key in list(os.environ):
        if key.upper() in _SETTINGS_ENV_KEYS:
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    reset_cli_state()
    yield
    reset_config()
    reset_cli_state()
    # CLI runs bind the console handler to a temporary stream
    configure_logging()


@pytest.fixture
def temp_dir(tmp_path):
    """Alias for pytest's tmp_path fixture."""
    return tmp_path


@pytest.fixture
def content_store():
    """Provide an empty in-memory content store."""
    return InMemoryContentStore()


@pytest.fixture
def multimodal_settings():
    """Multimodal processing enabled with default limits."""
    return MultimodalSettings(enabled=True)


@pytest.fixture
def generation_options():
    return GenerationOptions()


@pytest.fixture
def openai_settings():
    return ProviderSettings(
        provider=AIProvider.OPENAI,
        api_key="sk-test-key",
        base_url=OPENAI_URL,
        model="gpt-3.5-turbo-1106",
    )


@pytest.fixture
def ollama_settings():
    return ProviderSettings(
        provider=AIProvider.OLLAMA,
        base_url=OLLAMA_URL,
        model="llama3.2",
    )


@pytest.fixture
def log_events(caplog):
    """Return a callable listing structured event names captured so far."""
    caplog.set_level(logging.DEBUG)

    def _events(level: int = logging.DEBUG) -> list[dict]:
        return [
            record.msg
            for record in caplog.records
            if isinstance(record.msg, dict) and record.levelno >= level
        ]

    return _events
