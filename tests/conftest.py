from __future__ import annotations

import pytest

from app.config import get_categorization_settings, get_completion_settings

_SETTINGS_ENV = (
    "CATEGORIZE_INPUT_PATH",
    "CATEGORIZE_SUCCESS_LOG",
    "CATEGORIZE_FAILURE_LOG",
    "CATEGORIZE_BATCH_SIZE",
    "CATEGORIZE_SINK_QUEUE_SIZE",
    "CATEGORIZE_FETCH_TIMEOUT_SECONDS",
    "CATEGORIZE_USER_AGENT",
    "CATEGORIZE_MIN_DIGEST_LENGTH",
    "CATEGORIZE_RESUME_MODE",
    "CATEGORIZE_SHUFFLE",
    "CATEGORIZE_LIMIT",
    "LLM_ADAPTER",
    "LLM_BASE_URL",
    "LLM_MODEL",
    "LLM_TIMEOUT_SECONDS",
    "LLM_API_KEY",
    "OPENAI_API_KEY",
    "LLM_MOCK_RESPONSE",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Start every test from default settings."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_categorization_settings.cache_clear()
    get_completion_settings.cache_clear()
    yield
    get_categorization_settings.cache_clear()
    get_completion_settings.cache_clear()
