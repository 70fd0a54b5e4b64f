"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64; rv:128.0) Gecko/20100101 Firefox/128.0"
)

_ALLOWED_RESUME_MODES = {"substring", "exact"}
_ALLOWED_ADAPTERS = {"ollama", "openai", "mock"}


def _project_root() -> Path:
    return Path(__file__).resolve().parents[1]


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = _project_root()
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _get_optional_int_env(name: str) -> int | None:
    raw_value = _get_optional_str_env(name)
    if raw_value is None:
        return None
    try:
        return int(raw_value)
    except ValueError:
        return None


def _require_choice(name: str, default: str, allowed: set[str]) -> str:
    """
    Read an enumerated setting. Unknown values are a startup error.
    """

    raw = _get_str_env(name, default)
    value = raw.lower()
    if value not in allowed:
        raise RuntimeError(
            f"{name} '{raw}' is not valid. Allowed values: {sorted(allowed)}."
        )
    return value


@dataclass(frozen=True)
class CategorizationSettings:
    """
    Runtime settings for the domain categorization pipeline.
    """

    input_path: str = "data/asn.csv"
    success_log_path: str = "categories.csv"
    failure_log_path: str = "failures.txt"
    batch_size: int = 32
    sink_queue_size: int = 32
    fetch_timeout_seconds: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    min_digest_length: int = 3
    resume_mode: str = "substring"
    shuffle: bool = True
    limit: int | None = None


@dataclass(frozen=True)
class CompletionSettings:
    """
    Completion service connection settings.
    """

    adapter: str = "ollama"
    base_url: str | None = None
    model: str | None = None
    timeout_seconds: float = 120.0
    api_key: str | None = None
    mock_response: str = "Other"


@lru_cache(maxsize=1)
def get_categorization_settings() -> CategorizationSettings:
    """
    Return cached pipeline settings from environment variables.

    Raises RuntimeError if CATEGORIZE_RESUME_MODE is not a known mode.
    """

    limit = _get_optional_int_env("CATEGORIZE_LIMIT")
    return CategorizationSettings(
        input_path=_get_str_env("CATEGORIZE_INPUT_PATH", "data/asn.csv"),
        success_log_path=_get_str_env("CATEGORIZE_SUCCESS_LOG", "categories.csv"),
        failure_log_path=_get_str_env("CATEGORIZE_FAILURE_LOG", "failures.txt"),
        batch_size=max(1, _get_int_env("CATEGORIZE_BATCH_SIZE", 32)),
        sink_queue_size=max(1, _get_int_env("CATEGORIZE_SINK_QUEUE_SIZE", 32)),
        fetch_timeout_seconds=max(
            1.0,
            _get_float_env("CATEGORIZE_FETCH_TIMEOUT_SECONDS", 30.0),
        ),
        user_agent=_get_str_env("CATEGORIZE_USER_AGENT", DEFAULT_USER_AGENT),
        min_digest_length=max(0, _get_int_env("CATEGORIZE_MIN_DIGEST_LENGTH", 3)),
        resume_mode=_require_choice(
            "CATEGORIZE_RESUME_MODE",
            "substring",
            _ALLOWED_RESUME_MODES,
        ),
        shuffle=_get_bool_env("CATEGORIZE_SHUFFLE", True),
        limit=max(0, limit) if limit is not None else None,
    )


@lru_cache(maxsize=1)
def get_completion_settings() -> CompletionSettings:
    """
    Return cached completion service settings from environment variables.

    Raises RuntimeError if LLM_ADAPTER is not a known adapter name.
    """

    return CompletionSettings(
        adapter=_require_choice("LLM_ADAPTER", "ollama", _ALLOWED_ADAPTERS),
        base_url=_get_optional_str_env("LLM_BASE_URL"),
        model=_get_optional_str_env("LLM_MODEL"),
        timeout_seconds=max(1.0, _get_float_env("LLM_TIMEOUT_SECONDS", 120.0)),
        api_key=_get_optional_str_env("LLM_API_KEY") or _get_optional_str_env("OPENAI_API_KEY"),
        mock_response=_get_str_env("LLM_MOCK_RESPONSE", "Other"),
    )
