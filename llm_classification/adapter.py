"""Completion service adapters for domain classification.

Provides a base interface and concrete adapters for an Ollama-style
streaming generate endpoint, OpenAI-compatible chat APIs, and a
deterministic mock for testing.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

import aiohttp

from app import failure_codes
from app.config import CompletionSettings

logger = logging.getLogger(__name__)

DEFAULT_OLLAMA_URL = "http://localhost:11434/api/generate"
DEFAULT_OLLAMA_MODEL = "llama3.1"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class CompletionError(Exception):
    """Raised when the completion call fails in transport or decoding.

    Attributes:
        code: Failure code logged for the affected domain.
    """

    code = failure_codes.COMPLETION_FAILED


class BaseCompletionAdapter(ABC):
    """Abstract base for all completion service adapters."""

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Send a prompt to the completion service and return its answer.

        Args:
            prompt: The fully formatted prompt string.

        Returns:
            Raw free-text answer from the model.

        Raises:
            CompletionError: On transport, timeout or decoding failures.
        """

    async def aclose(self) -> None:
        """Release any resources held by the adapter."""


class OllamaCompletionAdapter(BaseCompletionAdapter):
    """Adapter for an Ollama ``/api/generate`` endpoint.

    The endpoint streams newline-delimited JSON objects; the ``response``
    field of every chunk is concatenated into the final answer.
    """

    def __init__(
        self,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        base_url: str = DEFAULT_OLLAMA_URL,
        model: str = DEFAULT_OLLAMA_MODEL,
        timeout_seconds: float = 120.0,
    ) -> None:
        """Initialise the Ollama adapter.

        Args:
            session: Shared client session. A private session is created
                lazily when omitted and closed by ``aclose``.
            base_url: Full URL of the generate endpoint.
            model: Model name passed in the request body.
            timeout_seconds: Total deadline for one completion call.
        """
        self._session = session
        self._owns_session = session is None
        self._base_url = base_url
        self._model = model
        self._timeout_seconds = timeout_seconds
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def complete(self, prompt: str) -> str:
        session = self._get_session()
        request = {"model": self._model, "prompt": prompt}
        try:
            async with session.post(
                self._base_url,
                json=request,
                timeout=self._timeout,
            ) as response:
                if not 200 <= response.status < 300:
                    raise CompletionError(
                        f"completion service returned HTTP {response.status}"
                    )
                parts = []
                async for raw_line in response.content:
                    line = raw_line.strip()
                    if not line:
                        continue
                    parts.append(self._decode_chunk(line))
                return "".join(parts)
        except asyncio.TimeoutError as exc:
            raise CompletionError(
                f"completion timed out after {self._timeout_seconds:g}s"
            ) from exc
        except aiohttp.ClientError as exc:
            raise CompletionError(f"{type(exc).__name__}: {exc}") from exc

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    @staticmethod
    def _decode_chunk(line: bytes) -> str:
        try:
            chunk = json.loads(line)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CompletionError(f"malformed stream chunk: {exc}") from exc
        if not isinstance(chunk, dict):
            raise CompletionError("stream chunk must be a JSON object")
        if chunk.get("error"):
            raise CompletionError(f"completion service error: {chunk['error']}")
        value = chunk.get("response", "")
        return value if isinstance(value, str) else ""


class OpenAICompletionAdapter(BaseCompletionAdapter):
    """Adapter for OpenAI-compatible chat completion APIs.

    Configured for deterministic, non-streaming output.
    """

    def __init__(
        self,
        model: str = DEFAULT_OPENAI_MODEL,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: float = 120.0,
        max_tokens: int = 16,
    ) -> None:
        """Initialise the OpenAI adapter.

        Args:
            model: Model identifier.
            api_key: API key. The client falls back to OPENAI_API_KEY.
            base_url: Optional base URL for OpenAI-compatible endpoints.
            timeout_seconds: Total deadline for one completion call.
            max_tokens: Maximum tokens in the completion.
        """
        try:
            import openai  # type: ignore[import-untyped]
        except ImportError as exc:
            raise ImportError(
                "openai package is required for OpenAICompletionAdapter. "
                "Install it with: pip install openai"
            ) from exc

        client_kwargs: dict = {"timeout": timeout_seconds}
        if api_key:
            client_kwargs["api_key"] = api_key
        if base_url:
            client_kwargs["base_url"] = base_url

        self._client = openai.AsyncOpenAI(**client_kwargs)
        self._error_types = (openai.OpenAIError,)
        self._model = model
        self._max_tokens = max_tokens

    async def complete(self, prompt: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0,
                top_p=1,
                max_tokens=self._max_tokens,
                stream=False,
            )
        except self._error_types as exc:
            raise CompletionError(f"{type(exc).__name__}: {exc}") from exc
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self._client.close()


class MockCompletionAdapter(BaseCompletionAdapter):
    """Deterministic adapter that returns a fixed answer.

    Used for dry runs and tests where no completion service is available.
    Every prompt received is kept in ``prompts``.
    """

    def __init__(self, response: str = "Other") -> None:
        self._response = response
        self.prompts: list = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._response


def build_completion_adapter(
    settings: CompletionSettings,
    session: Optional[aiohttp.ClientSession] = None,
) -> BaseCompletionAdapter:
    """Create the adapter selected by ``settings.adapter``.

    Args:
        settings: Completion service settings.
        session: Shared client session for HTTP-based adapters.

    Returns:
        A ready-to-use completion adapter.

    Raises:
        ValueError: If the adapter name is unknown.
    """
    if settings.adapter == "mock":
        return MockCompletionAdapter(response=settings.mock_response)
    if settings.adapter == "openai":
        return OpenAICompletionAdapter(
            model=settings.model or DEFAULT_OPENAI_MODEL,
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout_seconds=settings.timeout_seconds,
        )
    if settings.adapter == "ollama":
        return OllamaCompletionAdapter(
            session=session,
            base_url=settings.base_url or DEFAULT_OLLAMA_URL,
            model=settings.model or DEFAULT_OLLAMA_MODEL,
            timeout_seconds=settings.timeout_seconds,
        )
    raise ValueError(f"Unknown completion adapter: {settings.adapter!r}")
