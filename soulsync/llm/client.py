"""LLM client wrapper for SoulSync.

Provides a single completion call to the Anthropic API, with graceful
behaviour when no API key is configured.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

import anthropic

from soulsync.config import get_settings

_NOT_CONFIGURED_MSG = "LLM not configured. Set ANTHROPIC_API_KEY."

FALLBACK_REPLY = "I'm here with you."


# ---------------------------------------------------------------------------
# Response dataclass
# ---------------------------------------------------------------------------


@dataclass
class LLMResponse:
    """Structured response from an LLM call."""

    content: str
    model: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class LLMClient:
    """Thin wrapper around the Anthropic Python SDK.

    Parameters
    ----------
    model : str | None
        Model identifier.  Defaults to ``SOULSYNC_LLM_MODEL``.
    api_key : str | None
        Anthropic API key.  Defaults to ``ANTHROPIC_API_KEY``.
    """

    def __init__(self, model: str | None = None, api_key: str | None = None) -> None:
        settings = get_settings()
        self.model = model or settings.llm_model
        self.api_key = api_key or settings.anthropic_api_key
        self._configured = bool(self.api_key)
        self._client = anthropic.Anthropic(api_key=self.api_key) if self._configured else None

    @property
    def configured(self) -> bool:
        """Return *True* if an API key is available."""
        return self._configured

    def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Send a completion request and return an :class:`LLMResponse`.

        When no API key is configured the method returns a stub response
        instead of raising.  Provider errors (``anthropic.APIError``)
        propagate to the caller.  An empty completion is replaced by
        :data:`FALLBACK_REPLY`.
        """
        if self._client is None:
            return LLMResponse(content=_NOT_CONFIGURED_MSG, model=self.model)

        kwargs: dict = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        start = time.monotonic()
        response = self._client.messages.create(**kwargs)
        latency_ms = int((time.monotonic() - start) * 1000)

        content = "".join(
            getattr(block, "text", "") for block in (response.content or [])
        ).strip()

        return LLMResponse(
            content=content or FALLBACK_REPLY,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            latency_ms=latency_ms,
        )
