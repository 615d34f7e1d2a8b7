"""Completion clients — the one seam between NoteTube and an LLM provider.

Works with ANY LLM that exposes an OpenAI-compatible API.

Config is read from a .env file (drop it in your project root) or env vars.

Setup — pick ONE provider:

  # OpenAI (direct)
  OPENAI_API_KEY=sk-...

  # OpenRouter
  NOTETUBE_LLM_API_KEY=sk-or-v1-your-key-here
  NOTETUBE_LLM_BASE_URL=https://openrouter.ai/api/v1
  NOTETUBE_LLM_MODEL=openai/gpt-4o-mini

  # Ollama (local, free)
  NOTETUBE_LLM_BASE_URL=http://localhost:11434/v1
  NOTETUBE_LLM_MODEL=llama3
  NOTETUBE_LLM_API_KEY=ollama
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from openai import OpenAI, OpenAIError

from .config import Settings
from .errors import GenerationFailed

logger = logging.getLogger(__name__)

Message = dict[str, str]


class CompletionClient(Protocol):
    def complete(
        self,
        messages: list[Message],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        """Return the generated text, or None when the service returned nothing."""
        ...


class OpenAICompletionClient:
    """Chat-completions client. One attempt per call: retries are disabled."""

    def __init__(self, client: OpenAI, model: str) -> None:
        self._client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAICompletionClient":
        client_kwargs: dict[str, Any] = {
            "api_key": settings.require_api_key(),
            "max_retries": 0,
            "timeout": settings.llm_timeout,
        }
        if settings.base_url:
            client_kwargs["base_url"] = settings.base_url
        return cls(OpenAI(**client_kwargs), settings.model)

    def complete(
        self,
        messages: list[Message],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        logger.info("Calling LLM: model=%s temperature=%.1f max_tokens=%d", self.model, temperature, max_tokens)
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except OpenAIError as exc:
            logger.warning("LLM call failed (%s): %s", self.model, exc)
            raise GenerationFailed() from exc

        if not response.choices:
            return None
        return response.choices[0].message.content
