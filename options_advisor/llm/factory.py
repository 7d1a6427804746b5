"""LLM client factory. Add new providers to the registry here."""

from __future__ import annotations

from enum import Enum

import httpx

from options_advisor.config import LLM_PROVIDER
from options_advisor.errors import ConfigError
from options_advisor.llm.base import BaseLLMClient
from options_advisor.llm.doubao_client import DoubaoClient
from options_advisor.llm.gemini_client import GeminiClient
from options_advisor.llm.openai_client import OpenAIClient


class Provider(str, Enum):
    OPENAI = "openai"
    GEMINI = "gemini"
    DOUBAO = "doubao"


_REGISTRY: dict[Provider, type[BaseLLMClient]] = {
    Provider.OPENAI: OpenAIClient,
    Provider.GEMINI: GeminiClient,
    Provider.DOUBAO: DoubaoClient,
}


def available_providers() -> list[str]:
    return [p.value for p in _REGISTRY]


def get_llm_client(
    name: str | None = None,
    http_client: httpx.Client | None = None,
    timeout: float | None = None,
) -> BaseLLMClient:
    name = (name or LLM_PROVIDER).strip().lower()
    try:
        provider = Provider(name)
    except ValueError:
        raise ConfigError(
            f"Unknown LLM provider: {name!r} (expected one of {available_providers()})"
        ) from None
    return _REGISTRY[provider](http_client=http_client, timeout=timeout)
