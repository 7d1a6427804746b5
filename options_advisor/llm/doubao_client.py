"""Doubao (Volcengine Ark) LLM client. Ark speaks the OpenAI chat-completions protocol."""

from __future__ import annotations

from options_advisor.config import DOUBAO_BASE_URL
from options_advisor.llm.openai_client import OpenAIClient


class DoubaoClient(OpenAIClient):
    provider = "doubao"
    base_url = DOUBAO_BASE_URL
    default_model = "doubao-seed-1-6-250615"
    default_models = (
        "doubao-seed-1-6-250615",
        "doubao-1-5-pro-32k-250115",
        "doubao-1-5-lite-32k-250115",
    )
    model_filter = "doubao"
