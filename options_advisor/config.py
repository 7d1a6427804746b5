"""Centralized config loaded from .env — single source of truth."""

from __future__ import annotations

import os
from pathlib import Path
from dotenv import load_dotenv

_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_ROOT / ".env")


def _optional_float(key: str) -> float | None:
    raw = os.getenv(key, "").strip()
    return float(raw) if raw else None


# --- LLM ---
LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "openai")
LLM_MODEL: str = os.getenv("LLM_MODEL", "")
LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.7"))
# Unset means no client-side timeout; callers bound latency themselves.
LLM_TIMEOUT_SECONDS: float | None = _optional_float("LLM_TIMEOUT_SECONDS")

OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
DOUBAO_API_KEY: str = os.getenv("DOUBAO_API_KEY", "")

OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
GEMINI_BASE_URL: str = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
)
DOUBAO_BASE_URL: str = os.getenv(
    "DOUBAO_BASE_URL", "https://ark.cn-beijing.volces.com/api/v3"
)

# --- Analysis ---
ACCOUNT_BALANCE: str = os.getenv("ACCOUNT_BALANCE", "700")
LANGUAGE: str = os.getenv("LANGUAGE", "English")
PROMPT_TEMPLATE_PATH: str = os.getenv("PROMPT_TEMPLATE_PATH", "")

# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


def api_key_for(provider: str) -> str:
    """API key stored for a provider id, empty if none is configured."""
    return {
        "openai": OPENAI_API_KEY,
        "gemini": GEMINI_API_KEY,
        "doubao": DOUBAO_API_KEY,
    }.get(provider, "")
