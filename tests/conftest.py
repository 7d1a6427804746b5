"""Shared fixtures: provider HTTP APIs are faked with httpx.MockTransport."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Callable

import httpx
import pytest

from options_advisor.models.analysis import AnalysisRequest

FULL_RESULT = {
    "macroScore": 8,
    "macroComment": "Rates are easing and tech leadership is broad.",
    "techScore": 7,
    "techComment": "Price holding above the 50-day with RSI at 58.",
    "mainConflict": "Strong trend but stretched valuation into earnings.",
    "bullCase": ["Services growth", "Buybacks", "Breakout above 190"],
    "bearCase": ["China demand", "Regulatory risk", "IV crush after earnings"],
    "verdict": {
        "direction": "Long",
        "strategyType": "Call Debit Spread",
        "contract": "AAPL Call",
        "expiration": "2024-07-19",
        "strikes": "190/200",
        "entryReason": "Pullback to support with IV rank low.",
    },
    "tradeManagement": {
        "entry": "1.80-2.00 debit",
        "target": "3.60",
        "stop": "0.90",
    },
}

FIXED_NOW = datetime(2024, 6, 3, 14, 30, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture
def full_result() -> dict:
    return json.loads(json.dumps(FULL_RESULT))


@pytest.fixture
def request_en() -> AnalysisRequest:
    return AnalysisRequest(
        ticker="AAPL",
        price="189.50",
        rsi="58",
        macd="0.42",
        iv_rank="22",
        support="185",
        resistance="195",
        account_balance="5000",
        language="English",
        api_key="sk-x",
        provider="openai",
    )


@pytest.fixture
def request_zh() -> AnalysisRequest:
    return AnalysisRequest(
        ticker="TSLA",
        price="180",
        language="Chinese (Simplified)",
        api_key="k",
        provider="gemini",
    )


class Recorder:
    """Collects the requests a MockTransport handler has seen."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


@pytest.fixture
def mock_http():
    """Build an httpx.Client whose every request goes to `handler`."""
    clients: list[httpx.Client] = []

    def make(handler: Callable[[httpx.Request], httpx.Response]) -> tuple[httpx.Client, Recorder]:
        recorder = Recorder(handler)
        client = httpx.Client(transport=httpx.MockTransport(recorder))
        clients.append(client)
        return client, recorder

    yield make
    for c in clients:
        c.close()


def chat_completion(content: str | None) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 100, "completion_tokens": 50, "total_tokens": 150},
    }


def gemini_response(text: str) -> dict:
    return {
        "candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}],
        "usageMetadata": {"promptTokenCount": 100, "totalTokenCount": 150},
    }
