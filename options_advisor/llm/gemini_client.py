"""Google Gemini LLM client (REST, key passed as a query parameter)."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import httpx

from options_advisor.config import GEMINI_BASE_URL
from options_advisor.errors import ApiError
from options_advisor.llm.base import BaseLLMClient
from options_advisor.llm.prompt import analysis_type_field
from options_advisor.models.analysis import AnalysisRequest, AnalysisResult, Locale
from options_advisor.validation.normalizer import normalize

log = logging.getLogger(__name__)


class GeminiClient(BaseLLMClient):
    provider = "gemini"
    base_url = GEMINI_BASE_URL
    default_model = "gemini-2.5-flash"
    default_models = ("gemini-2.5-flash", "gemini-1.5-flash", "gemini-1.5-pro", "gemini-1.0-pro")
    model_filter = "gemini"

    @contextmanager
    def _client(self) -> Iterator[httpx.Client]:
        if self._http is not None:
            yield self._http
            return
        with httpx.Client(timeout=self._timeout) as client:
            yield client

    def extra_fields(self, request: AnalysisRequest, locale: Locale) -> list[tuple[str, str]]:
        return [analysis_type_field(request, locale)]

    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        prompt = self.build_prompt(request)
        model = self.model_for(request)
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "tools": [{"google_search": {}}],
        }
        log.info(f"Calling Gemini ({model})...")
        try:
            with self._client() as client:
                resp = client.post(
                    f"{self.base_url}/models/{model}:generateContent",
                    params={"key": request.api_key},
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise ApiError(str(e)) from e

        if not resp.is_success:
            raise ApiError(resp.reason_phrase or str(resp.status_code), resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise ApiError(f"invalid response body: {e}", resp.status_code) from e
        content = _first_candidate_text(data)
        usage = (data.get("usageMetadata") if isinstance(data, dict) else None) or {}
        if usage:
            log.info(
                f"LLM response: {usage.get('promptTokenCount', '?')}p/"
                f"{usage.get('totalTokenCount', '?')}t tokens"
            )
        return normalize(content, request.locale)

    def _list_models(self, api_key: str) -> httpx.Response:
        with self._client() as client:
            return client.get(f"{self.base_url}/models", params={"key": api_key})

    def test_connection(self, api_key: str) -> bool:
        try:
            return self._list_models(api_key).is_success
        except httpx.HTTPError as e:
            log.warning(f"Gemini connection test failed: {e}")
            return False

    def fetch_models(self, api_key: str) -> list[str]:
        if not api_key:
            return list(self.default_models)
        try:
            resp = self._list_models(api_key)
            if not resp.is_success:
                log.warning(f"Gemini model listing returned {resp.status_code}, using defaults")
                return list(self.default_models)
            names = [m["name"] for m in resp.json().get("models", [])]
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            log.warning(f"Failed to fetch Gemini models: {e}")
            return list(self.default_models)
        return self._filter_models(n.replace("models/", "", 1) for n in names)


def _first_candidate_text(data: dict) -> str:
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"] or ""
    except (KeyError, IndexError, TypeError):
        return ""
