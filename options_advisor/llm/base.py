"""Base interface for LLM clients. Implement this to add a new provider."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable

import httpx

from options_advisor import config
from options_advisor.llm.prompt import build_prompt, load_template
from options_advisor.models.analysis import AnalysisRequest, AnalysisResult, Locale

log = logging.getLogger(__name__)


class BaseLLMClient(ABC):
    provider: str = ""
    default_model: str = ""
    default_models: tuple[str, ...] = ()
    model_filter: str = ""

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        # Injected clients are borrowed, never closed here.
        self._http = http_client
        self._timeout = timeout if timeout is not None else config.LLM_TIMEOUT_SECONDS

    @abstractmethod
    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """Build the prompt, call the model, return the normalized result."""
        ...

    @abstractmethod
    def test_connection(self, api_key: str) -> bool:
        """True if an authenticated model listing succeeds. Never raises."""
        ...

    @abstractmethod
    def fetch_models(self, api_key: str) -> list[str]:
        """Available model ids, or the default list on any failure. Never raises."""
        ...

    def extra_fields(self, request: AnalysisRequest, locale: Locale) -> list[tuple[str, str]]:
        """Rows placed ahead of the standard market-data rows."""
        return []

    def build_prompt(self, request: AnalysisRequest) -> str:
        locale = request.locale
        return build_prompt(
            request, load_template(locale), extra_fields=self.extra_fields(request, locale)
        )

    def model_for(self, request: AnalysisRequest) -> str:
        return request.model or self.default_model

    def _filter_models(self, ids: Iterable[str]) -> list[str]:
        models = [m for m in ids if self.model_filter in m]
        if not models:
            log.warning(f"{self.provider}: no '{self.model_filter}' models listed, using defaults")
            return list(self.default_models)
        return models
