"""OpenAI LLM client."""

from __future__ import annotations

import logging

import openai
from openai import OpenAI

from options_advisor.config import LLM_TEMPERATURE, OPENAI_BASE_URL
from options_advisor.errors import ApiError
from options_advisor.llm.base import BaseLLMClient
from options_advisor.llm.prompt import SYSTEM_PROMPT
from options_advisor.models.analysis import AnalysisRequest, AnalysisResult
from options_advisor.validation.normalizer import normalize

log = logging.getLogger(__name__)


class OpenAIClient(BaseLLMClient):
    """Chat-completions backend; also the base for OpenAI-compatible providers."""

    provider = "openai"
    base_url = OPENAI_BASE_URL
    default_model = "gpt-4o"
    default_models = ("gpt-4o", "gpt-4-turbo", "gpt-4", "gpt-3.5-turbo")
    model_filter = "gpt"

    def _client(self, api_key: str) -> OpenAI:
        return OpenAI(
            api_key=api_key,
            base_url=self.base_url,
            http_client=self._http,
            max_retries=0,
            timeout=self._timeout,
        )

    def _close(self, client: OpenAI) -> None:
        if self._http is None:
            client.close()

    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        prompt = self.build_prompt(request)
        model = self.model_for(request)
        client = self._client(request.api_key)
        log.info(f"Calling {self.provider} ({model})...")
        try:
            resp = client.chat.completions.create(
                model=model,
                temperature=LLM_TEMPERATURE,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except openai.APIStatusError as e:
            raise ApiError(e.response.reason_phrase or str(e.status_code), e.status_code) from e
        except openai.APIError as e:
            raise ApiError(str(e)) from e
        finally:
            self._close(client)

        content = (resp.choices[0].message.content if resp.choices else None) or ""
        if resp.usage:
            log.info(
                f"LLM response: {resp.usage.prompt_tokens}p/{resp.usage.total_tokens}t tokens"
            )
        return normalize(content, request.locale)

    def _list_model_ids(self, api_key: str) -> list[str]:
        client = self._client(api_key)
        try:
            return [m.id for m in client.models.list().data]
        finally:
            self._close(client)

    def test_connection(self, api_key: str) -> bool:
        try:
            self._list_model_ids(api_key)
            return True
        except openai.OpenAIError as e:
            log.warning(f"{self.provider} connection test failed: {e}")
            return False

    def fetch_models(self, api_key: str) -> list[str]:
        if not api_key:
            return list(self.default_models)
        try:
            ids = self._list_model_ids(api_key)
        except openai.OpenAIError as e:
            log.warning(f"Failed to fetch {self.provider} models: {e}")
            return list(self.default_models)
        return self._filter_models(ids)
