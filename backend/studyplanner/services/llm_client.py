"""Chat-completion client used for schedule and tip generation."""
from __future__ import annotations

import logging
from functools import lru_cache

import openai

from studyplanner.core.config import Settings, settings
from studyplanner.services.schedule_errors import UpstreamError

logger = logging.getLogger(__name__)


class ScheduleModelClient:
    """Base interface for generative model providers."""

    def complete(self, *, model: str, system_prompt: str, user_prompt: str) -> str:
        raise NotImplementedError


class OpenAIChatClient(ScheduleModelClient):
    """OpenAI-compatible chat completions (Groq by default)."""

    def __init__(self, config: Settings) -> None:
        self._config = config
        self._client: openai.OpenAI | None = None

    def _get_client(self) -> openai.OpenAI:
        if self._client is None:
            if not self._config.llm_api_key:
                raise UpstreamError(details="LLM_API_KEY (or GROQ_API_KEY / OPENAI_API_KEY) is not configured.")
            self._client = openai.OpenAI(
                api_key=self._config.llm_api_key,
                base_url=self._config.llm_base_url,
                timeout=self._config.llm_timeout_seconds,
                max_retries=self._config.llm_max_retries,
            )
        return self._client

    def complete(self, *, model: str, system_prompt: str, user_prompt: str) -> str:
        client = self._get_client()
        try:
            completion = client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except openai.OpenAIError as exc:
            logger.error("Model call to %s failed: %s", model, exc)
            raise UpstreamError(details=str(exc)) from exc

        if not completion.choices:
            raise UpstreamError(details="Model returned no choices.")
        content = (completion.choices[0].message.content or "").strip()
        if not content:
            raise UpstreamError(details="Model returned an empty message.")
        return content


@lru_cache
def get_llm_client() -> ScheduleModelClient:
    return OpenAIChatClient(settings)
