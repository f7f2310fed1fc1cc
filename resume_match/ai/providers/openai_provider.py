from __future__ import annotations

import logging
import os
from typing import Any, Optional, Sequence

from openai import AsyncOpenAI

from resume_match.ai.errors import ProviderInvocationFailed, ProviderUnavailable
from resume_match.ai.prompts import build_analysis_messages, build_contextual_messages
from resume_match.ai.providers.coercion import parse_json_payload
from resume_match.ai.types import ChatMessage, to_payload
from resume_match.core.observability import clip
from resume_match.schemas.provider import JobDescriptor, RateLimits

logger = logging.getLogger(__name__)


def looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


class OpenAIProvider:
    default_name = "OpenAI"
    api_key_env = "OPENAI_API_KEY"
    base_url_env = "OPENAI_BASE_URL"
    default_base_url: Optional[str] = None
    json_mode = True

    def __init__(
        self,
        model: str,
        *,
        name: Optional[str] = None,
        priority: int = 1,
        rate_limits: Optional[RateLimits] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 0,
        temperature: float = 0.2,
        max_output_tokens: int = 1200,
        client: Any = None,
    ):
        self.name = name or self.default_name
        self.priority = priority
        self.rate_limits = rate_limits or RateLimits()
        self._model = model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens

        if client is not None:
            self._client = client
            return

        key = (api_key or os.getenv(self.api_key_env) or "").strip()
        if not key or looks_like_placeholder(key):
            raise ProviderUnavailable(f"{self.api_key_env} is missing", code="missing_api_key")

        # SDK retries stay off by default: a failed call falls through to the next tier instead.
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv(self.base_url_env) or self.default_base_url or None),
            timeout=timeout_s,
            max_retries=max_retries,
        )

    @property
    def model(self) -> str:
        return self._model

    async def is_available(self) -> bool:
        await self._probe()
        return True

    async def _probe(self) -> None:
        await self._client.models.retrieve(self._model)

    async def analyze(self, resume_text: str, job_text: str) -> dict[str, Any]:
        return await self._complete_json(build_analysis_messages(resume_text, job_text))

    async def analyze_with_context(
        self, resume_text: str, job_text: str, job_descriptor: JobDescriptor
    ) -> dict[str, Any]:
        return await self._complete_json(build_contextual_messages(resume_text, job_text, job_descriptor))

    async def _complete_json(self, messages: Sequence[ChatMessage]) -> dict[str, Any]:
        create_kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": to_payload(messages),
            "temperature": self._temperature,
            "max_tokens": self._max_output_tokens,
        }
        if self.json_mode:
            create_kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self._client.chat.completions.create(**create_kwargs)
        except Exception as exc:  # noqa: BLE001 - every SDK failure moves the cascade on
            logger.warning("provider_request_failed provider=%s model=%s: %s", self.name, self._model, clip(str(exc)))
            raise ProviderInvocationFailed(f"{self.name} request failed: {exc}") from exc

        content = response.choices[0].message.content if response.choices else ""
        if not content:
            raise ProviderInvocationFailed(f"{self.name} returned an empty response", code="empty_response")
        return parse_json_payload(content)
