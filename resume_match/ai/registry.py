from __future__ import annotations

import logging
from typing import Iterable

from resume_match.ai.types import AnalysisProvider
from resume_match.core.rate_limit import ProviderRateLimiter

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Priority-ordered providers plus first-match availability selection."""

    def __init__(self, providers: Iterable[AnalysisProvider], rate_limiter: ProviderRateLimiter):
        ordered = sorted(providers, key=lambda provider: provider.priority)
        names = [provider.name for provider in ordered]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate provider names: {', '.join(duplicates)}")

        self._providers: tuple[AnalysisProvider, ...] = tuple(ordered)
        self._rate_limiter = rate_limiter
        for provider in self._providers:
            if not rate_limiter.is_registered(provider.name):
                rate_limiter.register(provider.name, provider.rate_limits)

    @property
    def providers(self) -> tuple[AnalysisProvider, ...]:
        return self._providers

    @property
    def rate_limiter(self) -> ProviderRateLimiter:
        return self._rate_limiter

    async def select(self) -> AnalysisProvider | None:
        """Return the first provider that is within its rate limits and answers its probe."""
        for provider in self._providers:
            if not self._rate_limiter.check_limit(provider.name):
                logger.info("provider_rate_limited provider=%s", provider.name)
                continue
            try:
                available = bool(await provider.is_available())
            except Exception as exc:  # noqa: BLE001 - a failed probe only marks the provider unavailable
                logger.warning("provider_probe_failed provider=%s: %s", provider.name, exc)
                continue
            if available:
                logger.debug("provider_selected provider=%s", provider.name)
                return provider
            logger.info("provider_unavailable provider=%s", provider.name)
        return None
