from __future__ import annotations

import logging
from typing import Any, Iterable

from resume_match.ai.errors import AnalysisError
from resume_match.ai.providers.coercion import coerce_provider_result
from resume_match.ai.registry import ProviderRegistry
from resume_match.ai.types import AnalysisProvider
from resume_match.core.config.scoring import get_scoring_value
from resume_match.core.observability import clip, report_defect
from resume_match.core.rate_limit import ProviderRateLimiter
from resume_match.schemas.analysis import AnalysisResult, ServiceStatus
from resume_match.schemas.provider import JobDescriptor
from resume_match.scoring.basic import basic_analysis
from resume_match.scoring.engine import ScoringEngine
from resume_match.scoring.tailoring import tailor_result

logger = logging.getLogger(__name__)


def _resolve_job_text(job_text: Any, descriptor: JobDescriptor | None) -> Any:
    if descriptor is not None and (not isinstance(job_text, str) or not job_text.strip()):
        return descriptor.as_text()
    return job_text


class AnalysisOrchestrator:
    """Runs one analysis through the AI → rule-based → basic cascade.

    ``analyze`` and ``analyze_with_context`` always return a result: provider and
    engine failures are logged and the next tier takes over, and the basic tier
    cannot fail.
    """

    def __init__(
        self,
        providers: Iterable[AnalysisProvider] = (),
        *,
        engine: ScoringEngine | None = None,
        rate_limiter: ProviderRateLimiter | None = None,
    ):
        self._rate_limiter = rate_limiter or ProviderRateLimiter()
        self._registry = ProviderRegistry(providers, self._rate_limiter)
        self._engine = engine or ScoringEngine()
        self._status = ServiceStatus()

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    @property
    def rate_limiter(self) -> ProviderRateLimiter:
        return self._rate_limiter

    def get_service_status(self) -> ServiceStatus:
        return self._status.model_copy()

    async def analyze(self, resume_text: str, job_text: str) -> AnalysisResult:
        return await self._run(resume_text, job_text, None)

    async def analyze_with_context(
        self,
        resume_text: str,
        job_text: str,
        job_descriptor: JobDescriptor | None,
    ) -> AnalysisResult:
        return await self._run(resume_text, job_text, job_descriptor)

    async def _run(self, resume_text: Any, job_text: Any, descriptor: JobDescriptor | None) -> AnalysisResult:
        job_text = _resolve_job_text(job_text, descriptor)

        result = await self._try_ai(resume_text, job_text, descriptor)
        if result is None:
            result = self._try_rule_based(resume_text, job_text, descriptor)
        if result is None:
            result = basic_analysis(resume_text, job_text)
            self._update_status("unavailable", result)
        return result

    def _ai_confidence(self, descriptor: JobDescriptor | None) -> float:
        if descriptor is None:
            return float(get_scoring_value("confidence.ai", 0.9))
        return float(get_scoring_value("confidence.ai_contextual", 0.95))

    async def _try_ai(
        self, resume_text: Any, job_text: Any, descriptor: JobDescriptor | None
    ) -> AnalysisResult | None:
        if not self._registry.providers:
            return None
        if not isinstance(resume_text, str) or not isinstance(job_text, str):
            logger.warning("ai_tier_skipped reason=malformed_input")
            return None

        provider = await self._registry.select()
        if provider is None:
            logger.info("ai_tier_skipped reason=no_provider_available")
            return None

        try:
            if descriptor is None:
                raw = await provider.analyze(resume_text, job_text)
            else:
                raw = await provider.analyze_with_context(resume_text, job_text, descriptor)
            result = coerce_provider_result(
                raw,
                service_name=provider.name,
                confidence=self._ai_confidence(descriptor),
                max_recommendations=int(get_scoring_value("recommendations.max_items", 8)),
            )
        except Exception as exc:  # noqa: BLE001 - any provider failure moves the cascade on
            code = exc.code if isinstance(exc, AnalysisError) else type(exc).__name__
            logger.warning("provider_invocation_failed provider=%s code=%s: %s", provider.name, code, clip(str(exc)))
            return None

        self._rate_limiter.record_usage(provider.name)
        self._update_status("available", result)
        return result

    def _try_rule_based(
        self, resume_text: Any, job_text: Any, descriptor: JobDescriptor | None
    ) -> AnalysisResult | None:
        try:
            result = self._engine.analyze(resume_text, job_text)
            if descriptor is not None:
                result = tailor_result(result, resume_text, descriptor, taxonomy=self._engine.taxonomy)
            margin = float(get_scoring_value("confidence.tier_margin", 0.05))
            ceiling = self._ai_confidence(descriptor) - margin
            result.confidence = round(min(result.confidence, ceiling), 2)
        except Exception as exc:  # noqa: BLE001 - the basic tier still answers
            code = exc.code if isinstance(exc, AnalysisError) else type(exc).__name__
            logger.error("scoring_engine_failed code=%s: %s", code, exc, exc_info=True)
            report_defect(exc)
            return None

        self._update_status("unavailable", result)
        return result

    def _update_status(self, primary_state: str, result: AnalysisResult) -> None:
        self._status = ServiceStatus(
            primary_state=primary_state,
            fallback_tier=result.analysis_method,
            confidence=result.confidence,
            service_name=result.service_name or None,
        )
