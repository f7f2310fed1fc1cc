import logging
import os

from resume_match.ai.config import AIConfig, ProviderConfig, load_ai_config
from resume_match.ai.errors import ProviderUnavailable
from resume_match.ai.orchestrator import AnalysisOrchestrator
from resume_match.ai.types import AnalysisProvider
from resume_match.core.rate_limit import ProviderRateLimiter
from resume_match.scoring.engine import ScoringEngine

from resume_match.ai.providers.openai_provider import OpenAIProvider, looks_like_placeholder
from resume_match.ai.providers.claude_provider import ClaudeProvider
from resume_match.ai.providers.gemini_provider import GeminiProvider

logger = logging.getLogger(__name__)

_PROVIDER_CLASSES: dict[str, type[OpenAIProvider]] = {
    "gemini": GeminiProvider,
    "openai": OpenAIProvider,
    "claude": ClaudeProvider,
}


def build_provider(cfg: ProviderConfig) -> AnalysisProvider | None:
    provider_cls = _PROVIDER_CLASSES.get(cfg.name)
    if provider_cls is None:
        raise ValueError(f"Unsupported AI provider '{cfg.name}'")
    if not cfg.enabled:
        logger.info("provider_skipped provider=%s reason=zero_rate_limit", cfg.name)
        return None

    api_key = (os.getenv(cfg.api_key_env) or "").strip()
    if not api_key or looks_like_placeholder(api_key):
        logger.info("provider_skipped provider=%s reason=missing_api_key env=%s", cfg.name, cfg.api_key_env)
        return None

    try:
        return provider_cls(
            model=cfg.model,
            priority=cfg.priority,
            rate_limits=cfg.rate_limits,
            api_key=api_key,
            base_url=cfg.base_url,
            timeout_s=cfg.timeout_s,
            max_retries=cfg.max_retries,
        )
    except ProviderUnavailable as exc:
        logger.info("provider_skipped provider=%s reason=%s", cfg.name, exc.code)
        return None


def build_providers(cfg: AIConfig | None = None) -> list[AnalysisProvider]:
    cfg = cfg or load_ai_config()
    if not cfg.enabled:
        logger.info("ai_analysis_disabled")
        return []
    providers = [build_provider(provider_cfg) for provider_cfg in cfg.providers]
    return [provider for provider in providers if provider is not None]


def create_orchestrator(
    providers: list[AnalysisProvider] | None = None,
    *,
    engine: ScoringEngine | None = None,
    rate_limiter: ProviderRateLimiter | None = None,
) -> AnalysisOrchestrator:
    return AnalysisOrchestrator(
        build_providers() if providers is None else providers,
        engine=engine,
        rate_limiter=rate_limiter,
    )
