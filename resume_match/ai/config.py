import os
from dataclasses import dataclass

from resume_match.core.config import settings
from resume_match.schemas.provider import RateLimits


@dataclass(frozen=True)
class ProviderConfig:
    name: str
    model: str
    api_key_env: str
    base_url: str | None
    priority: int
    rate_limits: RateLimits
    timeout_s: float = 30.0
    max_retries: int = 0
    enabled: bool = True


@dataclass(frozen=True)
class AIConfig:
    enabled: bool
    providers: tuple[ProviderConfig, ...]


# name -> (model, api key env var, base url, per-minute, per-hour, per-day)
_PROVIDER_DEFAULTS: dict[str, tuple[str, str, str | None, int | None, int | None, int | None]] = {
    "gemini": (
        "gemini-1.5-flash",
        "GEMINI_API_KEY",
        "https://generativelanguage.googleapis.com/v1beta/openai/",
        15,
        1500,
        50000,
    ),
    "openai": ("gpt-4o-mini", "OPENAI_API_KEY", None, 3, 20, None),
    "claude": (
        "claude-3-5-haiku-latest",
        "ANTHROPIC_API_KEY",
        "https://api.anthropic.com/v1/",
        5,
        100,
        1000,
    ),
}


def _env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_limit(name: str, default: int | None) -> int | None:
    value = _env(name)
    if value is None:
        return default
    if value.lower() in {"none", "unlimited"}:
        return None
    limit = int(value)
    if limit < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return limit


def load_provider_config(name: str, priority: int) -> ProviderConfig:
    key = name.strip().lower()
    if key not in _PROVIDER_DEFAULTS:
        raise ValueError(f"Unsupported AI provider '{name}'")

    model, api_key_env, base_url, per_minute, per_hour, per_day = _PROVIDER_DEFAULTS[key]
    prefix = key.upper()
    limits = {
        "per_minute": _env_limit(f"{prefix}_REQUESTS_PER_MINUTE", per_minute),
        "per_hour": _env_limit(f"{prefix}_REQUESTS_PER_HOUR", per_hour),
        "per_day": _env_limit(f"{prefix}_REQUESTS_PER_DAY", per_day),
    }
    # A zero limit switches the provider off.
    enabled = 0 not in limits.values()
    return ProviderConfig(
        name=key,
        model=_env(f"{prefix}_MODEL", model),
        api_key_env=api_key_env,
        base_url=_env(f"{prefix}_BASE_URL", base_url),
        priority=priority,
        rate_limits=RateLimits(**{window: limit or None for window, limit in limits.items()}),
        timeout_s=float(_env(f"{prefix}_TIMEOUT_S", _env("OPENAI_TIMEOUT_S", "30"))),
        max_retries=int(_env(f"{prefix}_MAX_RETRIES", _env("OPENAI_MAX_RETRIES", "0"))),
        enabled=enabled,
    )


def load_ai_config() -> AIConfig:
    providers = tuple(
        load_provider_config(name, priority)
        for priority, name in enumerate(settings.ai_providers, start=1)
    )
    return AIConfig(enabled=settings.ai_analysis_enabled, providers=providers)
