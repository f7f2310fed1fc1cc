from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int | None) -> int | None:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip().lower() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    ai_analysis_enabled: bool
    ai_providers: tuple[str, ...]
    log_text_max_chars: int
    scoring_config_path: str | None
    taxonomy_path: str | None


settings = Settings(
    log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
    sentry_dsn=_get_env("SENTRY_DSN"),
    ai_analysis_enabled=_get_env_bool("AI_ANALYSIS_ENABLED", True),
    ai_providers=_get_env_list("AI_PROVIDERS", ["gemini", "openai", "claude"]),
    log_text_max_chars=_get_env_int("LOG_TEXT_MAX_CHARS", 200) or 200,
    scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
    taxonomy_path=_get_env("TAXONOMY_PATH"),
)

__all__ = ["Settings", "settings"]
