from __future__ import annotations

import logging

import sentry_sdk

from resume_match.core.config import settings

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or settings.log_level, format="%(message)s")
    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn)
        logger.info("sentry_initialized")


def report_defect(exc: BaseException) -> None:
    """Forward an unexpected failure to Sentry; a no-op when no DSN is configured."""
    try:
        sentry_sdk.capture_exception(exc)
    except Exception:  # pragma: no cover - reporting must not break analysis
        logger.debug("sentry_capture_failed", exc_info=True)


def clip(text: str, max_chars: int | None = None) -> str:
    limit = max_chars or settings.log_text_max_chars
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
