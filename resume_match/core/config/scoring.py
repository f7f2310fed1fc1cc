from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from resume_match.core.config import settings

BUNDLED_SCORING_CONFIG = Path(__file__).with_name("scoring.yaml")


def scoring_config_path() -> Path:
    """``SCORING_CONFIG_PATH`` when set, otherwise the scoring.yaml shipped with the package."""
    if settings.scoring_config_path:
        return Path(settings.scoring_config_path).expanduser()
    return BUNDLED_SCORING_CONFIG


@lru_cache(maxsize=4)
def load_scoring_config(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise RuntimeError(f"Scoring config not found at '{path}'.")
    try:
        with path.open("r", encoding="utf-8") as handle:
            parsed = yaml.safe_load(handle)
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring config '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid scoring config '{path}': expected a top-level mapping.")
    return parsed


def get_scoring_config() -> dict[str, Any]:
    return load_scoring_config(scoring_config_path())


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Look up a dotted key such as ``confidence.bonus.skill_relevance``.

    Missing keys, and keys that run through a non-mapping, return ``default``.
    """
    if not path:
        return default
    current: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current
