from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .provider import TaxonomyProvider


def _unique(items: list[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for item in items:
        normalized = str(item).strip().lower()
        if normalized:
            seen.setdefault(normalized, None)
    return tuple(seen)


def _flatten(node: Any) -> list[str]:
    if isinstance(node, dict):
        flattened: list[str] = []
        for value in node.values():
            flattened.extend(_flatten(value))
        return flattened
    if isinstance(node, list):
        return [str(item) for item in node]
    return []


class LocalTaxonomy(TaxonomyProvider):
    def __init__(self, vocabulary_path: str | Path | None = None) -> None:
        path = Path(vocabulary_path) if vocabulary_path else Path(__file__).with_name("vocabulary.json")
        raw = self._load(path)
        self._skills = _unique(_flatten(raw.get("skills", {})))
        self._tools = _unique(raw.get("tools", []))
        self._certifications = _unique(raw.get("certifications", []))
        self._fields = _unique(raw.get("fields_of_study", []))
        self._industries = {
            str(name).strip().lower(): _unique(keywords)
            for name, keywords in (raw.get("industries") or {}).items()
        }
        self._groups = {
            key: _unique(value)
            for key, value in raw.items()
            if isinstance(value, list)
        }
        self._synonyms = {
            str(key).strip().lower(): str(value).strip().lower()
            for key, value in (raw.get("synonyms") or {}).items()
        }

    @staticmethod
    def _load(path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid taxonomy file '{path}': expected a top-level mapping.")
        return raw

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        normalized = " ".join(raw.strip().lower().split())
        canonical = self._synonyms.get(normalized)
        if canonical is None and (normalized in self._skills or normalized in self._tools):
            canonical = normalized
        return normalized, canonical

    def skills(self) -> tuple[str, ...]:
        return self._skills

    def tools(self) -> tuple[str, ...]:
        return self._tools

    def certifications(self) -> tuple[str, ...]:
        return self._certifications

    def fields_of_study(self) -> tuple[str, ...]:
        return self._fields

    def industries(self) -> dict[str, tuple[str, ...]]:
        return dict(self._industries)

    def terms(self, group: str) -> tuple[str, ...]:
        return self._groups.get(group, ())

    def synonyms(self) -> dict[str, str]:
        return dict(self._synonyms)
