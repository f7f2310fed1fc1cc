from __future__ import annotations

from typing import Protocol


class TaxonomyProvider(Protocol):
    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        """Return normalized text and optional canonical skill term."""

    def skills(self) -> tuple[str, ...]: ...

    def tools(self) -> tuple[str, ...]: ...

    def certifications(self) -> tuple[str, ...]: ...

    def fields_of_study(self) -> tuple[str, ...]: ...

    def industries(self) -> dict[str, tuple[str, ...]]: ...

    def terms(self, group: str) -> tuple[str, ...]: ...

    def synonyms(self) -> dict[str, str]: ...
