from __future__ import annotations

import json
import re
from typing import Any, Mapping

from resume_match.ai.errors import MalformedProviderResult
from resume_match.schemas.analysis import (
    PILLAR_CAPS,
    AnalysisResult,
    CoreSkillsPillar,
    EducationPillar,
    ExperiencePillar,
    Pillars,
    ToolsPillar,
)

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def _clamp_int(value: Any, default: int, min_value: int, max_value: int) -> int:
    try:
        parsed = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        parsed = default
    return max(min_value, min(max_value, parsed))


def _safe_str(value: Any, max_len: int = 300) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    if len(text) > max_len:
        return text[:max_len]
    return text


def _safe_str_list(value: Any, max_items: int, max_len: int = 220) -> list[str]:
    if not isinstance(value, list):
        return []
    out: list[str] = []
    for item in value:
        text = _safe_str(item, max_len=max_len)
        if text and text not in out:
            out.append(text)
        if len(out) >= max_items:
            break
    return out


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name)
    if isinstance(section, Mapping):
        return section
    # A bare number is accepted as the pillar score.
    if isinstance(section, (int, float)) and not isinstance(section, bool):
        return {"score": section}
    return {}


def parse_json_payload(content: str) -> dict[str, Any]:
    """Extract the first-to-last brace span from model output and parse it as a JSON object."""
    match = _JSON_OBJECT_RE.search(content or "")
    if not match:
        raise MalformedProviderResult("Provider response did not contain a JSON object")
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise MalformedProviderResult(f"Provider response is not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise MalformedProviderResult("Provider response JSON is not an object")
    return parsed


def coerce_pillars(raw: Mapping[str, Any]) -> Pillars:
    source = raw.get("pillars") if isinstance(raw.get("pillars"), Mapping) else raw
    skills = _section(source, "core_skills")
    experience = _section(source, "relevant_experience")
    tools = _section(source, "tools_methodologies")
    education = _section(source, "education_credentials")
    return Pillars(
        core_skills=CoreSkillsPillar(
            score=_clamp_int(skills.get("score"), 0, 0, PILLAR_CAPS["core_skills"]),
            matched=_safe_str_list(skills.get("matched"), max_items=30, max_len=80),
            required_count=_clamp_int(skills.get("required_count"), 0, 0, 200),
        ),
        relevant_experience=ExperiencePillar(
            score=_clamp_int(experience.get("score"), 0, 0, PILLAR_CAPS["relevant_experience"]),
            candidate_years=_clamp_int(experience.get("candidate_years"), 0, 0, 60),
            jd_years=_clamp_int(experience.get("jd_years"), 0, 0, 60),
            evidence=_safe_str_list(experience.get("evidence"), max_items=8),
        ),
        tools_methodologies=ToolsPillar(
            score=_clamp_int(tools.get("score"), 0, 0, PILLAR_CAPS["tools_methodologies"]),
            matched=_safe_str_list(tools.get("matched"), max_items=30, max_len=80),
        ),
        education_credentials=EducationPillar(
            score=_clamp_int(education.get("score"), 0, 0, PILLAR_CAPS["education_credentials"]),
            degree=_safe_str(education.get("degree"), max_len=120) or "Not specified",
            notes=_safe_str(education.get("notes")),
        ),
    )


def coerce_provider_result(
    raw: Any,
    *,
    service_name: str,
    confidence: float,
    max_recommendations: int = 8,
) -> AnalysisResult:
    """Normalize whatever a provider returned into an ``AnalysisResult``.

    Pillars are clamped to their caps and the overall score is recomputed as
    their sum; missing fields fall back to defaults. Only a payload that is not
    a mapping at all (after JSON extraction for strings) is rejected.
    """
    if isinstance(raw, AnalysisResult):
        raw = raw.model_dump()
    elif isinstance(raw, str):
        raw = parse_json_payload(raw)
    if not isinstance(raw, Mapping):
        raise MalformedProviderResult(f"Provider returned {type(raw).__name__}, expected a mapping")

    pillars = coerce_pillars(raw)
    return AnalysisResult(
        overall_score=pillars.total(),
        confidence=max(0.0, min(1.0, confidence)),
        pillars=pillars,
        recommendations=_safe_str_list(raw.get("recommendations"), max_items=max_recommendations),
        errors=_safe_str_list(raw.get("errors"), max_items=8),
        analysis_method="ai",
        service_name=service_name,
    )
