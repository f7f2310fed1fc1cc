"""Last-resort content heuristic.

Only string length and simple structure are inspected and no configuration is
read, so the function cannot fail for any input, including ``None``.
"""

from __future__ import annotations

import re
from typing import Any

from resume_match.schemas.analysis import AnalysisResult, Pillars
from resume_match.scoring.pillars import distribute

BASIC_SERVICE_NAME = "Content Analyzer"
BASIC_CONFIDENCE = 0.4
BASIC_FLOOR = 20
BASIC_CEILING = 75

_SECTION_HINT_RE = re.compile(r"experience|education|skills", re.IGNORECASE)

BASIC_RECOMMENDATIONS = (
    "Use a more detailed resume analysis when AI services are available",
    "Ensure your resume has clear section headers",
    "Add specific skills and achievements",
)


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def basic_content_score(resume_text: Any) -> int:
    text = _as_text(resume_text)
    words = len(text.split())
    score = 30
    if words > 100:
        score += 10
    if words > 300:
        score += 10
    if _SECTION_HINT_RE.search(text):
        score += 15
    if len(text) > 500:
        score += 10
    return max(BASIC_FLOOR, min(BASIC_CEILING, score))


def basic_analysis(resume_text: Any, job_text: Any = None) -> AnalysisResult:
    score = basic_content_score(resume_text)
    pillars = Pillars()
    for name, value in distribute(pillars.scores(), score).items():
        getattr(pillars, name).score = value

    errors: list[str] = []
    if not _as_text(resume_text).strip():
        errors.append("Resume text is empty or unreadable")
    if not _as_text(job_text).strip():
        errors.append("Job description is empty or unreadable")

    return AnalysisResult(
        overall_score=pillars.total(),
        confidence=BASIC_CONFIDENCE,
        pillars=pillars,
        recommendations=list(BASIC_RECOMMENDATIONS),
        errors=errors,
        analysis_method="content-analysis",
        service_name=BASIC_SERVICE_NAME,
    )
