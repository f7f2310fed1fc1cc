"""Re-scoring of a base analysis against a structured job descriptor.

Tailoring only ever adds to the base pillars, so a tailored result never scores
below the untailored one for the same resume.
"""

from __future__ import annotations

import math

from resume_match.core.config.scoring import get_scoring_value
from resume_match.schemas.analysis import (
    AnalysisResult,
    ExperienceMatch,
    JobSpecificMatch,
    RequirementsMatch,
    SkillsMatch,
)
from resume_match.schemas.provider import JobDescriptor
from resume_match.scoring import extraction as rules
from resume_match.scoring.pillars import clamp_pillar, reconcile
from resume_match.taxonomy import TaxonomyProvider, get_default_taxonomy_provider


def _percentage(matched: int, total: int) -> int:
    if total <= 0:
        return 0
    return max(0, min(100, rules.round_half_up(matched / total * 100)))


def _resume_has_skill(lowered_resume: str, skill: str, taxonomy: TaxonomyProvider) -> bool:
    normalized, canonical = taxonomy.normalize_skill(skill)
    if rules.contains_term(lowered_resume, normalized):
        return True
    if canonical and canonical != normalized and rules.contains_term(lowered_resume, canonical):
        return True
    return False


def match_skills(resume_text: str, descriptor: JobDescriptor, taxonomy: TaxonomyProvider) -> SkillsMatch:
    lowered = rules.normalize_text(resume_text)
    required = descriptor.required_skills
    matched = [skill for skill in required if _resume_has_skill(lowered, skill, taxonomy)]
    return SkillsMatch(
        required=len(required),
        matched=len(matched),
        matched_skills=matched,
        missing_skills=[skill for skill in required if skill not in matched],
        match_percentage=_percentage(len(matched), len(required)),
    )


def match_experience(resume_text: str, descriptor: JobDescriptor) -> ExperienceMatch:
    required = descriptor.experience_years or 0
    candidate = rules.stated_or_dated_years(
        resume_text,
        cap=int(get_scoring_value("experience.max_estimated_years", 15)),
    )
    return ExperienceMatch(
        required=required,
        candidate=candidate,
        meets_requirement=candidate >= required,
        gap=max(0, required - candidate),
    )


def requirement_is_met(lowered_resume: str, requirement: str, *, ratio: float = 0.4) -> bool | None:
    """Whether enough of a requirement's meaningful words appear; ``None`` when it has none."""
    words = rules.requirement_words(requirement)
    if not words:
        return None
    found = sum(1 for word in words if rules.contains_term(lowered_resume, word))
    return found >= math.ceil(len(words) * ratio)


def match_requirements(resume_text: str, descriptor: JobDescriptor) -> RequirementsMatch:
    lowered = rules.normalize_text(resume_text)
    ratio = float(get_scoring_value("tailoring.requirement_word_match_ratio", 0.4))
    matched: list[str] = []
    missing: list[str] = []
    for requirement in descriptor.requirements:
        met = requirement_is_met(lowered, requirement, ratio=ratio)
        if met is None:
            continue
        (matched if met else missing).append(requirement)
    total = len(matched) + len(missing)
    return RequirementsMatch(
        total=total,
        matched=len(matched),
        matched_requirements=matched,
        missing_requirements=missing,
        match_percentage=_percentage(len(matched), total),
    )


def analyze_job_match(
    resume_text: str,
    descriptor: JobDescriptor,
    taxonomy: TaxonomyProvider | None = None,
) -> JobSpecificMatch:
    taxonomy = taxonomy or get_default_taxonomy_provider()
    match = JobSpecificMatch(
        target_role=descriptor.title,
        target_company=descriptor.company,
        skills_match=match_skills(resume_text, descriptor, taxonomy),
        experience_match=match_experience(resume_text, descriptor),
        requirements_match=match_requirements(resume_text, descriptor),
    )
    match.bonuses = tailoring_bonuses(match)
    return match


def tailoring_bonuses(match: JobSpecificMatch) -> dict[str, int]:
    skills_pct = match.skills_match.match_percentage
    if skills_pct >= 80:
        skills_bonus = 5
    elif skills_pct >= 60:
        skills_bonus = 3
    elif skills_pct >= 40:
        skills_bonus = 1
    else:
        skills_bonus = 0

    if match.experience_match.meets_requirement:
        experience_bonus = 3
    elif match.experience_match.gap <= 1:
        experience_bonus = 1
    else:
        experience_bonus = 0

    requirements_pct = match.requirements_match.match_percentage
    if requirements_pct >= 70:
        requirements_bonus = 4
    elif requirements_pct >= 50:
        requirements_bonus = 2
    else:
        requirements_bonus = 0

    return {
        "core_skills": skills_bonus,
        "relevant_experience": experience_bonus,
        "tools_methodologies": requirements_bonus,
    }


def job_specific_recommendations(match: JobSpecificMatch) -> list[str]:
    items: list[str] = []
    if match.skills_match.missing_skills:
        items.append(f"Add these required skills: {', '.join(match.skills_match.missing_skills[:3])}")
    if not match.experience_match.meets_requirement:
        items.append(
            f"Highlight relevant experience to address the {match.experience_match.gap}-year experience gap"
        )
    if match.requirements_match.total and match.requirements_match.match_percentage < 60:
        missing = match.requirements_match.missing_requirements[:2]
        items.append(f"Address these key requirements: {'; '.join(missing)}")
    return items[: int(get_scoring_value("recommendations.job_specific_max_items", 3))]


def tailor_result(
    base: AnalysisResult,
    resume_text: str,
    descriptor: JobDescriptor,
    *,
    taxonomy: TaxonomyProvider | None = None,
) -> AnalysisResult:
    """Apply descriptor bonuses on top of a rule-based ``base`` result and return a new result."""
    match = analyze_job_match(resume_text, descriptor, taxonomy)

    tailored = base.model_copy(deep=True)
    for name, bonus in match.bonuses.items():
        pillar = getattr(tailored.pillars, name)
        pillar.score = clamp_pillar(name, pillar.score + bonus)
    tailored.pillars = reconcile(
        tailored.pillars,
        floor=int(get_scoring_value("overall.floor", 20)),
        ceiling=int(get_scoring_value("overall.ceiling", 95)),
    )
    tailored.overall_score = tailored.pillars.total()

    step = float(get_scoring_value("confidence.tailoring_step", 0.1))
    cap = float(get_scoring_value("confidence.rule_based_cap", 0.9))
    tailored.confidence = round(min(cap, base.confidence + step), 2)

    tailored.recommendations = rules.dedupe(
        job_specific_recommendations(match) + base.recommendations,
        int(get_scoring_value("recommendations.max_items", 8)),
    )
    tailored.job_specific = match
    return tailored
