from __future__ import annotations

import logging
from typing import Any

from resume_match.ai.errors import ScoringEngineFailed
from resume_match.core.config.scoring import get_scoring_value
from resume_match.schemas.analysis import (
    AnalysisResult,
    CoreSkillsPillar,
    EducationPillar,
    ExperiencePillar,
    Pillars,
    ToolsPillar,
)
from resume_match.schemas.format import FormatReport
from resume_match.scoring import signals
from resume_match.scoring.extraction import EDUCATION_TIER_POINTS, dedupe, round_half_up
from resume_match.scoring.format_analyzer import FormatAnalyzer
from resume_match.scoring.pillars import clamp_pillar, reconcile
from resume_match.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

logger = logging.getLogger(__name__)

RULE_BASED_SERVICE_NAME = "Rule-based Analyzer"


def core_skills_score(skills: signals.SkillsAnalysis) -> int:
    score = 10 if skills.resume_skills else 0
    score += round_half_up(skills.match_ratio * 30)
    return clamp_pillar("core_skills", score)


def experience_score(experience: signals.ExperienceAnalysis) -> int:
    candidate, required = experience.candidate_years, experience.required_years
    score = 10 if candidate > 0 else 0
    if candidate >= required:
        score += 20
    else:
        score += round_half_up(candidate / required * 20)
    return clamp_pillar("relevant_experience", score)


def tools_score(tools: signals.ToolsAnalysis) -> int:
    score = 8 if tools.resume_tools else 0
    score += min(12, len(tools.matched_tools) * 3)
    return clamp_pillar("tools_methodologies", score)


def education_score(education: signals.EducationAnalysis) -> int:
    score = EDUCATION_TIER_POINTS.get(education.level, 0)
    if education.relevant_fields:
        score += 2
    score += min(3, len(education.certifications))
    return clamp_pillar("education_credentials", score)


def _education_notes(education: signals.EducationAnalysis) -> str:
    notes: list[str] = []
    if education.relevant_fields:
        notes.append(f"Relevant field: {', '.join(education.relevant_fields[:3])}")
    if education.certifications:
        notes.append(f"Certifications: {', '.join(education.certifications[:3])}")
    return "; ".join(notes)


class ScoringEngine:
    """Deterministic rule-based analysis of a resume against a job description."""

    def __init__(
        self,
        taxonomy: TaxonomyProvider | None = None,
        format_analyzer: FormatAnalyzer | None = None,
    ) -> None:
        self._taxonomy = taxonomy or get_default_taxonomy_provider()
        self._format_analyzer = format_analyzer or FormatAnalyzer()

    @property
    def taxonomy(self) -> TaxonomyProvider:
        return self._taxonomy

    def analyze(self, resume_text: str, job_text: str) -> AnalysisResult:
        if not isinstance(resume_text, str) or not isinstance(job_text, str):
            raise ScoringEngineFailed(
                f"Expected text inputs, got {type(resume_text).__name__} and {type(job_text).__name__}",
                code="malformed_input",
            )

        skills = signals.analyze_skills(resume_text, job_text, self._taxonomy)
        tools = signals.analyze_tools(resume_text, job_text, self._taxonomy)
        experience = signals.analyze_experience(
            resume_text,
            job_text,
            self._taxonomy,
            senior_years=int(get_scoring_value("experience.senior_required_years", 5)),
            junior_years=int(get_scoring_value("experience.junior_required_years", 1)),
            default_years=int(get_scoring_value("experience.default_required_years", 3)),
            max_estimated_years=int(get_scoring_value("experience.max_estimated_years", 15)),
        )
        education = signals.analyze_education(resume_text, job_text, self._taxonomy)
        formatting = signals.analyze_formatting(resume_text)
        keywords = signals.analyze_keywords(resume_text, job_text)
        industry = signals.analyze_industry_fit(resume_text, job_text, self._taxonomy)
        format_report = self._format_analyzer.analyze(resume_text)

        pillars = Pillars(
            core_skills=CoreSkillsPillar(
                score=core_skills_score(skills),
                matched=skills.matched_skills,
                required_count=len(skills.required_skills),
            ),
            relevant_experience=ExperiencePillar(
                score=experience_score(experience),
                candidate_years=experience.candidate_years,
                jd_years=experience.required_years,
                evidence=experience.evidence,
            ),
            tools_methodologies=ToolsPillar(score=tools_score(tools), matched=tools.matched_tools),
            education_credentials=EducationPillar(
                score=education_score(education),
                degree=education.degree,
                notes=_education_notes(education),
            ),
        )
        raw_scores = pillars.scores()
        raw_total = pillars.total()
        pillars = reconcile(
            pillars,
            floor=int(get_scoring_value("overall.floor", 20)),
            ceiling=int(get_scoring_value("overall.ceiling", 95)),
        )
        if pillars.total() != raw_total:
            logger.debug("scoring_overall_clamped raw=%s clamped=%s", raw_total, pillars.total())

        confidence = self.confidence(
            skills=skills,
            experience=experience,
            formatting=formatting,
            industry=industry,
            format_report=format_report,
        )
        recommendations = self.recommendations(
            skills=skills,
            tools=tools,
            experience=experience,
            education=education,
            formatting=formatting,
            keywords=keywords,
            industry=industry,
            format_report=format_report,
        )

        details: dict[str, Any] = {
            "skills": skills.model_dump(),
            "tools": tools.model_dump(),
            "experience": experience.model_dump(),
            "education": education.model_dump(),
            "formatting": formatting.model_dump(),
            "keywords": keywords.model_dump(),
            "industry_fit": industry.model_dump(),
            "format_report": format_report.model_dump(),
            "raw_pillars": raw_scores,
            "raw_total": raw_total,
        }
        return AnalysisResult(
            overall_score=pillars.total(),
            confidence=confidence,
            pillars=pillars,
            recommendations=recommendations,
            analysis_method="rule-based",
            service_name=RULE_BASED_SERVICE_NAME,
            analysis_details=details,
        )

    def confidence(
        self,
        *,
        skills: signals.SkillsAnalysis,
        experience: signals.ExperienceAnalysis,
        formatting: signals.FormattingAnalysis,
        industry: signals.IndustryFit,
        format_report: FormatReport,
    ) -> float:
        conditions = (
            formatting.ats_compatibility > float(get_scoring_value("confidence.bonus.format_compatibility", 0.7)),
            industry.alignment > float(get_scoring_value("confidence.bonus.industry_alignment", 0.5)),
            skills.match_ratio > float(get_scoring_value("confidence.bonus.skill_relevance", 0.3)),
            experience.quality > int(get_scoring_value("confidence.bonus.experience_quality", 3)),
            format_report.overall_score > int(get_scoring_value("confidence.bonus.ats_structure_score", 70)),
        )
        base = float(get_scoring_value("confidence.rule_based_base", 0.6))
        step = float(get_scoring_value("confidence.bonus_step", 0.1))
        cap = float(get_scoring_value("confidence.rule_based_cap", 0.9))
        return round(min(cap, base + step * sum(conditions)), 2)

    def recommendations(
        self,
        *,
        skills: signals.SkillsAnalysis,
        tools: signals.ToolsAnalysis,
        experience: signals.ExperienceAnalysis,
        education: signals.EducationAnalysis,
        formatting: signals.FormattingAnalysis,
        keywords: signals.KeywordAnalysis,
        industry: signals.IndustryFit,
        format_report: FormatReport,
    ) -> list[str]:
        items: list[str] = []
        if skills.missing_skills:
            items.append(f"Add {', '.join(skills.missing_skills[:3])} to better match job requirements")
        if len(skills.resume_skills) < 5:
            items.append("Include more technical skills relevant to your field")
        if tools.required_tools and not tools.matched_tools:
            items.append("Include relevant tools and methodologies from the job description")
        if experience.candidate_years < experience.required_years:
            items.append("Highlight transferable skills and relevant project experience")
        if len(experience.action_verbs) < 5:
            items.append("Use more action verbs to describe your achievements (achieved, managed, led, etc.)")
        if len(experience.quantifiers) < 3:
            items.append("Add quantifiable metrics to demonstrate impact (percentages, dollar amounts, team sizes)")
        if len(formatting.sections) < 3:
            items.append("Add clear section headers (Experience, Education, Skills, Summary)")
        if not formatting.has_bullets:
            items.append("Use bullet points to improve readability and ATS parsing")
        if formatting.word_count < 200:
            items.append("Expand your resume with more detailed descriptions of your experience")
        if keywords.job_keywords and keywords.optimization < 30:
            items.append("Include more keywords from the job description throughout your resume")
        if industry.industry != "general" and industry.alignment < 0.4:
            items.append(f"Add more {industry.industry}-specific terminology and experience")
        if education.level == "none" and not education.certifications:
            items.append("Consider adding relevant certifications or educational background")
        if format_report.overall_score < int(get_scoring_value("format.weak_score_threshold", 70)):
            items.extend(format_report.recommendations[:2])
        return dedupe(items, int(get_scoring_value("recommendations.max_items", 8)))
