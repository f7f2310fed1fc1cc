from __future__ import annotations

import re

from pydantic import BaseModel, Field

from resume_match.scoring import extraction as rules
from resume_match.taxonomy import TaxonomyProvider

_HEADER_LINE_PATTERNS = (
    re.compile(r"^[A-Z ]{3,}\s*$", re.M),
    re.compile(r"^[A-Za-z ]+:\s*$", re.M),
    re.compile(r"^[ \t]*[A-Z][a-z ]+[ \t]*$", re.M),
)
_SECTION_WORDS = ("experience", "education", "skills", "summary", "objective", "work", "employment")


class SkillsAnalysis(BaseModel):
    resume_skills: list[str] = Field(default_factory=list)
    required_skills: list[str] = Field(default_factory=list)
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    match_ratio: float = Field(default=0.0, ge=0.0, le=1.0)


class ToolsAnalysis(BaseModel):
    resume_tools: list[str] = Field(default_factory=list)
    required_tools: list[str] = Field(default_factory=list)
    matched_tools: list[str] = Field(default_factory=list)


class ExperienceAnalysis(BaseModel):
    candidate_years: int = 0
    required_years: int = 0
    explicit_years: bool = False
    action_verbs: list[str] = Field(default_factory=list)
    quantifiers: list[str] = Field(default_factory=list)
    leadership_terms: list[str] = Field(default_factory=list)
    quality: int = Field(default=0, ge=0, le=5)
    evidence: list[str] = Field(default_factory=list)


class EducationAnalysis(BaseModel):
    level: str = "none"
    degree: str = "Not specified"
    certifications: list[str] = Field(default_factory=list)
    relevant_fields: list[str] = Field(default_factory=list)


class FormattingAnalysis(BaseModel):
    sections: list[str] = Field(default_factory=list)
    has_bullets: bool = False
    has_headers: bool = False
    word_count: int = 0
    has_email: bool = False
    has_phone: bool = False
    has_dates: bool = False
    ats_compatibility: float = Field(default=0.0, ge=0.0, le=1.0)


class KeywordAnalysis(BaseModel):
    job_keywords: int = 0
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    density: float = Field(default=0.0, ge=0.0, le=1.0)
    optimization: int = Field(default=0, ge=0, le=100)


class IndustryFit(BaseModel):
    industry: str = "general"
    alignment: float = Field(default=0.0, ge=0.0, le=1.0)
    matched_keywords: list[str] = Field(default_factory=list)


def find_skills(text: str, taxonomy: TaxonomyProvider) -> list[str]:
    """Taxonomy skills present in ``text``, with known aliases folded into their canonical term."""
    vocabulary = taxonomy.skills()
    found = rules.discover_terms(text, vocabulary)
    lowered = rules.normalize_text(text)
    for alias, canonical in taxonomy.synonyms().items():
        if canonical in vocabulary and canonical not in found and rules.contains_term(lowered, alias):
            found.append(canonical)
    return found


def analyze_skills(resume_text: str, job_text: str, taxonomy: TaxonomyProvider) -> SkillsAnalysis:
    resume_skills = find_skills(resume_text, taxonomy)
    required_skills = find_skills(job_text, taxonomy)
    matched = rules.match_terms(resume_skills, required_skills)
    if required_skills:
        ratio = len(matched) / len(required_skills)
    else:
        ratio = 0.5 if resume_skills else 0.0
    return SkillsAnalysis(
        resume_skills=resume_skills,
        required_skills=required_skills,
        matched_skills=matched,
        missing_skills=[skill for skill in required_skills if skill not in matched],
        match_ratio=ratio,
    )


def analyze_tools(resume_text: str, job_text: str, taxonomy: TaxonomyProvider) -> ToolsAnalysis:
    resume_tools = rules.discover_terms(resume_text, taxonomy.tools())
    required_tools = rules.discover_terms(job_text, taxonomy.tools())
    return ToolsAnalysis(
        resume_tools=resume_tools,
        required_tools=required_tools,
        matched_tools=rules.match_terms(resume_tools, required_tools),
    )


def experience_quality(action_verbs: int, quantifiers: int, leadership: int) -> int:
    score = min(2.0, action_verbs / 2) + min(2.0, quantifiers / 2) + min(1.0, leadership / 3)
    return rules.round_half_up(score)


def analyze_experience(
    resume_text: str,
    job_text: str,
    taxonomy: TaxonomyProvider,
    *,
    senior_years: int = 5,
    junior_years: int = 1,
    default_years: int = 3,
    max_estimated_years: int = 15,
) -> ExperienceAnalysis:
    explicit = rules.extract_years_of_experience(resume_text)
    candidate = explicit or rules.estimate_candidate_years(resume_text, cap=max_estimated_years)
    required = rules.required_years(job_text, senior=senior_years, junior=junior_years, default=default_years)

    lowered = rules.normalize_text(resume_text)
    verbs = rules.find_terms(lowered, taxonomy.terms("action_verbs"))
    # Quantifiers include bare symbols such as "%", so plain containment is used here.
    quantifiers = [term for term in taxonomy.terms("quantifiers") if term in lowered]
    leadership = rules.find_terms(lowered, taxonomy.terms("leadership_terms"))

    evidence: list[str] = []
    if candidate > 0:
        evidence.append(f"{candidate} years of experience {'stated' if explicit else 'estimated'}")
    if verbs:
        evidence.append(f"Action verbs: {', '.join(verbs[:5])}")
    if quantifiers:
        evidence.append(f"Quantified impact: {', '.join(quantifiers[:5])}")
    if leadership:
        evidence.append(f"Leadership signals: {', '.join(leadership[:5])}")

    return ExperienceAnalysis(
        candidate_years=candidate,
        required_years=required,
        explicit_years=bool(explicit),
        action_verbs=verbs,
        quantifiers=quantifiers,
        leadership_terms=leadership,
        quality=experience_quality(len(verbs), len(quantifiers), len(leadership)),
        evidence=evidence,
    )


def analyze_education(resume_text: str, job_text: str, taxonomy: TaxonomyProvider) -> EducationAnalysis:
    level, degree = rules.detect_education_level(resume_text)
    lowered = rules.normalize_text(resume_text)
    job_fields = rules.find_terms(job_text, taxonomy.fields_of_study())
    return EducationAnalysis(
        level=level,
        degree=degree,
        certifications=rules.find_terms(resume_text, taxonomy.certifications()),
        relevant_fields=[field for field in job_fields if rules.contains_term(lowered, field)],
    )


def ats_compatibility(formatting: FormattingAnalysis) -> float:
    score = 0.0
    if len(formatting.sections) >= 3:
        score += 0.3
    if formatting.has_bullets:
        score += 0.2
    if formatting.has_headers:
        score += 0.2
    if 200 <= formatting.word_count <= 800:
        score += 0.2
    if formatting.has_email and formatting.has_phone:
        score += 0.1
    return round(min(1.0, score), 2)


def analyze_formatting(resume_text: str) -> FormattingAnalysis:
    text = resume_text or ""
    formatting = FormattingAnalysis(
        sections=rules.find_terms(text, _SECTION_WORDS),
        has_bullets=rules.has_bullets(text),
        has_headers=any(pattern.search(text) for pattern in _HEADER_LINE_PATTERNS),
        word_count=rules.word_count(text),
        has_email=rules.has_email(text),
        has_phone=rules.has_phone(text),
        has_dates=rules.has_dates(text),
    )
    formatting.ats_compatibility = ats_compatibility(formatting)
    return formatting


def analyze_keywords(resume_text: str, job_text: str) -> KeywordAnalysis:
    keywords = rules.keyword_tokens(job_text)
    if not keywords:
        return KeywordAnalysis()
    lowered = rules.normalize_text(resume_text)
    matched = [keyword for keyword in keywords if rules.contains_term(lowered, keyword)]
    density = len(matched) / len(keywords)
    return KeywordAnalysis(
        job_keywords=len(keywords),
        matched_keywords=matched,
        missing_keywords=[keyword for keyword in keywords if keyword not in matched][:10],
        density=round(density, 4),
        optimization=rules.round_half_up(density * 100),
    )


def analyze_industry_fit(resume_text: str, job_text: str, taxonomy: TaxonomyProvider) -> IndustryFit:
    lowered_job = rules.normalize_text(job_text)
    scores = {
        industry: sum(rules.count_term(lowered_job, keyword) for keyword in keywords)
        for industry, keywords in taxonomy.industries().items()
    }
    if not scores or max(scores.values()) <= 0:
        return IndustryFit()

    industry = max(scores, key=lambda name: scores[name])
    keywords = taxonomy.industries()[industry]
    matched = rules.find_terms(resume_text, keywords)
    return IndustryFit(
        industry=industry,
        alignment=round(len(matched) / len(keywords), 4) if keywords else 0.0,
        matched_keywords=matched,
    )
