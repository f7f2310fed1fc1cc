from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

AnalysisMethod = Literal["ai", "rule-based", "content-analysis"]
PrimaryState = Literal["available", "unavailable"]

PILLAR_CAPS: dict[str, int] = {
    "core_skills": 40,
    "relevant_experience": 30,
    "tools_methodologies": 20,
    "education_credentials": 10,
}
PILLAR_ORDER: tuple[str, ...] = tuple(PILLAR_CAPS)


class CoreSkillsPillar(BaseModel):
    score: int = Field(default=0, ge=0, le=40)
    matched: list[str] = Field(default_factory=list)
    required_count: int = Field(default=0, ge=0)


class ExperiencePillar(BaseModel):
    score: int = Field(default=0, ge=0, le=30)
    candidate_years: int = Field(default=0, ge=0)
    jd_years: int = Field(default=0, ge=0)
    evidence: list[str] = Field(default_factory=list)


class ToolsPillar(BaseModel):
    score: int = Field(default=0, ge=0, le=20)
    matched: list[str] = Field(default_factory=list)


class EducationPillar(BaseModel):
    score: int = Field(default=0, ge=0, le=10)
    degree: str = "Not specified"
    notes: str = ""


class Pillars(BaseModel):
    core_skills: CoreSkillsPillar = Field(default_factory=CoreSkillsPillar)
    relevant_experience: ExperiencePillar = Field(default_factory=ExperiencePillar)
    tools_methodologies: ToolsPillar = Field(default_factory=ToolsPillar)
    education_credentials: EducationPillar = Field(default_factory=EducationPillar)

    def scores(self) -> dict[str, int]:
        return {name: getattr(self, name).score for name in PILLAR_ORDER}

    def total(self) -> int:
        return sum(self.scores().values())


class SkillsMatch(BaseModel):
    required: int = 0
    matched: int = 0
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    match_percentage: int = Field(default=0, ge=0, le=100)


class ExperienceMatch(BaseModel):
    required: int = 0
    candidate: int = 0
    meets_requirement: bool = False
    gap: int = 0


class RequirementsMatch(BaseModel):
    total: int = 0
    matched: int = 0
    matched_requirements: list[str] = Field(default_factory=list)
    missing_requirements: list[str] = Field(default_factory=list)
    match_percentage: int = Field(default=0, ge=0, le=100)


class JobSpecificMatch(BaseModel):
    target_role: str | None = None
    target_company: str | None = None
    skills_match: SkillsMatch = Field(default_factory=SkillsMatch)
    experience_match: ExperienceMatch = Field(default_factory=ExperienceMatch)
    requirements_match: RequirementsMatch = Field(default_factory=RequirementsMatch)
    bonuses: dict[str, int] = Field(default_factory=dict)


class AnalysisResult(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    confidence: float = Field(ge=0.0, le=1.0)
    pillars: Pillars = Field(default_factory=Pillars)
    recommendations: list[str] = Field(default_factory=list, max_length=8)
    errors: list[str] = Field(default_factory=list)
    analysis_method: AnalysisMethod = "rule-based"
    service_name: str = ""
    job_specific: JobSpecificMatch | None = None
    analysis_details: dict[str, Any] | None = None


class ServiceStatus(BaseModel):
    primary_state: PrimaryState = "unavailable"
    fallback_tier: AnalysisMethod = "rule-based"
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    service_name: str | None = None
