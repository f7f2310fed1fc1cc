from .analysis import (
    PILLAR_CAPS,
    PILLAR_ORDER,
    AnalysisMethod,
    AnalysisResult,
    CoreSkillsPillar,
    EducationPillar,
    ExperienceMatch,
    ExperiencePillar,
    JobSpecificMatch,
    Pillars,
    RequirementsMatch,
    ServiceStatus,
    SkillsMatch,
    ToolsPillar,
)
from .format import CompatibilitySummary, FormatCheck, FormatReport
from .provider import JobDescriptor, RateLimits

__all__ = [
    "PILLAR_CAPS",
    "PILLAR_ORDER",
    "AnalysisMethod",
    "AnalysisResult",
    "CoreSkillsPillar",
    "ExperiencePillar",
    "ToolsPillar",
    "EducationPillar",
    "Pillars",
    "SkillsMatch",
    "ExperienceMatch",
    "RequirementsMatch",
    "JobSpecificMatch",
    "ServiceStatus",
    "FormatCheck",
    "FormatReport",
    "CompatibilitySummary",
    "JobDescriptor",
    "RateLimits",
]
