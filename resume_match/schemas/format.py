from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

CompatibilityLevel = Literal["Excellent", "Good", "Fair", "Poor"]


class FormatCheck(BaseModel):
    category: str
    score: int = Field(ge=0, le=100)
    issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)


class FormatReport(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    issues: list[str] = Field(default_factory=list, max_length=8)
    recommendations: list[str] = Field(default_factory=list, max_length=8)
    strengths: list[str] = Field(default_factory=list, max_length=5)
    details: dict[str, FormatCheck] = Field(default_factory=dict)


class CompatibilitySummary(BaseModel):
    level: CompatibilityLevel
    score: int
    description: str
    top_issues: list[str] = Field(default_factory=list)
    top_recommendations: list[str] = Field(default_factory=list)
    key_strengths: list[str] = Field(default_factory=list)
