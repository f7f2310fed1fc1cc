from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class RateLimits(BaseModel):
    per_minute: int | None = Field(default=None, ge=1)
    per_hour: int | None = Field(default=None, ge=1)
    per_day: int | None = Field(default=None, ge=1)


class JobDescriptor(BaseModel):
    title: str | None = None
    company: str | None = None
    required_skills: list[str] = Field(default_factory=list)
    experience_years: int | None = Field(default=None, ge=0, le=60)
    requirements: list[str] = Field(default_factory=list)
    location: str | None = None

    @field_validator("required_skills", "requirements")
    @classmethod
    def _strip_blank_items(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item and item.strip()]

    def as_text(self) -> str:
        chunks: list[str] = []
        if self.title:
            chunks.append(self.title)
        if self.company:
            chunks.append(f"Company: {self.company}")
        if self.required_skills:
            chunks.append("Required skills: " + ", ".join(self.required_skills))
        if self.experience_years:
            chunks.append(f"{self.experience_years}+ years experience")
        chunks.extend(self.requirements)
        return "\n".join(chunks)
