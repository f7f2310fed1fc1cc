from __future__ import annotations

import re
from typing import Callable

from resume_match.core.config.scoring import get_scoring_value
from resume_match.schemas.format import CompatibilitySummary, FormatCheck, FormatReport
from resume_match.scoring.extraction import (
    EMAIL_RE,
    LINKEDIN_RE,
    PHONE_RE,
    WEBSITE_RE,
    dedupe,
    round_half_up,
    word_count,
)

_SECTION_HEADER_PATTERNS = (
    re.compile(r"^\s*(?:experience|work experience|employment|professional experience)\s*:?\s*$", re.I | re.M),
    re.compile(r"^\s*(?:education|academic background|qualifications)\s*:?\s*$", re.I | re.M),
    re.compile(r"^\s*(?:skills|technical skills|core competencies|expertise)\s*:?\s*$", re.I | re.M),
    re.compile(r"^\s*(?:summary|professional summary|profile|objective)\s*:?\s*$", re.I | re.M),
    re.compile(r"^\s*(?:contact|contact information|personal details)\s*:?\s*$", re.I | re.M),
)
_BASIC_SECTION_WORDS = ("experience", "education", "skills", "summary", "contact")

_BULLET_PATTERNS = (
    re.compile(r"^\s*[•\-\*\+]\s+", re.M),
    re.compile(r"^\s*\d+\.\s+", re.M),
    re.compile(r"^\s*[a-zA-Z]\.\s+", re.M),
)

_DECORATIVE_CHARS_RE = re.compile(r"[★☆●○■□▪▫]")
_SMART_QUOTES_RE = re.compile(r"[“”‘’]")
_UNUSUAL_CHAR_RE = re.compile(r"[^\w\s\-.,;:()\[\]{}'\"@#$%&+=/\\|`~]", re.ASCII)

_MONTH_YEAR_RE = re.compile(
    r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+(?:19|20)?\d{2}\b", re.I
)
_YEAR_ONLY_RE = re.compile(r"\b(?:19|20)\d{2}\b")
_SLASH_DATE_RE = re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b")
_DASH_DATE_RE = re.compile(r"\b\d{1,2}-\d{1,2}-\d{2,4}\b")

_SKILLS_SECTION_RE = re.compile(r"skills|technical skills|core competencies", re.I)
_ACTION_VERBS = ("managed", "led", "developed", "created", "implemented", "designed", "improved", "achieved")
_QUANTIFIER_RE = re.compile(r"\d+%|\$\d+|increased|decreased|improved|reduced", re.I)

_PIPE_ROW_RE = re.compile(r"\|.*\|")
_COLUMN_GAP_RE = re.compile(r"\t{2,}| {4,}")


def _is_contact_pipe_line(line: str) -> bool:
    """Header lines such as ``email | phone | linkedin`` use pipes as separators, not table borders."""
    stripped = line.strip()
    if stripped.count("|") < 2:
        return False
    segments = [segment.strip() for segment in stripped.split("|") if segment.strip()]
    if len(segments) < 2:
        return False
    lowered = stripped.lower()
    marker_hits = 0
    if EMAIL_RE.search(stripped):
        marker_hits += 1
    if PHONE_RE.search(stripped):
        marker_hits += 1
    if any(token in lowered for token in ("linkedin.com", "github.com", "http://", "https://", "www.")):
        marker_hits += 1
    return marker_hits >= 2 and len(stripped.split()) <= 26


def _clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


class FormatAnalyzer:
    """Structural ATS-compatibility checks over plain resume text.

    Each check is independent and returns a ``FormatCheck``; ``analyze`` averages
    the ten sub-scores and unions their findings. Only the resume is inspected.
    """

    def __init__(self, *, words_per_page: int | None = None) -> None:
        self._words_per_page = int(words_per_page or get_scoring_value("format.words_per_page", 275))
        self._max_issues = int(get_scoring_value("format.max_issues", 8))
        self._max_recommendations = int(get_scoring_value("format.max_recommendations", 8))
        self._max_strengths = int(get_scoring_value("format.max_strengths", 5))

    @property
    def checks(self) -> dict[str, Callable[[str], FormatCheck]]:
        return {
            "file_format": self.check_file_format,
            "section_headers": self.check_section_headers,
            "bullet_points": self.check_bullet_points,
            "font_formatting": self.check_font_formatting,
            "contact_info": self.check_contact_info,
            "date_formats": self.check_date_formats,
            "keyword_placement": self.check_keyword_placement,
            "length": self.check_length,
            "special_characters": self.check_special_characters,
            "tables_columns": self.check_tables_columns,
        }

    def analyze(self, resume_text: str | None) -> FormatReport:
        text = resume_text or ""
        details = {name: check(text) for name, check in self.checks.items()}

        overall = _clamp_score(sum(check.score for check in details.values()) / len(details))
        issues: list[str] = []
        recommendations: list[str] = []
        strengths: list[str] = []
        for check in details.values():
            issues.extend(check.issues)
            recommendations.extend(check.recommendations)
            strengths.extend(check.strengths)

        return FormatReport(
            overall_score=overall,
            issues=dedupe(issues, self._max_issues),
            recommendations=dedupe(recommendations, self._max_recommendations),
            strengths=dedupe(strengths, self._max_strengths),
            details=details,
        )

    def check_file_format(self, text: str) -> FormatCheck:
        score = 85
        issues: list[str] = []
        recommendations: list[str] = []
        if "\t" in text:
            score -= 10
            issues.append("Tab characters detected; they may cause formatting issues in ATS parsers")
            recommendations.append("Replace tabs with spaces or use consistent indentation")
        if len(text) < 500:
            score -= 15
            issues.append("Resume content appears very short; the file may not have been parsed completely")
            recommendations.append("Make sure the resume is a text-based PDF or DOCX, not a scanned image")
        return FormatCheck(
            category="File Format",
            score=_clamp_score(score),
            issues=issues,
            recommendations=recommendations,
            strengths=["Plain text content extracted successfully"] if not issues else [],
        )

    def check_section_headers(self, text: str) -> FormatCheck:
        score = 0
        found: list[str] = []
        for pattern in _SECTION_HEADER_PATTERNS:
            match = pattern.search(text)
            if match:
                score += 20
                found.append(match.group(0).strip().rstrip(":").strip().lower())

        lowered = text.lower()
        for word in _BASIC_SECTION_WORDS:
            if word in lowered and not any(word in header for header in found):
                score += 10

        score = min(100, score)
        issues: list[str] = []
        recommendations: list[str] = []
        strengths: list[str] = []
        if len(found) >= 3:
            strengths.append(f"Clear section headers found: {', '.join(found)}")
        else:
            issues.append("Missing standard section headers")
            recommendations.append("Use standard headers such as EXPERIENCE, EDUCATION, SKILLS and SUMMARY")
        if len(found) < 2:
            score = max(20, score)
            issues.append("ATS systems may not be able to identify resume sections")

        return FormatCheck(
            category="Section Headers",
            score=_clamp_score(score),
            issues=issues,
            recommendations=recommendations,
            strengths=strengths,
        )

    def check_bullet_points(self, text: str) -> FormatCheck:
        bullets = sum(len(pattern.findall(text)) for pattern in _BULLET_PATTERNS)
        issues: list[str] = []
        recommendations: list[str] = []
        strengths: list[str] = []
        if bullets > 0:
            score = min(100, bullets * 10)
            strengths.append(f"Uses bullet points ({bullets} found)")
        else:
            score = 30
            issues.append("No bullet points detected")
            recommendations.append("Use bullet points to list achievements and responsibilities")

        long_paragraphs = [block for block in text.split("\n\n") if len(block.strip()) > 100]
        if len(long_paragraphs) > 3 and bullets < 5:
            score -= 20
            issues.append("Long paragraphs found; ATS systems prefer bullet points")
            recommendations.append("Break long paragraphs into concise bullet points")

        return FormatCheck(
            category="Bullet Points",
            score=_clamp_score(score),
            issues=issues,
            recommendations=recommendations,
            strengths=strengths,
        )

    def check_font_formatting(self, text: str) -> FormatCheck:
        score = 75
        issues: list[str] = []
        recommendations: list[str] = []
        strengths: list[str] = []
        caps_lines = [
            line
            for line in text.splitlines()
            if len(line.strip()) > 10 and line.upper() == line and any(ch.isalpha() for ch in line)
        ]
        if len(caps_lines) > 5:
            score -= 15
            issues.append("Excessive use of ALL CAPS text")
            recommendations.append("Use ALL CAPS sparingly, only for section headers")
        elif caps_lines:
            strengths.append("Appropriate use of capitalization for headers")

        if _DECORATIVE_CHARS_RE.search(text):
            score -= 10
            issues.append("Decorative symbols detected that may not parse correctly")
            recommendations.append("Replace decorative symbols with standard bullet points")

        strengths.append("Text format is ATS-compatible")
        return FormatCheck(
            category="Font & Formatting",
            score=_clamp_score(score),
            issues=issues,
            recommendations=recommendations,
            strengths=strengths,
        )

    def check_contact_info(self, text: str) -> FormatCheck:
        score = 0
        issues: list[str] = []
        recommendations: list[str] = []
        found: list[str] = []
        if EMAIL_RE.search(text):
            score += 30
            found.append("email")
        else:
            issues.append("Email address not found or not in standard format")
            recommendations.append("Include a professional email address")
        if PHONE_RE.search(text):
            score += 25
            found.append("phone")
        else:
            issues.append("Phone number not found or not in standard format")
            recommendations.append("Include a phone number in a standard format")
        if LINKEDIN_RE.search(text):
            score += 20
            found.append("LinkedIn")
        if WEBSITE_RE.search(text):
            score += 15
            found.append("website")

        if not found:
            score = 10
        strengths = [f"Contact information complete: {', '.join(found)}"] if len(found) >= 2 else []
        return FormatCheck(
            category="Contact Information",
            score=_clamp_score(score),
            issues=issues,
            recommendations=recommendations,
            strengths=strengths,
        )

    def check_date_formats(self, text: str) -> FormatCheck:
        standard = len(_YEAR_ONLY_RE.findall(text)) + len(_MONTH_YEAR_RE.findall(text))
        other = len(_SLASH_DATE_RE.findall(text)) + len(_DASH_DATE_RE.findall(text))
        total = standard + other
        if total == 0:
            return FormatCheck(
                category="Date Formats",
                score=40,
                issues=["No dates found in resume"],
                recommendations=["Include employment and education dates"],
            )

        ratio = standard / total
        issues: list[str] = []
        recommendations: list[str] = []
        strengths: list[str] = []
        if ratio > 0.8:
            strengths.append("Consistent, standard date formatting")
        else:
            issues.append("Inconsistent date formats detected")
            recommendations.append('Use a consistent date format such as "Jan 2020" or "2020"')
        return FormatCheck(
            category="Date Formats",
            score=_clamp_score(min(100, 70 + ratio * 30)),
            issues=issues,
            recommendations=recommendations,
            strengths=strengths,
        )

    def check_keyword_placement(self, text: str) -> FormatCheck:
        score = 60
        issues: list[str] = []
        recommendations: list[str] = []
        strengths: list[str] = []
        if _SKILLS_SECTION_RE.search(text):
            score += 20
            strengths.append("Dedicated skills section found")
        else:
            issues.append("No dedicated skills section found")
            recommendations.append("Add a dedicated skills section with relevant keywords")

        lowered = text.lower()
        verbs = sum(1 for verb in _ACTION_VERBS if verb in lowered)
        if verbs >= 3:
            score += 15
            strengths.append("Strong action verbs used")
        else:
            recommendations.append("Use more action verbs such as managed, led and developed")

        if len(_QUANTIFIER_RE.findall(text)) >= 3:
            score += 15
            strengths.append("Quantifiable achievements included")
        else:
            recommendations.append("Add quantifiable achievements with numbers and percentages")

        return FormatCheck(
            category="Keyword Placement",
            score=_clamp_score(score),
            issues=issues,
            recommendations=recommendations,
            strengths=strengths,
        )

    def check_length(self, text: str) -> FormatCheck:
        words = word_count(text)
        pages = words / self._words_per_page
        issues: list[str] = []
        recommendations: list[str] = []
        strengths: list[str] = []
        if 1 <= pages <= 2.5:
            score = 100
            strengths.append(f"Appropriate length (about {pages:.1f} pages)")
        elif pages < 1:
            score = 60
            issues.append("Resume may be too short")
            recommendations.append("Expand the resume with more detail about experience and achievements")
        else:
            score = 70
            issues.append("Resume may be too long")
            recommendations.append("Condense the resume to 1-2 pages for better ATS compatibility")

        if words < 200:
            score = min(score, 50)
            issues.append("Very brief resume content")

        return FormatCheck(
            category="Length",
            score=_clamp_score(score),
            issues=issues,
            recommendations=recommendations,
            strengths=strengths,
        )

    def check_special_characters(self, text: str) -> FormatCheck:
        score = 90
        issues: list[str] = []
        recommendations: list[str] = []
        strengths: list[str] = []
        unusual = sorted(set(_UNUSUAL_CHAR_RE.findall(text)))
        if unusual:
            score -= min(30, len(unusual) * 5)
            issues.append(f"Special characters detected: {''.join(unusual[:10])}")
            recommendations.append("Replace special characters with standard ASCII characters")
        else:
            strengths.append("No problematic special characters")

        if _SMART_QUOTES_RE.search(text):
            score -= 10
            issues.append("Smart quotes detected")
            recommendations.append("Use straight quotes instead of smart quotes")

        return FormatCheck(
            category="Special Characters",
            score=_clamp_score(score),
            issues=issues,
            recommendations=recommendations,
            strengths=strengths,
        )

    def check_tables_columns(self, text: str) -> FormatCheck:
        score = 85
        issues: list[str] = []
        recommendations: list[str] = []
        table_lines = [
            line
            for line in text.splitlines()
            if _PIPE_ROW_RE.search(line) and not _is_contact_pipe_line(line)
        ]
        if table_lines:
            score -= 25
            issues.append("Table formatting detected")
            recommendations.append("Avoid tables; use a simple single-column layout")
        if len(_COLUMN_GAP_RE.findall(text)) > 3:
            score -= 15
            issues.append("Possible multi-column layout detected")
            recommendations.append("Use a single-column layout for better ATS parsing")

        strengths = ["Simple, ATS-friendly layout"] if score >= 80 else []
        return FormatCheck(
            category="Tables & Columns",
            score=_clamp_score(score),
            issues=issues,
            recommendations=recommendations,
            strengths=strengths,
        )


def compatibility_summary(report: FormatReport) -> CompatibilitySummary:
    score = report.overall_score
    if score >= 80:
        level, description = "Excellent", "The resume is highly compatible with ATS systems"
    elif score >= 65:
        level, description = "Good", "The resume should parse well in most ATS systems"
    elif score >= 50:
        level, description = "Fair", "The resume may have some parsing issues in ATS systems"
    else:
        level, description = "Poor", "The resume is likely to have significant ATS parsing issues"
    return CompatibilitySummary(
        level=level,
        score=score,
        description=description,
        top_issues=report.issues[:3],
        top_recommendations=report.recommendations[:3],
        key_strengths=report.strengths[:3],
    )
