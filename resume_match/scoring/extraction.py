"""Pure text-extraction rules used by the scoring engine and tailoring pass.

Every rule takes plain text (any case) and returns plain values; none of them
touch shared state, so each is safe to call and test in isolation.
"""

from __future__ import annotations

import math
import re
from functools import lru_cache
from typing import Iterable

TOKEN_RE = re.compile(r"[A-Za-z][A-Za-z0-9+#./-]{1,}")
EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b")
LINKEDIN_RE = re.compile(r"linkedin\.com/in/[A-Za-z0-9-]+", re.IGNORECASE)
WEBSITE_RE = re.compile(r"https?://\S+")
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
DATE_HINT_RE = re.compile(
    r"\b(?:19|20)\d{2}\b|\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\b|\b\d{1,2}/\d{1,2}/\d{2,4}\b",
    re.IGNORECASE,
)
BULLET_LINE_RE = re.compile(r"^\s*(?:[•\-\*]|\d+\.)", re.MULTILINE)

EXPERIENCE_YEARS_PATTERNS = (
    re.compile(r"(\d{1,2})\+?\s*(?:years?|yrs?)\s*(?:of\s*)?(?:experience|exp)\b", re.IGNORECASE),
    re.compile(r"experience[:\s]*(?:of\s*)?(\d{1,2})\+?\s*(?:years?|yrs?)\b", re.IGNORECASE),
)
BARE_YEARS_RE = re.compile(r"(\d{1,2})\+?\s*(?:years?|yrs?)\b", re.IGNORECASE)
POSITION_MENTION_RE = re.compile(r"\b(?:position|role|job|work)\b", re.IGNORECASE)
COMPANY_MENTION_RE = re.compile(r"\b(?:company|corporation|inc|llc|ltd)\b", re.IGNORECASE)
SENIOR_HINT_RE = re.compile(r"\b(?:senior|lead)\b|\bsr\.", re.IGNORECASE)
JUNIOR_HINT_RE = re.compile(r"\b(?:junior|entry)\b|\bjr\.", re.IGNORECASE)

MAX_REASONABLE_YEARS = 50

# Skill discovery is plain substring containment; a term listed here is not
# counted when its only occurrences sit inside one of the longer terms.
SUPERSTRING_EXCLUSIONS: dict[str, tuple[str, ...]] = {
    "java": ("javascript",),
}

# Highest tier first; the first pattern that matches wins.
EDUCATION_LADDER: tuple[tuple[str, str, re.Pattern[str]], ...] = (
    (
        "doctorate",
        "Doctoral degree (PhD)",
        re.compile(r"(?<![a-z])(?:ph\.?\s?d|doctorate|doctoral)(?![a-z])"),
    ),
    (
        "masters",
        "Master's degree",
        re.compile(
            r"(?<![a-z])(?:master(?:'s|s)?\s+(?:degree|of|in)|mba|m\.?sc|m\.s\.|m\.a\.|m\.eng)(?![a-z])"
        ),
    ),
    (
        "bachelors",
        "Bachelor's degree",
        re.compile(r"(?<![a-z])(?:bachelor(?:'s|s)?|b\.?sc|b\.s\.|b\.a\.|b\.?tech|b\.e\.)(?![a-z])"),
    ),
    (
        "associate",
        "Associate degree",
        re.compile(r"(?<![a-z])(?:associate(?:'s|s)?\s+(?:degree|of|in)|a\.a\.|a\.s\.)(?![a-z])"),
    ),
    (
        "certificate",
        "Certificate/Diploma",
        re.compile(r"(?<![a-z])(?:diploma|certificate)(?![a-z])"),
    ),
    (
        "some-college",
        "Some college education",
        re.compile(r"(?<![a-z])(?:university|college|coursework)(?![a-z])"),
    ),
)

EDUCATION_TIER_POINTS: dict[str, int] = {
    "doctorate": 10,
    "masters": 8,
    "bachelors": 6,
    "associate": 4,
    "certificate": 3,
    "some-college": 2,
    "none": 0,
}

STOPWORDS = {
    "the", "and", "for", "with", "that", "this", "your", "you", "from", "into", "our", "are",
    "will", "must", "have", "has", "had", "can", "could", "would", "should", "been", "being",
    "was", "were", "about", "above", "after", "before", "between", "during", "under", "over",
    "through", "while", "their", "they", "them", "these", "those", "which", "what", "where",
    "when", "other", "such", "than", "then", "also", "very", "just", "only", "well", "able",
    "including", "within", "across", "strong", "work", "working", "team", "role", "years",
    "experience", "requirements", "responsibilities", "preferred", "required", "plus", "ability",
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_text(text: str) -> str:
    return (text or "").replace("’", "'").lower()


@lru_cache(maxsize=1024)
def term_pattern(term: str) -> re.Pattern[str]:
    """Case-insensitive pattern matching ``term`` only where it is not glued to other letters/digits."""
    return re.compile(r"(?<![a-z0-9])" + re.escape(term.lower()) + r"(?![a-z0-9])", re.IGNORECASE)


def contains_term(text: str, term: str) -> bool:
    if not term:
        return False
    return bool(term_pattern(term).search(text or ""))


def count_term(text: str, term: str) -> int:
    if not term:
        return 0
    return len(term_pattern(term).findall(text or ""))


def find_terms(text: str, vocabulary: Iterable[str]) -> list[str]:
    """Vocabulary terms present in ``text``, in vocabulary order."""
    lowered = normalize_text(text)
    if not lowered.strip():
        return []
    return [term for term in vocabulary if contains_term(lowered, term)]


def _contains_outside_exclusions(lowered: str, term: str) -> bool:
    for longer in SUPERSTRING_EXCLUSIONS.get(term, ()):
        lowered = lowered.replace(longer, " ")
    return term in lowered


def discover_terms(text: str, vocabulary: Iterable[str]) -> list[str]:
    """Vocabulary terms contained anywhere in ``text`` ("sql" inside "postgresql" counts), in vocabulary order."""
    lowered = normalize_text(text)
    if not lowered.strip():
        return []
    return [term for term in vocabulary if term and _contains_outside_exclusions(lowered, term.lower())]


def terms_overlap(left: str, right: str) -> bool:
    """True when either term contains the other ("node" vs "node.js", "sql" vs "mysql")."""
    a, b = left.lower().strip(), right.lower().strip()
    if not a or not b:
        return False
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if longer in SUPERSTRING_EXCLUSIONS.get(shorter, ()):
        return False
    return shorter in longer


def match_terms(candidate_terms: Iterable[str], required_terms: Iterable[str]) -> list[str]:
    """Required terms covered by at least one candidate term, in required order."""
    candidates = list(candidate_terms)
    return [
        required
        for required in required_terms
        if any(terms_overlap(candidate, required) for candidate in candidates)
    ]


def extract_years_of_experience(text: str) -> int:
    """Largest "N years (of) experience" figure in ``text``; bare "N years" is used only as a fallback. 0 when absent."""
    lowered = normalize_text(text)
    found: list[int] = []
    for pattern in EXPERIENCE_YEARS_PATTERNS:
        found.extend(int(match) for match in pattern.findall(lowered))
    if not found:
        found = [int(match) for match in BARE_YEARS_RE.findall(lowered)]
    found = [value for value in found if 0 < value <= MAX_REASONABLE_YEARS]
    return max(found) if found else 0


def default_required_years(job_text: str, *, senior: int = 5, junior: int = 1, default: int = 3) -> int:
    if SENIOR_HINT_RE.search(job_text or ""):
        return senior
    if JUNIOR_HINT_RE.search(job_text or ""):
        return junior
    return default


def estimate_candidate_years(resume_text: str, *, cap: int = 15) -> int:
    """Rough tenure estimate from position and company mentions when no explicit figure exists."""
    positions = len(POSITION_MENTION_RE.findall(resume_text or ""))
    companies = len(COMPANY_MENTION_RE.findall(resume_text or ""))
    return round_half_up(min(positions * 1.5, companies * 2, cap))


def candidate_years(resume_text: str, *, cap: int = 15) -> int:
    explicit = extract_years_of_experience(resume_text)
    if explicit > 0:
        return explicit
    return estimate_candidate_years(resume_text, cap=cap)


def year_span_years(text: str, *, cap: int = 15) -> int:
    """Newest minus oldest 19xx/20xx year in ``text``, capped; 0 with fewer than two years."""
    years = [int(year) for year in YEAR_RE.findall(text or "")]
    if len(years) < 2:
        return 0
    return min(cap, max(years) - min(years))


def stated_or_dated_years(resume_text: str, *, cap: int = 15) -> int:
    """Explicit years of experience, falling back to the span of dates in the resume."""
    explicit = extract_years_of_experience(resume_text)
    if explicit > 0:
        return explicit
    return year_span_years(resume_text, cap=cap)


def required_years(job_text: str, *, senior: int = 5, junior: int = 1, default: int = 3) -> int:
    explicit = extract_years_of_experience(job_text)
    if explicit > 0:
        return explicit
    return default_required_years(job_text, senior=senior, junior=junior, default=default)


def detect_education_level(resume_text: str) -> tuple[str, str]:
    """Highest education tier mentioned, as ``(level, degree label)``."""
    lowered = normalize_text(resume_text)
    for level, label, pattern in EDUCATION_LADDER:
        if pattern.search(lowered):
            return level, label
    return "none", "Not specified"


def keyword_tokens(text: str) -> list[str]:
    seen: dict[str, None] = {}
    for token in TOKEN_RE.findall(text or ""):
        cleaned = token.lower().strip(".,;:/-")
        if len(cleaned) <= 3 or cleaned in STOPWORDS:
            continue
        seen.setdefault(cleaned, None)
    return list(seen)


def requirement_words(requirement: str) -> list[str]:
    words = [word.strip(".,;:()[]!?\"'") for word in normalize_text(requirement).split()]
    return [word for word in words if len(word) > 3]


def dedupe(items: Iterable[str], limit: int) -> list[str]:
    """Stripped, non-empty items in first-seen order, at most ``limit`` of them."""
    seen: dict[str, None] = {}
    for item in items:
        cleaned = (item or "").strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)[:limit]


def word_count(text: str) -> int:
    return len((text or "").split())


def has_bullets(text: str) -> bool:
    return bool(BULLET_LINE_RE.search(text or ""))


def has_email(text: str) -> bool:
    return bool(EMAIL_RE.search(text or ""))


def has_phone(text: str) -> bool:
    return bool(PHONE_RE.search(text or ""))


def has_dates(text: str) -> bool:
    return bool(DATE_HINT_RE.search(text or ""))
