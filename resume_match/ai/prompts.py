from resume_match.ai.types import ChatMessage
from resume_match.schemas.provider import JobDescriptor

_SCHEMA = (
    '{"pillars": {'
    '"core_skills": {"score": int 0-40, "matched": [string], "required_count": int}, '
    '"relevant_experience": {"score": int 0-30, "candidate_years": int, "jd_years": int, "evidence": [string]}, '
    '"tools_methodologies": {"score": int 0-20, "matched": [string]}, '
    '"education_credentials": {"score": int 0-10, "degree": string, "notes": string}}, '
    '"recommendations": [string]}'
)

_SYSTEM = (
    "You are an experienced technical recruiter scoring how well a resume matches a job description. "
    "Score four pillars: core skills (max 40), relevant experience (max 30), "
    "tools and methodologies (max 20), education and credentials (max 10). "
    "Only use evidence present in the resume text. Do not invent skills, employers or degrees. "
    "Give at most 8 short, actionable recommendations. "
    f"Return JSON only, matching this schema: {_SCHEMA}"
)


def _clip(text: str, max_chars: int) -> str:
    text = (text or "").strip()
    if len(text) > max_chars:
        return text[:max_chars] + "..."
    return text


def build_analysis_messages(
    resume_text: str,
    job_text: str,
    *,
    max_chars: int = 12000,
) -> list[ChatMessage]:
    user = (
        f"RESUME:\n{_clip(resume_text, max_chars)}\n\n"
        f"JOB DESCRIPTION:\n{_clip(job_text, max_chars)}\n\n"
        "JSON:"
    )
    return [ChatMessage(role="system", content=_SYSTEM), ChatMessage(role="user", content=user)]


def describe_job(descriptor: JobDescriptor) -> str:
    lines: list[str] = []
    if descriptor.title:
        lines.append(f"Title: {descriptor.title}")
    if descriptor.company:
        lines.append(f"Company: {descriptor.company}")
    if descriptor.location:
        lines.append(f"Location: {descriptor.location}")
    if descriptor.required_skills:
        lines.append("Required skills: " + ", ".join(descriptor.required_skills))
    if descriptor.experience_years is not None:
        lines.append(f"Required experience: {descriptor.experience_years} years")
    if descriptor.requirements:
        lines.append("Requirements:")
        lines.extend(f"- {item}" for item in descriptor.requirements)
    return "\n".join(lines)


def build_contextual_messages(
    resume_text: str,
    job_text: str,
    descriptor: JobDescriptor,
    *,
    max_chars: int = 12000,
) -> list[ChatMessage]:
    system = (
        _SYSTEM
        + " A structured job profile is provided; weigh its required skills, experience and "
        "requirements above anything else, and start the recommendations with the gaps against it."
    )
    user = (
        f"RESUME:\n{_clip(resume_text, max_chars)}\n\n"
        f"JOB PROFILE:\n{describe_job(descriptor)}\n\n"
        f"JOB DESCRIPTION:\n{_clip(job_text, max_chars)}\n\n"
        "JSON:"
    )
    return [ChatMessage(role="system", content=system), ChatMessage(role="user", content=user)]
