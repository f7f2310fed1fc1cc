from dataclasses import dataclass
from typing import Any, Literal, Mapping, Protocol, Sequence

from resume_match.schemas.analysis import AnalysisResult
from resume_match.schemas.provider import JobDescriptor, RateLimits


Role = Literal["system", "user", "assistant"]

ProviderPayload = AnalysisResult | Mapping[str, Any] | str


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


class AnalysisProvider(Protocol):
    name: str
    priority: int
    rate_limits: RateLimits

    async def is_available(self) -> bool: ...

    async def analyze(self, resume_text: str, job_text: str) -> ProviderPayload: ...

    async def analyze_with_context(
        self, resume_text: str, job_text: str, job_descriptor: JobDescriptor
    ) -> ProviderPayload: ...


def to_payload(messages: Sequence[ChatMessage]) -> list[dict[str, str]]:
    return [{"role": m.role, "content": m.content} for m in messages]
