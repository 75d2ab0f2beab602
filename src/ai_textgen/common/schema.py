"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from ai_textgen.common.errors import ValidationError

TONES = (
    "Professional",
    "Casual",
    "Formal",
    "Friendly",
    "Technical",
    "Persuasive",
    "Informative",
    "Creative",
)

MIN_LENGTH_WORDS = 100
MAX_LENGTH_WORDS = 2000


def _check_unit_interval(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not 0.0 <= value <= 1.0:
        raise ValidationError(f"{name} must be within [0, 1], got {value}")


@dataclass(frozen=True)
class GenerationRequest:
    """Prompt plus sampling parameters for one generation job."""
    prompt: str
    temperature: float = 0.7
    max_tokens: int = 500
    top_p: float = 0.9

    def validate(self) -> None:
        if not isinstance(self.prompt, str) or not self.prompt.strip():
            raise ValidationError("empty prompt: please enter a prompt")
        _check_unit_interval("temperature", self.temperature)
        _check_unit_interval("top_p", self.top_p)
        if isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int) or self.max_tokens <= 0:
            raise ValidationError(f"max_tokens must be a positive integer, got {self.max_tokens!r}")

    def to_input(self) -> dict[str, Any]:
        """Provider input payload sent to the job-creation endpoint."""
        return {
            "prompt": self.prompt,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
        }


class JobStatus(str, Enum):
    STARTING = "starting"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"


TERMINAL_FAILURES = frozenset({JobStatus.FAILED.value, JobStatus.CANCELED.value})


class Job(BaseModel):
    """Read-only projection of a remote job, refreshed on every poll."""
    id: str
    status: str = JobStatus.STARTING.value
    output: Any = None
    error: Any = None

    # upstream predictions carry many more fields (urls, metrics, logs...)
    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def succeeded(self) -> bool:
        return self.status == JobStatus.SUCCEEDED.value

    @property
    def failed(self) -> bool:
        return self.status in TERMINAL_FAILURES

    @property
    def is_terminal(self) -> bool:
        return self.succeeded or self.failed


@dataclass(frozen=True)
class PollPolicy:
    """Attempt budget and cadence for the status poll.

    The defaults reproduce the reference cadence: 20 attempts, a fixed
    1 second wait, no backoff.
    """
    max_attempts: int = 20
    interval_s: float = 1.0
    backoff_factor: float = 1.0
    max_interval_s: float | None = None
    request_timeout_s: float | None = 30.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValidationError("max_attempts must be at least 1")
        if self.interval_s < 0:
            raise ValidationError("interval_s must not be negative")
        if self.backoff_factor < 1.0:
            raise ValidationError("backoff_factor must be >= 1.0")

    def delay(self, attempt: int) -> float:
        """Wait before the attempt following `attempt` (0-based)."""
        d = self.interval_s * (self.backoff_factor ** attempt)
        if self.max_interval_s is not None:
            d = min(d, self.max_interval_s)
        return d

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> "PollPolicy":
        """Build a policy from a config block; values may arrive as strings."""
        data = data or {}
        casts = {
            "max_attempts": int,
            "interval_s": float,
            "backoff_factor": float,
            "max_interval_s": float,
            "request_timeout_s": float,
        }
        known: dict[str, Any] = {}
        for key, cast in casts.items():
            if key not in data:
                continue
            value = data[key]
            if value is None and key in ("max_interval_s", "request_timeout_s"):
                known[key] = None
                continue
            try:
                known[key] = cast(value)
            except (TypeError, ValueError):
                raise ValidationError(f"poll.{key} must be a number, got {value!r}") from None
        return cls(**known)


@dataclass(frozen=True)
class GenerationSettings:
    """User-facing knobs: tone, approximate length in words, creativity."""
    tone: str = "Professional"
    length: int = 500
    creativity: float = 0.7

    def validate(self) -> None:
        if self.tone not in TONES:
            raise ValidationError(f"unknown tone {self.tone!r}; expected one of {', '.join(TONES)}")
        if not MIN_LENGTH_WORDS <= self.length <= MAX_LENGTH_WORDS:
            raise ValidationError(
                f"length must be within [{MIN_LENGTH_WORDS}, {MAX_LENGTH_WORDS}] words, got {self.length}"
            )
        _check_unit_interval("creativity", self.creativity)

    def to_request(self, prompt: str, top_p: float = 0.9) -> GenerationRequest:
        self.validate()
        # roughly 4 tokens per 3 words of English text
        max_tokens = (self.length * 4 + 2) // 3
        return GenerationRequest(
            prompt=prompt,
            temperature=float(self.creativity),
            max_tokens=max_tokens,
            top_p=top_p,
        )
