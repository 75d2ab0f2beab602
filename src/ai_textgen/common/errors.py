"""Error taxonomy for job submission and polling.

Every failure reaches the caller through one of these exceptions; the UI (or
CLI) decides how to present it.
"""
from __future__ import annotations
from typing import Any


class JobError(Exception):
    """Base class for all generation job failures."""


class ValidationError(JobError, ValueError):
    """Request parameters rejected locally, before any network call."""


class SubmissionError(JobError):
    """Job creation failed (non-2xx, transport error or malformed reply)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StatusFetchError(JobError):
    """Fetching the job status failed; the poll is aborted."""

    def __init__(self, job_id: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"{message} (job={job_id})")
        self.job_id = job_id
        self.message = message
        self.status_code = status_code


class GenerationFailedError(JobError):
    """The remote service reported a terminal failure for the job."""

    def __init__(self, job_id: str, detail: Any = None, status: str = "failed") -> None:
        msg = f"generation {status} (job={job_id})"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
        self.job_id = job_id
        self.detail = detail
        self.status = status


class GenerationTimeoutError(JobError, TimeoutError):
    """Attempt budget exhausted without a terminal state."""

    def __init__(self, job_id: str, attempts: int) -> None:
        super().__init__(
            f"operation exceeded the allowed wait time (job={job_id}, attempts={attempts})"
        )
        self.job_id = job_id
        self.attempts = attempts


class JobCancelledError(JobError):
    """The caller cancelled the poll before a terminal state was seen."""

    def __init__(self, job_id: str, attempts: int) -> None:
        super().__init__(f"polling cancelled (job={job_id}, attempts={attempts})")
        self.job_id = job_id
        self.attempts = attempts
