"""Async client for the generation job protocol.

Flow: submit a GenerationRequest -> receive a job id -> poll the status
endpoint until the job succeeds, fails, the attempt budget runs out, or the
caller cancels.

Endpoints (served by ai_textgen.serve.fastapi_app):
- POST /api/generate        { "prompt": "...", "temperature": ..., ... }
- GET  /api/generate/{id}
"""
from __future__ import annotations
import asyncio
import logging
from typing import Any, Awaitable, Callable

import httpx
from pydantic import ValidationError as PydanticValidationError

from ai_textgen.common.errors import (
    GenerationFailedError,
    GenerationTimeoutError,
    JobCancelledError,
    StatusFetchError,
    SubmissionError,
)
from ai_textgen.common.schema import GenerationRequest, Job, PollPolicy

LOGGER = logging.getLogger("ai_textgen.client.jobs")

DEFAULT_URL = "http://localhost:3001"
GENERATE_PATH = "/api/generate"

StatusFetcher = Callable[[str], Awaitable[Job]]


def _error_message(resp: httpx.Response, fallback: str) -> str:
    """Pull the proxy's {"error": ...} message out of a failed response."""
    try:
        data = resp.json()
    except ValueError:
        return fallback
    if isinstance(data, dict):
        msg = data.get("error") or data.get("detail")
        if msg:
            return str(msg)
    return fallback


def output_text(output: Any) -> str:
    """Normalize a job output to text; language models return token lists."""
    if output is None:
        return ""
    if isinstance(output, list):
        return "".join(str(part) for part in output)
    return str(output)


async def _wait_or_cancelled(delay: float, cancel: asyncio.Event | None) -> bool:
    """Sleep `delay` seconds; return True early if `cancel` gets set."""
    if cancel is None:
        await asyncio.sleep(delay)
        return False
    try:
        await asyncio.wait_for(cancel.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return False
    return True


async def poll_job(
    fetch_status: StatusFetcher,
    job_id: str,
    policy: PollPolicy | None = None,
    cancel: asyncio.Event | None = None,
) -> Any:
    """
    Poll a job until it reaches a terminal state.

    Args:
        fetch_status: Coroutine function returning the current Job for an id.
        job_id: Identifier returned by the submission endpoint.
        policy: Attempt budget and cadence; defaults to 20 attempts, 1s apart.
        cancel: Optional event; once set, polling stops before the next fetch.

    Returns:
        The job output exactly as reported by the service.

    Raises:
        GenerationFailedError: the job failed or was canceled upstream.
        StatusFetchError: a status fetch failed. Not retried.
        GenerationTimeoutError: no terminal state within the attempt budget.
        JobCancelledError: `cancel` was set.
    """
    policy = policy or PollPolicy()
    for attempt in range(policy.max_attempts):
        if cancel is not None and cancel.is_set():
            raise JobCancelledError(job_id, attempt)

        job = await fetch_status(job_id)
        LOGGER.debug("job %s attempt %d/%d: %s", job_id, attempt + 1, policy.max_attempts, job.status)

        if job.succeeded:
            LOGGER.info("job %s succeeded after %d attempt(s)", job_id, attempt + 1)
            return job.output
        if job.failed:
            LOGGER.warning("job %s %s: %s", job_id, job.status, job.error)
            raise GenerationFailedError(job_id, job.error, status=job.status)

        if attempt + 1 < policy.max_attempts:
            if await _wait_or_cancelled(policy.delay(attempt), cancel):
                raise JobCancelledError(job_id, attempt + 1)

    LOGGER.warning("job %s still pending after %d attempts", job_id, policy.max_attempts)
    raise GenerationTimeoutError(job_id, policy.max_attempts)


class JobClient:
    """Talks to the generation proxy over HTTP.

    Holds no per-request state; several generations may run concurrently on
    one client.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        *,
        policy: PollPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.policy = policy or PollPolicy()
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.policy.request_timeout_s,
            transport=transport,
        )

    async def __aenter__(self) -> "JobClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def submit(self, request: GenerationRequest) -> Job:
        """Validate the request and create a job; returns its initial projection."""
        request.validate()
        try:
            resp = await self._client.post(GENERATE_PATH, json=request.to_input())
        except httpx.HTTPError as e:
            LOGGER.error("job submission failed: %s", e)
            raise SubmissionError(f"could not reach generation service: {e}") from e

        if not resp.is_success:
            msg = _error_message(resp, f"generation service returned HTTP {resp.status_code}")
            LOGGER.error("job submission rejected (%s): %s", resp.status_code, msg)
            raise SubmissionError(msg, status_code=resp.status_code)

        try:
            job = Job.model_validate(resp.json())
        except (ValueError, PydanticValidationError) as e:
            LOGGER.error("malformed submission response: %s", e)
            raise SubmissionError("malformed response from generation service", resp.status_code) from e

        LOGGER.info("submitted job %s (%s)", job.id, job.status)
        return job

    async def fetch_status(self, job_id: str) -> Job:
        try:
            resp = await self._client.get(f"{GENERATE_PATH}/{job_id}")
        except httpx.HTTPError as e:
            LOGGER.error("status fetch for job %s failed: %s", job_id, e)
            raise StatusFetchError(job_id, f"could not reach generation service: {e}") from e

        if not resp.is_success:
            msg = _error_message(resp, f"status endpoint returned HTTP {resp.status_code}")
            LOGGER.error("status fetch for job %s rejected (%s): %s", job_id, resp.status_code, msg)
            raise StatusFetchError(job_id, msg, status_code=resp.status_code)

        try:
            return Job.model_validate(resp.json())
        except (ValueError, PydanticValidationError) as e:
            raise StatusFetchError(job_id, "malformed status response", resp.status_code) from e

    async def poll(self, job_id: str, cancel: asyncio.Event | None = None) -> Any:
        return await poll_job(self.fetch_status, job_id, self.policy, cancel)

    async def generate(self, request: GenerationRequest, cancel: asyncio.Event | None = None) -> Any:
        """Submit then poll; returns the job output."""
        job = await self.submit(request)
        return await self.poll(job.id, cancel)
