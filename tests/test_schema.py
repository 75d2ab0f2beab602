from __future__ import annotations

import dataclasses

import pytest

from ai_textgen.common.errors import ValidationError
from ai_textgen.common.schema import GenerationRequest, GenerationSettings, Job, PollPolicy


def test_request_is_immutable() -> None:
    req = GenerationRequest(prompt="hello")
    with pytest.raises(dataclasses.FrozenInstanceError):
        req.prompt = "changed"  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"temperature": 1.5},
        {"temperature": -0.1},
        {"top_p": 2},
        {"max_tokens": 0},
        {"max_tokens": 12.5},
        {"max_tokens": True},
    ],
)
def test_request_rejects_out_of_range_parameters(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        GenerationRequest(prompt="hello", **kwargs).validate()


def test_job_ignores_unknown_upstream_fields() -> None:
    job = Job.model_validate({"id": "abc123", "status": "processing", "urls": {"get": "x"}, "logs": ""})
    assert job.id == "abc123"
    assert not job.is_terminal


@pytest.mark.parametrize(
    "status, terminal, succeeded",
    [
        ("starting", False, False),
        ("processing", False, False),
        ("queued", False, False),
        ("succeeded", True, True),
        ("failed", True, False),
        ("canceled", True, False),
    ],
)
def test_job_terminal_states(status: str, terminal: bool, succeeded: bool) -> None:
    job = Job(id="j", status=status)
    assert job.is_terminal is terminal
    assert job.succeeded is succeeded


def test_policy_from_mapping_ignores_unknown_keys() -> None:
    p = PollPolicy.from_mapping({"max_attempts": 5, "interval_s": 0.5, "colour": "blue"})
    assert p.max_attempts == 5
    assert p.interval_s == 0.5
    assert PollPolicy.from_mapping(None) == PollPolicy()


def test_policy_rejects_zero_attempts() -> None:
    with pytest.raises(ValidationError):
        PollPolicy(max_attempts=0)


def test_settings_map_to_sampling_parameters() -> None:
    req = GenerationSettings(tone="Casual", length=300, creativity=0.4).to_request("write")
    assert req.temperature == 0.4
    assert req.max_tokens == 400
    req.validate()


def test_settings_reject_unknown_tone_and_length() -> None:
    with pytest.raises(ValidationError):
        GenerationSettings(tone="Sarcastic").validate()
    with pytest.raises(ValidationError):
        GenerationSettings(length=50).validate()


def test_policy_from_mapping_coerces_quoted_numbers() -> None:
    p = PollPolicy.from_mapping({"max_attempts": "20", "interval_s": "0.5", "request_timeout_s": None})
    assert p.max_attempts == 20
    assert p.interval_s == 0.5
    assert p.request_timeout_s is None


def test_policy_from_mapping_rejects_non_numbers() -> None:
    with pytest.raises(ValidationError):
        PollPolicy.from_mapping({"max_attempts": "twenty"})
