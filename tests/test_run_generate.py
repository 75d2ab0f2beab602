from __future__ import annotations

import asyncio
import json
from pathlib import Path

import httpx
import pytest

import ai_textgen.client.run_generate as run_mod
from ai_textgen.client.jobs import JobClient

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_load_cfg_reads_poll_block() -> None:
    cfg = run_mod.load_cfg(str(REPO_ROOT / "configs" / "client.yaml"))
    assert cfg["poll"]["max_attempts"] == 20
    assert cfg["poll"]["interval_s"] == 1.0


def test_load_cfg_missing_file_is_empty(tmp_path: Path) -> None:
    assert run_mod.load_cfg(str(tmp_path / "nope.yaml")) == {}


def test_parser_defaults() -> None:
    args = run_mod.build_parser().parse_args(["--prompt", "hello"])
    assert args.content_type == "general"
    assert args.tone == "Professional"
    assert args.length == 500
    assert args.creativity == 0.7


def test_generate_end_to_end_with_mock_proxy(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[httpx.Request] = []
    statuses = [
        {"id": "abc123", "status": "processing"},
        {"id": "abc123", "status": "succeeded", "output": ["A vivid ", "sunset..."]},
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.method == "POST":
            return httpx.Response(201, json={"id": "abc123", "status": "starting"})
        return httpx.Response(200, json=statuses.pop(0))

    def client_factory(base_url: str, *, policy=None) -> JobClient:  # noqa: ANN001
        return JobClient(base_url, policy=policy, transport=httpx.MockTransport(handler))

    monkeypatch.setattr(run_mod, "JobClient", client_factory)
    monkeypatch.delenv("AI_TEXTGEN_URL", raising=False)
    cfg = {
        "template_path": str(REPO_ROOT / "configs" / "prompt_template.txt"),
        "poll": {"interval_s": 0.0},
    }

    text = asyncio.run(run_mod.generate("describe a sunset", "story", cfg=cfg, base_url="http://proxy.test"))
    assert text == "A vivid sunset..."
    body = json.loads(seen[0].content)
    assert "describe a sunset" in body["prompt"]
    assert body["temperature"] == 0.7
    assert str(seen[0].url) == "http://proxy.test/api/generate"


def test_main_blank_prompt_exits_nonzero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(REPO_ROOT)
    assert run_mod.main(["--prompt", "   "]) == 1


def test_main_missing_template_exits_nonzero(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    assert run_mod.main(["--prompt", "hello", "--cfg", str(tmp_path / "absent.yaml")]) == 1


def test_main_non_numeric_poll_value_exits_nonzero(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    cfg_path = tmp_path / "client.yaml"
    cfg_path.write_text('poll:\n  max_attempts: "nope"\n', encoding="utf-8")
    monkeypatch.chdir(REPO_ROOT)
    assert run_mod.main(["--prompt", "hello", "--cfg", str(cfg_path)]) == 1
