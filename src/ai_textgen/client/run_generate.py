"""Command-line text generation through the proxy.

Composes the prompt from a content type and tone, submits the job, polls it
to completion and prints the generated text.
"""
from __future__ import annotations
import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml

from ai_textgen.client.jobs import DEFAULT_URL, JobClient, output_text
from ai_textgen.common.errors import JobError
from ai_textgen.common.logging_setup import setup_logging
from ai_textgen.common.schema import TONES, GenerationSettings, PollPolicy
from ai_textgen.common.templates import CONTENT_TYPES, DEFAULT_TEMPLATE_PATH, build_prompt, load_template

LOGGER = logging.getLogger("ai_textgen.client.run")

DEFAULT_CFG_PATH = "configs/client.yaml"


def load_cfg(path: str) -> dict[str, Any]:
    """Read the client YAML config; a missing file means defaults."""
    if not Path(path).exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


async def generate(
    text: str,
    content_type: str = "general",
    settings: GenerationSettings | None = None,
    top_p: float = 0.9,
    cfg: dict[str, Any] | None = None,
    base_url: str | None = None,
    cancel: asyncio.Event | None = None,
) -> str:
    """
    Generate text via the proxy.

    Args:
        text: User prompt.
        content_type: Key of CONTENT_TYPES.
        settings: Tone, length and creativity.
        cfg: Parsed client config (base_url, template_path, poll).
        base_url: Proxy URL; wins over $AI_TEXTGEN_URL and the config.
    """
    cfg = cfg or {}
    settings = settings or GenerationSettings()
    template = load_template(cfg.get("template_path", DEFAULT_TEMPLATE_PATH))
    prompt = build_prompt(template, text, content_type, settings)
    request = settings.to_request(prompt, top_p=top_p)

    base_url = base_url or os.getenv("AI_TEXTGEN_URL") or cfg.get("base_url") or DEFAULT_URL
    policy = PollPolicy.from_mapping(cfg.get("poll"))
    async with JobClient(base_url, policy=policy) as client:
        out = await client.generate(request, cancel=cancel)
    return output_text(out)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Generate text through the AI text generator proxy")
    ap.add_argument("--prompt", required=True, help="What to generate")
    ap.add_argument("--type", dest="content_type", default="general", choices=sorted(CONTENT_TYPES))
    ap.add_argument("--tone", default="Professional", choices=TONES)
    ap.add_argument("--length", type=int, default=500, help="Approximate length in words")
    ap.add_argument("--creativity", type=float, default=0.7)
    ap.add_argument("--top-p", type=float, default=0.9)
    ap.add_argument("--url", default=None, help="Proxy base URL (overrides config)")
    ap.add_argument("--cfg", default=DEFAULT_CFG_PATH, help="Config path")
    return ap


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)

    settings = GenerationSettings(tone=args.tone, length=args.length, creativity=args.creativity)

    try:
        cfg = load_cfg(args.cfg)
        text = asyncio.run(generate(args.prompt, args.content_type, settings, args.top_p, cfg, args.url))
    except OSError as e:
        LOGGER.error("Could not read config or template: %s", e)
        return 1
    except JobError as e:
        LOGGER.error("Generation failed: %s", e)
        return 1
    print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
