"""Prompt templating helpers."""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

from ai_textgen.common.errors import ValidationError
from ai_textgen.common.schema import GenerationSettings

DEFAULT_TEMPLATE_PATH = "configs/prompt_template.txt"


@dataclass(frozen=True)
class ContentType:
    name: str
    description: str
    examples: tuple[str, ...]


CONTENT_TYPES: dict[str, ContentType] = {
    "general": ContentType(
        "General Text",
        "Generate any kind of text from your prompt",
        (
            "Write a summary about artificial intelligence",
            "Describe a tropical landscape",
            "Explain how photosynthesis works",
        ),
    ),
    "email": ContentType(
        "Email",
        "Professional or personal emails",
        (
            "Job application email for a developer position",
            "Follow-up email after a business meeting",
            "Thank-you email to a customer",
        ),
    ),
    "article": ContentType(
        "Article",
        "Well-structured articles on any topic",
        (
            "Article on the benefits of exercise",
            "Technical article about web development",
            "Opinion piece on climate change",
        ),
    ),
    "story": ContentType(
        "Story",
        "Creative and entertaining stories",
        (
            "Short science fiction story",
            "Children's tale about friendship",
            "Mystery story in an old house",
        ),
    ),
    "social": ContentType(
        "Social Media",
        "Content optimized for social networks",
        (
            "LinkedIn post about leadership",
            "Viral tweet about technology",
            "Instagram caption for a travel photo",
        ),
    ),
    "script": ContentType(
        "Script",
        "Scripts for videos, podcasts or presentations",
        (
            "Script for a 5 minute tutorial video",
            "Intro for a technology podcast",
            "Presentation on business innovation",
        ),
    ),
}


def get_content_type(key: str) -> ContentType:
    try:
        return CONTENT_TYPES[key]
    except KeyError:
        raise ValidationError(
            f"unknown content type {key!r}; expected one of {', '.join(CONTENT_TYPES)}"
        ) from None


def load_template(path: str = DEFAULT_TEMPLATE_PATH) -> str:
    """
    Load a prompt template file.

    Args:
        path: Path to template.
    """
    return Path(path).read_text(encoding="utf-8")


def render_prompt(template: str, user_input: str, **fields: object) -> str:
    """
    Render user input (and any extra fields) into the template.

    Args:
        template: Template content containing {{input}} and optional {{field}} tags.
        user_input: Input string.

    Returns:
        Rendered prompt.
    """
    out = template
    for key, value in fields.items():
        out = out.replace("{{" + key + "}}", str(value))
    return out.replace("{{input}}", user_input)


def build_prompt(
    template: str,
    user_input: str,
    content_type: str = "general",
    settings: GenerationSettings | None = None,
) -> str:
    """Compose the final prompt for a content type and tone."""
    if not user_input.strip():
        raise ValidationError("empty prompt: please enter a prompt")
    settings = settings or GenerationSettings()
    settings.validate()
    ctype = get_content_type(content_type)
    return render_prompt(
        template,
        user_input.strip(),
        content_type=ctype.name,
        description=ctype.description,
        tone=settings.tone,
        length=settings.length,
    ).strip()
