from __future__ import annotations

from ai_textgen.client.history import GenerationHistory
from ai_textgen.common.schema import GenerationSettings


def test_history_is_newest_first() -> None:
    h = GenerationHistory()
    first = h.add("first prompt", "first result")
    second = h.add("second prompt", "second result", "email", GenerationSettings(tone="Formal"))
    assert [e.id for e in h] == [second.id, first.id]
    assert len(h) == 2
    assert h.get(second.id).settings.tone == "Formal"


def test_history_delete() -> None:
    h = GenerationHistory()
    a = h.add("a", "ra")
    b = h.add("b", "rb")
    assert h.delete(a.id) is True
    assert h.delete(a.id) is False
    assert [e.id for e in h] == [b.id]
    assert h.get(a.id) is None


def test_history_preview_truncates_long_prompts() -> None:
    h = GenerationHistory()
    e = h.add("x" * 80, "r")
    assert e.preview == "x" * 50 + "..."
    assert h.add("short", "r").preview == "short"
