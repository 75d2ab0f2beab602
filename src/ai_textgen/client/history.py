"""Caller-owned history of generated texts (newest first)."""
from __future__ import annotations
import itertools
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator

from ai_textgen.common.schema import GenerationSettings


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class HistoryEntry:
    id: int
    prompt: str
    result: str
    content_type: str
    settings: GenerationSettings
    timestamp: str = field(default_factory=_utc_now_iso)

    @property
    def preview(self) -> str:
        return self.prompt if len(self.prompt) <= 50 else self.prompt[:50] + "..."


class GenerationHistory:
    """Past results of one user session.

    The history is plain state handed to whoever needs it; the job client
    never touches it.
    """

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []
        self._ids = itertools.count(1)

    def add(
        self,
        prompt: str,
        result: str,
        content_type: str = "general",
        settings: GenerationSettings | None = None,
    ) -> HistoryEntry:
        entry = HistoryEntry(
            id=next(self._ids),
            prompt=prompt,
            result=result,
            content_type=content_type,
            settings=settings or GenerationSettings(),
        )
        self._entries.insert(0, entry)
        return entry

    def get(self, entry_id: int) -> HistoryEntry | None:
        for e in self._entries:
            if e.id == entry_id:
                return e
        return None

    def delete(self, entry_id: int) -> bool:
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.id != entry_id]
        return len(self._entries) != before

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
