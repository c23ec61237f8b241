from __future__ import annotations

import time
from collections import deque
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from data_designer_ai_detector.api import DetectResponse
from data_designer_ai_detector.core import Verdict, round_half_up

MAX_HISTORY = 3

_VERDICT_LABELS = {
    "ai": "Likely AI-generated",
    "human": "Likely Human",
}


def percentage_label(score: float) -> str:
    return f"{round_half_up(score)}% AI-likelihood"


def verdict_label(verdict: str) -> str:
    """Display label for either verdict vocabulary (``AI`` or ``ai``)."""
    return _VERDICT_LABELS.get(verdict.lower(), "Uncertain / Mixed")


class HistoryEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    timestamp: int
    text: str
    score: int = Field(ge=0, le=100)
    percentage: int = Field(ge=0, le=100)
    verdict: Verdict
    verdict_legacy: str = Field(alias="verdictLegacy")
    highlights: list[str] = Field(default_factory=list)
    details: dict[str, float] = Field(default_factory=dict)

    @property
    def summary(self) -> str:
        return f"{percentage_label(self.percentage)} - {verdict_label(self.verdict.value)}"


_ENTRIES = TypeAdapter(list[HistoryEntry])


class DetectionHistory:
    """Most recent results, newest first, capped at ``max_entries``."""

    def __init__(self, entries: list[HistoryEntry] | None = None, max_entries: int = MAX_HISTORY) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._entries: deque[HistoryEntry] = deque((entries or [])[:max_entries], maxlen=max_entries)

    def record(self, text: str, response: DetectResponse, timestamp: int | None = None) -> HistoryEntry:
        entry = HistoryEntry(
            timestamp=timestamp if timestamp is not None else int(time.time() * 1000),
            text=text,
            score=response.score,
            percentage=response.percentage,
            verdict=response.verdict,
            verdict_legacy=response.verdict_legacy,
            highlights=response.highlights,
            details=response.details,
        )
        self._entries.appendleft(entry)
        return entry

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def to_json(self) -> str:
        return _ENTRIES.dump_json(self.entries(), by_alias=True).decode()

    @classmethod
    def from_json(cls, data: str | bytes, max_entries: int = MAX_HISTORY) -> DetectionHistory:
        return cls(_ENTRIES.validate_json(data), max_entries=max_entries)
