"""Request boundary for the detector.

Validates request bodies with pydantic before anything reaches the
scoring core, shapes the response the deployed web client expects, and applies
the configured policy when scoring fails unexpectedly.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from data_designer_ai_detector.core import Hyperparameters, Verdict, compute_score

logger = logging.getLogger(__name__)

# Response keys read by the web client for each sub-score.
DETAIL_KEYS = {
    "perplexity": "pplScore",
    "burstiness": "burstScore",
    "repetition": "repetitionScore",
    "connectors": "connectorScore",
    "uniformity": "uniformScore",
    "avg_word_length": "avgWordLenScore",
    "complexity": "complexityScore",
    "uncommon": "uncommonScore",
}


def is_blank(text: str) -> bool:
    """True when ``text`` holds nothing but whitespace or byte-order marks."""
    return not text.replace("\ufeff", "").strip()


class ScoringError(Exception):
    """Scoring raised unexpectedly and the fallback policy is ``error``."""

    status_code = 500


class DetectRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    text: str

    @field_validator("text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if is_blank(value):
            raise ValueError("text must not be blank")
        return value


class DetectResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    score: int = Field(ge=0, le=100)
    verdict: Verdict
    highlights: list[str] = Field(default_factory=list, max_length=5)
    details: dict[str, float] = Field(default_factory=dict)
    percentage: int = Field(ge=0, le=100)
    verdict_legacy: Literal["human", "uncertain", "ai"] = Field(alias="verdictLegacy")
    best_effort: bool = Field(default=False, alias="bestEffort")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class DetectorSettings(BaseModel):
    """Boundary behavior.

    Attributes:
        fallback: ``error`` surfaces unexpected scoring failures as
            ``ScoringError``; ``random`` returns a random, clearly flagged
            best-effort result instead.
        hyperparameters: Engine tunables passed through to the core.
    """

    fallback: Literal["error", "random"] = Field(default="error", description="Policy for unexpected scoring failures")
    hyperparameters: Hyperparameters = Field(default_factory=Hyperparameters)


DEFAULT_SETTINGS = DetectorSettings()


def _fallback_response() -> DetectResponse:
    score = random.randint(0, 100)
    verdict = Verdict.UNCERTAIN
    return DetectResponse(
        score=score,
        verdict=verdict,
        percentage=score,
        verdict_legacy=verdict.legacy,
        best_effort=True,
    )


def detect(text: str, settings: DetectorSettings | None = None) -> DetectResponse:
    """Score already-validated text and build the client response."""
    settings = settings or DEFAULT_SETTINGS
    try:
        result = compute_score(text, settings.hyperparameters)
    except Exception as exc:
        if settings.fallback == "random":
            logger.warning(f"Scoring failed ({exc!r}); returning best-effort random result")
            return _fallback_response()
        logger.exception("Scoring failed")
        raise ScoringError("Scoring failed") from exc

    logger.debug(f"Scored {len(text)} chars: score={result.score} verdict={result.verdict.value}")
    return DetectResponse(
        score=result.score,
        verdict=result.verdict,
        highlights=result.highlights,
        details={DETAIL_KEYS[name]: value for name, value in result.details.items()},
        percentage=result.score,
        verdict_legacy=result.verdict_legacy,
    )
