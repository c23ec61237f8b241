from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_ai_detector.api import is_blank
from data_designer_ai_detector.config import AIDetectorColumnConfig
from data_designer_ai_detector.core import compute_score

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def row_text(values) -> str:
    return " ".join(str(v) for v in values if v is not None)


def score_row(text: str, config: AIDetectorColumnConfig) -> dict:
    """Build one row's output dict; blank text is reported, not scored."""
    if is_blank(text):
        return {"is_valid": False, "ai_score": None, "ai_verdict": None}

    result = compute_score(text)
    output: dict = {
        "is_valid": result.score <= config.max_score,
        "ai_score": result.score,
        "ai_verdict": result.verdict.value,
    }
    if config.include_highlights:
        output["ai_highlights"] = result.highlights
    if config.include_details:
        output["ai_details"] = result.details
    return output


def score_frame(data: pd.DataFrame, config: AIDetectorColumnConfig) -> pd.DataFrame:
    """Return a copy of ``data`` with one output dict per row in ``config.name``."""
    results = []
    for _, row in data[config.target_columns].iterrows():
        results.append(score_row(row_text(row.values), config))

    skipped = sum(1 for r in results if r["ai_score"] is None)
    if skipped:
        logger.warning(f"   {skipped} row(s) had no text to score")

    data = data.copy()
    data[config.name] = results
    return data


class AIDetectorColumnGenerator(ColumnGeneratorFullColumn[AIDetectorColumnConfig]):
    """Column generator that scores text for AI-likeness via statistical signals."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f50e Scoring column {self.config.name!r} for AI-likeness")
        logger.info(f"   target columns: {self.config.target_columns}")
        logger.info(f"   max_score: {self.config.max_score}")
        return score_frame(data, self.config)
