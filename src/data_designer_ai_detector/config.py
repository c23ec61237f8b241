from __future__ import annotations

from typing import Literal

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig


class AIDetectorColumnConfig(SingleColumnConfig):
    """Score text columns for statistical signs of machine generation.

    Runs eight text signals against each row's text and produces a numeric
    AI-likeness score (0-100), a verdict band, and optionally the highlighted
    sentences and per-signal breakdown.

    Attributes:
        target_columns: Columns whose text content will be concatenated and scored.
        max_score: Maximum AI-likeness score (0-100) for ``is_valid=True``. Defaults
            to 40 (the upper edge of the "Human" verdict).
        include_highlights: Include up to five suspicious sentences in output.
        include_details: Include the per-signal 0-1 sub-scores in output.
    """

    target_columns: list[str]
    max_score: int = Field(default=40, ge=0, le=100, description="Maximum AI-likeness score for is_valid=True")
    include_highlights: bool = Field(default=True, description="Include suspicious sentences in output")
    include_details: bool = Field(default=False, description="Include per-signal sub-scores in output")
    column_type: Literal["ai-detector"] = "ai-detector"

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f50e"

    @property
    def required_columns(self) -> list[str]:
        return self.target_columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []
