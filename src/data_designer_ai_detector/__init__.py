# SPDX-License-Identifier: Apache-2.0
"""AI-likeness detector for prose, with a NeMo Data Designer plugin.

Scores text for statistical signs of machine generation using eight fixed,
weighted signals. No models, no API calls. Adds an ``ai-detector`` column type
to Data Designer.

Usage::

    from data_designer_ai_detector import compute_score

    result = compute_score(article)
    result.score, result.verdict, result.highlights

    from data_designer_ai_detector.config import AIDetectorColumnConfig

    builder.add_column(AIDetectorColumnConfig(
        name="ai_check",
        target_columns=["article"],
        max_score=40,
    ))
"""

from data_designer_ai_detector.core import (
    DetectionResult,
    Hyperparameters,
    Verdict,
    analyze_text,
    compute_score,
    verdict_for,
)

__all__ = ["DetectionResult", "Hyperparameters", "Verdict", "analyze_text", "compute_score", "verdict_for"]
