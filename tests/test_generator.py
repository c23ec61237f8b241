import logging

import pandas as pd

from data_designer_ai_detector.config import AIDetectorColumnConfig
from data_designer_ai_detector.generator import row_text, score_frame, score_row


SHORT_TEXT = "The cat sat. The dog ran."


class TestColumnConfig:
    def test_defaults(self):
        config = AIDetectorColumnConfig(name="ai_check", target_columns=["article"])
        assert config.max_score == 40
        assert config.include_highlights is True
        assert config.include_details is False
        assert config.column_type == "ai-detector"
        assert config.required_columns == ["article"]
        assert config.side_effect_columns == []


class TestScoreRow:
    def test_row_text_skips_missing_values(self):
        assert row_text(["The cat sat.", None, "The dog ran."]) == SHORT_TEXT

    def test_scores_row(self):
        config = AIDetectorColumnConfig(name="ai_check", target_columns=["article"])
        output = score_row(SHORT_TEXT, config)
        assert output == {"is_valid": True, "ai_score": 30, "ai_verdict": "Human", "ai_highlights": []}

    def test_max_score_controls_validity(self):
        config = AIDetectorColumnConfig(name="ai_check", target_columns=["article"], max_score=10, include_details=True)
        output = score_row(SHORT_TEXT, config)
        assert output["is_valid"] is False
        assert output["ai_details"]["burstiness"] == 1.0

    def test_blank_row_is_not_scored(self):
        config = AIDetectorColumnConfig(name="ai_check", target_columns=["article"])
        assert score_row("  ", config) == {"is_valid": False, "ai_score": None, "ai_verdict": None}


class TestScoreFrame:
    def test_adds_output_column_to_a_copy(self, caplog):
        data = pd.DataFrame({"article": [SHORT_TEXT, "   ", None], "id": [1, 2, 3]})
        config = AIDetectorColumnConfig(name="ai_check", target_columns=["article"])
        with caplog.at_level(logging.WARNING):
            result = score_frame(data, config)

        assert "ai_check" not in data.columns
        assert list(result["id"]) == [1, 2, 3]
        assert result["ai_check"].iloc[0]["ai_score"] == 30
        assert result["ai_check"].iloc[0]["is_valid"] is True
        assert result["ai_check"].iloc[1] == {"is_valid": False, "ai_score": None, "ai_verdict": None}
        assert result["ai_check"].iloc[2]["ai_score"] is None
        assert "2 row(s) had no text to score" in caplog.text

    def test_joins_multiple_target_columns(self, caplog):
        data = pd.DataFrame({"title": ["The cat sat."], "body": ["The dog ran."]})
        config = AIDetectorColumnConfig(name="ai_check", target_columns=["title", "body"])
        with caplog.at_level(logging.WARNING):
            result = score_frame(data, config)
        assert result["ai_check"].iloc[0]["ai_score"] == 30
        assert "had no text to score" not in caplog.text
