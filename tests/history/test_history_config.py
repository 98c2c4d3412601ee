"""
Unit tests for history configuration.
"""

from pathlib import Path

import pytest

from dochistory_toolkit.history.config import FrameConfig, HistoryConfig


class TestFrameConfig:

    def test_defaults(self):
        config = FrameConfig(output_dir=Path("frames"))

        assert config.canvas.size == (1920, 1080)
        assert config.draw_page_borders is True
        assert config.write_manifest is True

    @pytest.mark.parametrize(
        "field,value",
        [("font_size", 0), ("label_padding", -1), ("border_width", 0)],
    )
    def test_frame_config_when_invalid_then_raises(self, field, value):
        with pytest.raises(ValueError, match=field):
            FrameConfig(output_dir=Path("frames"), **{field: value})


class TestHistoryConfig:

    def test_history_config_with_pdf_dir(self):
        config = HistoryConfig(
            repo_path=Path("repo"),
            frame=FrameConfig(output_dir=Path("frames")),
            pdf_dir=Path("pdfs"),
            from_commit="7af0f9",
        )

        assert config.tracked_path is None
        assert config.to_commit is None

    def test_history_config_when_no_source_then_raises(self):
        with pytest.raises(ValueError, match="exactly one"):
            HistoryConfig(repo_path=Path("repo"), frame=FrameConfig(output_dir=Path("frames")))

    def test_history_config_when_both_sources_then_raises(self):
        with pytest.raises(ValueError, match="exactly one"):
            HistoryConfig(
                repo_path=Path("repo"),
                frame=FrameConfig(output_dir=Path("frames")),
                pdf_dir=Path("pdfs"),
                tracked_path="paper.pdf",
            )

    def test_history_config_when_tracked_path_blank_then_raises(self):
        with pytest.raises(ValueError, match="tracked_path"):
            HistoryConfig(
                repo_path=Path("repo"),
                frame=FrameConfig(output_dir=Path("frames")),
                tracked_path="  ",
            )
