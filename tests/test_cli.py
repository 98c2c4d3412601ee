"""
Tests for the command-line entry point.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image

from dochistory_toolkit.cli import build_parser, main


class TestBuildParser:

    def test_history_arguments(self):
        args = build_parser().parse_args(
            ["history", "repo", "--pdf-dir", "pdfs", "--from", "7af0f9", "-o", "out"]
        )

        assert args.command == "history"
        assert args.repo == Path("repo")
        assert args.pdf_dir == Path("pdfs")
        assert args.tracked is None
        assert args.from_commit == "7af0f9"
        assert args.to_commit is None
        assert args.output == Path("out")
        assert (args.width, args.height) == (1920, 1080)

    def test_history_requires_one_source(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["history", "repo"])

    def test_history_sources_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["history", "repo", "--pdf-dir", "p", "--tracked", "doc.pdf"])

    def test_tile_arguments(self):
        args = build_parser().parse_args(
            ["tile", "in.pdf", "out.png", "--label", "draft", "--width", "640", "--no-borders"]
        )

        assert args.command == "tile"
        assert args.label == "draft"
        assert args.width == 640
        assert args.no_borders is True


class TestMain:

    def test_main_tile_writes_image(self, make_pdf, tmp_path):
        # Arrange
        source = make_pdf(pages=2)
        output = tmp_path / "tiled.png"

        # Act
        status = main(["tile", str(source), str(output), "--width", "320", "--height", "180"])

        # Assert
        assert status == 0
        with Image.open(output) as image:
            assert image.size == (320, 180)

    def test_main_tile_when_input_missing_then_exit_1(self, tmp_path):
        status = main(["tile", str(tmp_path / "missing.pdf"), str(tmp_path / "out.png")])

        assert status == 1
        assert not (tmp_path / "out.png").exists()

    def test_main_when_canvas_invalid_then_exit_1(self, make_pdf, tmp_path):
        status = main(["tile", str(make_pdf()), str(tmp_path / "out.png"), "--width", "0"])

        assert status == 1

    def test_main_history_builds_config(self, tmp_path):
        # Arrange
        with patch("dochistory_toolkit.cli.run_history") as mock_run:
            mock_run.return_value.frame_count = 4

            # Act
            status = main(
                ["history", str(tmp_path), "--tracked", "paper.pdf", "--to", "main", "--no-manifest"]
            )

        # Assert
        assert status == 0
        config = mock_run.call_args.args[0]
        assert config.tracked_path == "paper.pdf"
        assert config.pdf_dir is None
        assert config.to_commit == "main"
        assert config.frame.write_manifest is False
        assert config.frame.output_dir == Path("frames")
