"""
Module: cli

Purpose:
    Command-line entry point.

    dochistory history REPO --pdf-dir DIR | --tracked PATH [-o OUT] [--from C] [--to C]
    dochistory tile INPUT.pdf OUTPUT.png [--label TEXT]

Key Functions:
    - main(): Parse arguments, configure logging, run a command

Dependencies:
    - argparse (std)
    - history: Pipeline

Used By:
    - dochistory console script
    - python -m dochistory_toolkit
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dochistory_toolkit import __version__
from dochistory_toolkit.history import (
    FrameConfig,
    HistoryConfig,
    SequenceError,
    render_single,
    run_history,
)
from dochistory_toolkit.layout.config import (
    CanvasSpec,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
)
from dochistory_toolkit.output.label import DEFAULT_FONT_SIZE

logger = logging.getLogger("dochistory")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dochistory",
        description="Render every revision of a PDF document as a numbered frame",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    history = subparsers.add_parser("history", help="Render one frame per commit")
    history.add_argument("repo", type=Path, help="Git repository of the document")
    source = history.add_mutually_exclusive_group(required=True)
    source.add_argument("--pdf-dir", type=Path, help="Directory of <commit-hash>.pdf files")
    source.add_argument("--tracked", type=str, help="Repository path of a committed PDF")
    history.add_argument("-o", "--output", type=Path, default=Path("frames"), help="Frame directory")
    history.add_argument("--from", dest="from_commit", help="Base commit, excluded (like git FROM..TO)")
    history.add_argument("--to", dest="to_commit", help="Last commit (inclusive, default HEAD)")
    history.add_argument("--no-manifest", action="store_true", help="Do not write frames.json")
    _add_frame_arguments(history)

    tile = subparsers.add_parser("tile", help="Tile all pages of one PDF onto one image")
    tile.add_argument("input", type=Path, help="Input PDF")
    tile.add_argument("output", type=Path, help="Output PNG")
    tile.add_argument("--label", help="Text stamped at the bottom")
    _add_frame_arguments(tile)

    return parser


def _add_frame_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int, default=DEFAULT_CANVAS_WIDTH, help="Canvas width")
    parser.add_argument("--height", type=int, default=DEFAULT_CANVAS_HEIGHT, help="Canvas height")
    parser.add_argument("--font-size", type=int, default=DEFAULT_FONT_SIZE, help="Label font size")
    parser.add_argument("--no-borders", action="store_true", help="Do not box each page")


def _frame_config(args: argparse.Namespace, output_dir: Path) -> FrameConfig:
    return FrameConfig(
        output_dir=output_dir,
        canvas=CanvasSpec(args.width, args.height),
        font_size=args.font_size,
        draw_page_borders=not args.no_borders,
        write_manifest=not getattr(args, "no_manifest", False),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line.

    Returns:
        Process exit status (0 on success, 1 on failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        if args.command == "history":
            config = HistoryConfig(
                repo_path=args.repo,
                frame=_frame_config(args, args.output),
                pdf_dir=args.pdf_dir,
                tracked_path=args.tracked,
                from_commit=args.from_commit,
                to_commit=args.to_commit,
            )
            result = run_history(config)
            logger.info(f"done: {result.frame_count} frames")
        else:
            render_single(args.input, args.output, _frame_config(args, args.output.parent), args.label)
            logger.info("done")
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except SequenceError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
