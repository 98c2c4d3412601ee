"""
Module: history.config

Purpose:
    Configuration dataclasses for a history run. Immutable
    configuration with validation on construction.

Key Classes:
    - FrameConfig: Canvas, styling and output location for frames
    - HistoryConfig: Repository, revision range and document source

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - history.sequencer: Render pass and single-document tiling
    - cli: Built from command-line arguments
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dochistory_toolkit.layout.config import CanvasSpec
from dochistory_toolkit.output.label import DEFAULT_FONT_SIZE, DEFAULT_LABEL_PADDING
from dochistory_toolkit.output.renderer import DEFAULT_BORDER_WIDTH


@dataclass(frozen=True)
class FrameConfig:
    """
    How frames are drawn and where they go (immutable).

    Attributes:
        output_dir: Directory receiving NNN.png files
        canvas: Canvas size shared by every frame
        font_size: Label font size in pixels
        label_padding: Space between label text and its box
        border_width: Page box line width
        draw_page_borders: Stroke a box around each page
        write_manifest: Also write frames.json

    Example:
        >>> config = FrameConfig(output_dir=Path("frames"))
        >>> config.canvas.size
        (1920, 1080)
    """

    output_dir: Path
    canvas: CanvasSpec = field(default_factory=CanvasSpec)
    font_size: int = DEFAULT_FONT_SIZE
    label_padding: int = DEFAULT_LABEL_PADDING
    border_width: int = DEFAULT_BORDER_WIDTH
    draw_page_borders: bool = True
    write_manifest: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive: {self.font_size}")
        if self.label_padding < 0:
            raise ValueError(f"label_padding must be non-negative: {self.label_padding}")
        if self.border_width <= 0:
            raise ValueError(f"border_width must be positive: {self.border_width}")


@dataclass(frozen=True)
class HistoryConfig:
    """
    Configuration for animating a document's history (immutable).

    Exactly one document source is used per run:
    - ``pdf_dir``: prebuilt PDFs named ``<full commit hash>.pdf``
    - ``tracked_path``: a PDF committed to the repository, read from
      each commit's tree

    Attributes:
        repo_path: Git repository whose commits are the revisions
        frame: Frame drawing/output configuration
        pdf_dir: Directory of per-commit PDFs
        tracked_path: Repository-relative path of a committed PDF
        from_commit: Base commit, excluded like git A..B (None = root)
        to_commit: Last commit of the range (inclusive), None = HEAD

    Example:
        >>> config = HistoryConfig(
        ...     repo_path=Path("dissertation"),
        ...     frame=FrameConfig(output_dir=Path("frames")),
        ...     pdf_dir=Path("pdfs"),
        ... )
    """

    repo_path: Path
    frame: FrameConfig
    pdf_dir: Optional[Path] = None
    tracked_path: Optional[str] = None
    from_commit: Optional[str] = None
    to_commit: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if (self.pdf_dir is None) == (self.tracked_path is None):
            raise ValueError("exactly one of pdf_dir or tracked_path must be set")
        if self.tracked_path is not None and not self.tracked_path.strip():
            raise ValueError("tracked_path must not be empty")
