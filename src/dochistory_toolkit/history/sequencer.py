"""
Module: history.sequencer

Purpose:
    Orchestrate the two-pass history pipeline.
    Scan → (max page count) → Plan → Render → Write, once per revision.

    The scan pass opens every revision just far enough to count its
    pages and keeps the maximum. The render pass walks the same revisions
    in the same order and plans every frame with that maximum, so all
    frames share one grid and one scale.

Key Functions:
    - scan_max_page_count(): Scan pass
    - render_history(): Scan + render pass, writes NNN.png frames
    - run_history(): Full run from a HistoryConfig
    - render_single(): Tile one document into one image

Key Classes:
    - Frame: A persisted frame
    - HistoryResult: Result of a run
    - SequenceError: Exception for run failures

Dependencies:
    - layout: Grid planning
    - output: Rendering and writing
    - documents: PDF decoding
    - history.revisions: Revision enumeration

Used By:
    - cli: history and tile commands
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from dochistory_toolkit.documents.pdf import DocumentError, open_pdf
from dochistory_toolkit.layout.models import LayoutPlan
from dochistory_toolkit.layout.planner import plan_grid
from dochistory_toolkit.output.renderer import LayoutCapacityError, render_frame
from dochistory_toolkit.output.writer import (
    FrameWriteError,
    frame_filename,
    write_frame,
    write_manifest,
)
from dochistory_toolkit.timing import TimingLog, timed_frame, timed_phase

from .config import FrameConfig, HistoryConfig
from .revisions import (
    DocumentOpener,
    RevisionError,
    RevisionRecord,
    TrackedFileOpener,
    list_revisions,
    pdf_dir_opener,
)

logger = logging.getLogger(__name__)

# Failures that abort a run; anything else is a bug and propagates as is
_RUN_ERRORS = (DocumentError, RevisionError, FrameWriteError, LayoutCapacityError, ValueError)


class SequenceError(Exception):
    """Error during a history run. The run produces no further frames."""
    pass


@dataclass(frozen=True)
class Frame:
    """
    A frame written to disk (immutable).

    Attributes:
        index: Position in the sequence (0-indexed)
        label: Label stamped on the frame
        path: Written PNG file
        revision: Revision shown
        page_count: Pages of that revision
        plan: Layout plan used
    """
    index: int
    label: str
    path: Path
    revision: RevisionRecord
    page_count: int
    plan: LayoutPlan


@dataclass(frozen=True)
class HistoryResult:
    """
    Result of a history run (immutable).

    Attributes:
        frames: Frames in sequence order
        max_page_count: Largest page count across the history
        output_dir: Directory holding the frames
        manifest_path: frames.json, if written
        timings: Pass and per-frame timings

    Example:
        >>> result = run_history(config)
        >>> print(f"{result.frame_count} frames, up to {result.max_page_count} pages")
    """
    frames: tuple[Frame, ...]
    max_page_count: int
    output_dir: Path
    manifest_path: Optional[Path] = None
    timings: TimingLog = field(default_factory=TimingLog)

    @property
    def frame_count(self) -> int:
        """Number of frames written."""
        return len(self.frames)

    @property
    def plan_shape(self) -> Optional[Tuple[int, int, float]]:
        """Shared (columns, rows, scale) of every frame, None if no frames."""
        if not self.frames:
            return None
        return self.frames[0].plan.shape


def scan_max_page_count(
    revisions: Iterable[RevisionRecord],
    open_document: DocumentOpener,
) -> int:
    """
    Scan pass: largest page count over all revisions.

    Every revision is visited; a single failure aborts the scan.

    Args:
        revisions: Revisions in sequence order (any iterable)
        open_document: Opens the PDF of a revision

    Returns:
        Maximum page count (>= 1)

    Raises:
        SequenceError: If there are no revisions or a revision cannot be read

    Example:
        >>> scan_max_page_count(revisions, pdf_dir_opener(Path("pdfs")))
        14
    """
    revisions = list(revisions)
    if not revisions:
        raise SequenceError("No revisions to scan")

    max_page_count = 0
    for revision in revisions:
        try:
            with open_document(revision) as document:
                page_count = document.require_pages()
        except _RUN_ERRORS as e:
            raise SequenceError(f"scan: revision {revision.short_id}: {e}") from e

        logger.debug(f"{revision.short_id}: {page_count} pages")
        max_page_count = max(max_page_count, page_count)

    logger.info(f"Scanned {len(revisions)} revisions, max {max_page_count} pages")
    return max_page_count


def render_history(
    revisions: Iterable[RevisionRecord],
    config: FrameConfig,
    open_document: DocumentOpener,
) -> HistoryResult:
    """
    Run both passes and write one frame per revision.

    Args:
        revisions: Revisions in sequence order (materialised once, so both
            passes see the same order)
        config: Frame configuration
        open_document: Opens the PDF of a revision

    Returns:
        HistoryResult with frames in sequence order

    Raises:
        SequenceError: If any revision fails to scan, render or write
    """
    revisions = list(revisions)
    timings = TimingLog()

    with timed_phase(timings, "scan"):
        max_page_count = scan_max_page_count(revisions, open_document)

    output_dir = Path(config.output_dir)
    frames: List[Frame] = []

    with timed_phase(timings, "render"):
        for index, revision in enumerate(revisions):
            with timed_frame(timings, index):
                try:
                    frame = _render_revision(
                        index, revision, len(revisions), max_page_count, config, open_document
                    )
                except _RUN_ERRORS as e:
                    raise SequenceError(f"render: revision {revision.short_id}: {e}") from e
            frames.append(frame)

    manifest_path = None
    if config.write_manifest:
        try:
            manifest_path = write_manifest(output_dir, _build_manifest(config, max_page_count, frames))
        except FrameWriteError as e:
            raise SequenceError(f"manifest: {e}") from e

    logger.debug(timings.summary())
    logger.info(f"Wrote {len(frames)} frames to {output_dir}")

    return HistoryResult(
        frames=tuple(frames),
        max_page_count=max_page_count,
        output_dir=output_dir,
        manifest_path=manifest_path,
        timings=timings,
    )


def _render_revision(
    index: int,
    revision: RevisionRecord,
    total_frames: int,
    max_page_count: int,
    config: FrameConfig,
    open_document: DocumentOpener,
) -> Frame:
    """
    Render and write the frame for one revision.

    The plan always uses the run-wide ``max_page_count``, never this
    revision's own page count.
    """
    with open_document(revision) as document:
        page_count = document.require_pages()
        dims = document.page_dimensions()
        plan = plan_grid(config.canvas, dims, max_page_count)
        image = render_frame(
            plan,
            document.pages(),
            revision.label,
            config.canvas,
            page_dimensions=dims,
            draw_borders=config.draw_page_borders,
            border_width=config.border_width,
            font_size=config.font_size,
            label_padding=config.label_padding,
        )

    path = write_frame(image, Path(config.output_dir) / frame_filename(index, total_frames))
    logger.info(f"{path.name} {revision.short_id} {revision.date_text}")

    return Frame(
        index=index,
        label=revision.label,
        path=path,
        revision=revision,
        page_count=page_count,
        plan=plan,
    )


def _build_manifest(
    config: FrameConfig,
    max_page_count: int,
    frames: Sequence[Frame],
) -> Dict[str, Any]:
    """Manifest describing a run. Contains nothing time-dependent."""
    return {
        "canvas": {"width": config.canvas.width, "height": config.canvas.height},
        "max_page_count": max_page_count,
        "frames": [
            {
                "index": frame.index,
                "file": frame.path.name,
                "revision": frame.revision.commit_hash,
                "short_id": frame.revision.short_id,
                "date": frame.revision.date_text,
                "page_count": frame.page_count,
                "plan": {
                    "columns": frame.plan.columns,
                    "rows": frame.plan.rows,
                    "scale": frame.plan.scale,
                    "left_margin": frame.plan.left_margin,
                    "top_margin": frame.plan.top_margin,
                },
            }
            for frame in frames
        ],
    }


def run_history(config: HistoryConfig) -> HistoryResult:
    """
    Animate a repository's history from start to finish.

    Pipeline:
    1. List commits (topological, oldest first)
    2. Scan every revision's page count
    3. Render and write one frame per revision

    Args:
        config: History configuration

    Returns:
        HistoryResult

    Raises:
        SequenceError: If any step fails

    Example:
        >>> config = HistoryConfig(
        ...     repo_path=Path("dissertation"),
        ...     frame=FrameConfig(output_dir=Path("frames")),
        ...     pdf_dir=Path("pdfs"),
        ...     from_commit="7af0f9",
        ... )
        >>> result = run_history(config)
    """
    try:
        revisions = list_revisions(config.repo_path, config.from_commit, config.to_commit)
    except RevisionError as e:
        raise SequenceError(f"Failed to list revisions: {e}") from e

    if config.tracked_path is not None:
        try:
            opener = TrackedFileOpener(config.repo_path, config.tracked_path)
        except RevisionError as e:
            raise SequenceError(str(e)) from e
        try:
            return render_history(revisions, config.frame, opener)
        finally:
            opener.close()

    return render_history(revisions, config.frame, pdf_dir_opener(config.pdf_dir))


def render_single(
    document_path: Path,
    output_path: Path,
    config: FrameConfig,
    label: Optional[str] = None,
) -> Path:
    """
    Tile every page of one PDF onto a single image.

    Planned with the document's own page count.

    Args:
        document_path: Input PDF
        output_path: Output PNG
        config: Frame configuration (output_dir is ignored)
        label: Optional label stamped at the bottom

    Returns:
        The written path

    Raises:
        SequenceError: If the document cannot be read or the image written
    """
    try:
        with open_pdf(document_path) as document:
            page_count = document.require_pages()
            dims = document.page_dimensions()
            plan = plan_grid(config.canvas, dims, page_count)
            image = render_frame(
                plan,
                document.pages(),
                label,
                config.canvas,
                page_dimensions=dims,
                draw_borders=config.draw_page_borders,
                border_width=config.border_width,
                font_size=config.font_size,
                label_padding=config.label_padding,
            )
        path = write_frame(image, Path(output_path))
    except _RUN_ERRORS as e:
        raise SequenceError(f"tile: {document_path}: {e}") from e

    logger.info(f"Tiled {page_count} pages of {document_path} onto {path}")
    return path
