"""
Module: layout.planner

Purpose:
    Compute the tiling grid and uniform scale for a frame.
    Estimates the grid from an ideal area packing, corrects it until it
    holds enough cells, then derives the largest scale that still fits.

Key Functions:
    - plan_grid(): Main entry point for layout
    - iter_cells(): Positions of pages on the canvas, row-major

Dependencies:
    - math (std)
    - layout.models: PageDimensions, LayoutPlan, CellPlacement
    - layout.config: CanvasSpec

Used By:
    - history.sequencer: One plan per frame, always with the run's max page count
    - output.renderer: Cell traversal
"""

from __future__ import annotations

import logging
import math
from typing import Iterator

from .config import CanvasSpec
from .models import CellPlacement, LayoutPlan, PageDimensions

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero (value is positive here)."""
    return int(math.floor(value + 0.5))


def plan_grid(
    canvas: CanvasSpec,
    page: PageDimensions,
    target_page_count: int,
) -> LayoutPlan:
    """
    Plan a grid that fits ``target_page_count`` pages on the canvas.

    Pure function: identical inputs always give an equal plan.

    Steps:
    1. Ideal scale assuming zero wasted area
    2. Column estimate from that scale, between 1 and the page count
    3. Row estimate from the column count
    4. Grow rows until the grid has enough cells
    5. Recompute the scale that fits both dimensions
    6. Center the block

    Args:
        canvas: Canvas size
        page: Representative page dimensions
        target_page_count: Number of pages the grid must hold

    Returns:
        LayoutPlan whose scaled block never overflows the canvas

    Raises:
        ValueError: If target_page_count < 1

    Example:
        >>> plan = plan_grid(CanvasSpec(1920, 1080), PageDimensions(600, 800), 1)
        >>> (plan.columns, plan.rows, plan.scale)
        (1, 1, 1.35)
    """
    if target_page_count < 1:
        raise ValueError(f"target_page_count must be at least 1: {target_page_count}")

    canvas_width = float(canvas.width)
    canvas_height = float(canvas.height)

    # canvas_area >= scale² * count * page_area
    ideal_scale = math.sqrt(canvas_width * canvas_height / (target_page_count * page.area))

    # Never more columns than pages, a lone page must stay centered
    columns = _round_half_up(canvas_width / (ideal_scale * page.width))
    columns = min(max(1, columns), target_page_count)
    rows = _round_half_up(target_page_count / columns)

    # Rounding can undershoot capacity
    while columns * rows < target_page_count:
        rows += 1

    scale_width = canvas_width / (columns * page.width)
    scale_height = canvas_height / (rows * page.height)
    scale = min(scale_width, scale_height)

    left_margin = max(0.0, (canvas_width - scale * page.width * columns) / 2.0)
    top_margin = max(0.0, (canvas_height - scale * page.height * rows) / 2.0)

    logger.debug(
        f"Planned {columns}x{rows} grid for {target_page_count} pages "
        f"(scale={scale:.4f}, margins=({left_margin:.1f}, {top_margin:.1f}))"
    )

    return LayoutPlan(
        columns=columns,
        rows=rows,
        scale=scale,
        left_margin=left_margin,
        top_margin=top_margin,
    )


def iter_cells(
    plan: LayoutPlan,
    page: PageDimensions,
    count: int,
) -> Iterator[CellPlacement]:
    """
    Yield canvas placements for ``count`` pages.

    Cursor moves right one scaled page width per page and wraps to the
    leftmost column after every ``plan.columns`` pages.

    Args:
        plan: Layout plan
        page: Page dimensions (unscaled)
        count: Number of pages to place

    Yields:
        CellPlacement for pages 0..count-1
    """
    cell_width = plan.scale * page.width
    cell_height = plan.scale * page.height
    for index in range(count):
        column, row = plan.cell_of(index)
        yield CellPlacement(
            index=index,
            column=column,
            row=row,
            left=plan.left_margin + column * cell_width,
            top=plan.top_margin + row * cell_height,
            width=cell_width,
            height=cell_height,
        )
