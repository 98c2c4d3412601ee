"""
Module: output.renderer

Purpose:
    Render one frame: every page of a revision tiled onto the fixed
    canvas according to a LayoutPlan, a white background beneath the
    pages, and the revision label at the bottom.

Key Functions:
    - render_frame(): Main rendering function

Key Classes:
    - RenderablePage: Protocol for pages the renderer can draw
    - LayoutCapacityError: More pages than the plan has cells

Dependencies:
    - PIL: Canvas and drawing
    - layout: LayoutPlan, CanvasSpec, iter_cells
    - output.label: Label stamp

Used By:
    - history.sequencer: Render pass
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from PIL import Image, ImageDraw

from dochistory_toolkit.layout.config import CanvasSpec
from dochistory_toolkit.layout.models import CellPlacement, LayoutPlan, PageDimensions
from dochistory_toolkit.layout.planner import iter_cells

from .label import DEFAULT_FONT_SIZE, DEFAULT_LABEL_PADDING, draw_label

logger = logging.getLogger(__name__)

# Constants
BACKGROUND_COLOR = "white"
BORDER_COLOR = "black"
DEFAULT_BORDER_WIDTH = 1


class LayoutCapacityError(RuntimeError):
    """Plan has fewer cells than there are pages to draw."""
    pass


class RenderablePage(Protocol):
    """A page that knows its size and can rasterise itself."""

    @property
    def dimensions(self) -> PageDimensions: ...

    def rasterize(self, scale: float) -> Image.Image: ...


def render_frame(
    plan: LayoutPlan,
    pages: Sequence[RenderablePage],
    label: Optional[str],
    canvas: CanvasSpec,
    *,
    page_dimensions: Optional[PageDimensions] = None,
    draw_borders: bool = True,
    border_width: int = DEFAULT_BORDER_WIDTH,
    font_size: int = DEFAULT_FONT_SIZE,
    label_padding: int = DEFAULT_LABEL_PADDING,
) -> Image.Image:
    """
    Render pages onto a fresh canvas.

    Pages are drawn row-major; trailing cells of the grid stay empty.
    White is composited *beneath* the drawn pages so transparent page
    areas come out white while page pixels are kept as drawn.

    Args:
        plan: Layout plan (built for the run's max page count)
        pages: Pages in native document order (borrowed, not closed)
        label: Text stamped at the bottom, or None for no label
        canvas: Canvas size
        page_dimensions: Size used for every cell (default: first page)
        draw_borders: Stroke a box around each page
        border_width: Box line width in pixels
        font_size: Label font size
        label_padding: Space between label text and its box

    Returns:
        RGB image of canvas size

    Raises:
        ValueError: If ``pages`` is empty
        LayoutCapacityError: If ``pages`` exceeds ``plan.capacity``

    Example:
        >>> frame = render_frame(plan, doc.pages(), "1a2b3c4 2024-03-01", CanvasSpec())
        >>> frame.size
        (1920, 1080)
    """
    if not pages:
        raise ValueError("Cannot render a frame with no pages")
    if len(pages) > plan.capacity:
        raise LayoutCapacityError(
            f"{len(pages)} pages do not fit a {plan.columns}x{plan.rows} grid"
        )

    dims = page_dimensions or pages[0].dimensions

    frame = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(frame)

    for cell, page in zip(iter_cells(plan, dims, len(pages)), pages):
        _draw_page(frame, cell, page, plan.scale)
        if draw_borders:
            draw.rectangle(_pixel_box(cell), outline=BORDER_COLOR, width=border_width)

    # Destination-over: white goes underneath what is already drawn
    background = Image.new("RGBA", canvas.size, BACKGROUND_COLOR)
    background.alpha_composite(frame)
    frame = background.convert("RGB")

    if label:
        draw_label(frame, label, font_size=font_size, padding=label_padding)

    logger.debug(
        f"Rendered {len(pages)} pages on {plan.columns}x{plan.rows} grid "
        f"at scale {plan.scale:.4f}"
    )
    return frame


def _draw_page(
    frame: Image.Image,
    cell: CellPlacement,
    page: RenderablePage,
    scale: float,
) -> None:
    """
    Rasterise ``page`` and composite it into its cell, clipped to the cell.

    Args:
        frame: RGBA canvas being built
        cell: Target cell
        page: Page to draw
        scale: Plan scale factor
    """
    left, top, right, bottom = _pixel_box(cell)
    clip_width = right - left + 1
    clip_height = bottom - top + 1

    image = page.rasterize(scale)
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    if image.size != (clip_width, clip_height):
        # crop() pads with transparency when the raster is smaller
        image = image.crop((0, 0, clip_width, clip_height))

    frame.alpha_composite(image, dest=(left, top))


def _pixel_box(cell: CellPlacement) -> tuple[int, int, int, int]:
    """
    Inclusive integer pixel box of a cell.

    Returns:
        (left, top, right, bottom), right/bottom inclusive as PIL expects
    """
    left = int(round(cell.left))
    top = int(round(cell.top))
    right = max(left, int(round(cell.left + cell.width)) - 1)
    bottom = max(top, int(round(cell.top + cell.height)) - 1)
    return left, top, right, bottom
