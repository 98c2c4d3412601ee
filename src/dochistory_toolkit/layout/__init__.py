"""
Module: layout

Purpose:
    Grid layout for frames.
    Turns a page count and page size into a tiling plan that fits the canvas.

Key Functions:
    - plan_grid(): Compute grid shape, scale and margins
    - iter_cells(): Row-major page positions

Key Classes:
    - CanvasSpec: Fixed canvas size
    - PageDimensions: Page size
    - LayoutPlan: Grid plan for one frame
    - CellPlacement: One page's position

Dependencies:
    - math (std)

Used By:
    - history.sequencer: Frame planning
    - output.renderer: Frame drawing
"""

from .config import CanvasSpec, DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT
from .models import PageDimensions, LayoutPlan, CellPlacement
from .planner import plan_grid, iter_cells

__all__ = [
    # Config
    "CanvasSpec",
    "DEFAULT_CANVAS_WIDTH",
    "DEFAULT_CANVAS_HEIGHT",
    # Models
    "PageDimensions",
    "LayoutPlan",
    "CellPlacement",
    # Functions
    "plan_grid",
    "iter_cells",
]
