"""
Module: layout.models

Purpose:
    Data models for grid layout.
    Immutable dataclasses describing page geometry and a tiling plan.

Key Classes:
    - PageDimensions: Size of one page (PDF points)
    - LayoutPlan: Grid shape, uniform scale and centering margins
    - CellPlacement: Where one page lands on the canvas

Dependencies:
    - dataclasses (std)

Used By:
    - layout.planner: Creates LayoutPlans
    - output.renderer: Consumes LayoutPlans
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageDimensions:
    """
    Size of a single document page (immutable).

    All pages of one revision are assumed to share this size, so only
    the first page is measured.

    Attributes:
        width: Page width (PDF points)
        height: Page height (PDF points)

    Example:
        >>> PageDimensions(595.0, 842.0).area
        500990.0
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.width <= 0:
            raise ValueError(f"page width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"page height must be positive: {self.height}")

    @property
    def area(self) -> float:
        """Page area."""
        return self.width * self.height


@dataclass(frozen=True)
class LayoutPlan:
    """
    Tiling plan for one frame (immutable).

    Pages are placed row-major in a ``columns`` x ``rows`` grid, all
    scaled by the same ``scale`` and offset by the margins so the block
    is centered on the canvas.

    Attributes:
        columns: Number of grid columns (>= 1)
        rows: Number of grid rows (>= 1)
        scale: Uniform scale factor applied to every page (> 0)
        left_margin: Horizontal offset of the grid block (>= 0)
        top_margin: Vertical offset of the grid block (>= 0)

    Example:
        >>> plan = LayoutPlan(columns=3, rows=2, scale=0.5, left_margin=0, top_margin=10)
        >>> plan.capacity
        6
    """

    columns: int
    rows: int
    scale: float
    left_margin: float
    top_margin: float

    @property
    def capacity(self) -> int:
        """Number of cells in the grid."""
        return self.columns * self.rows

    @property
    def shape(self) -> tuple[int, int, float]:
        """(columns, rows, scale) - identical for every frame of one run."""
        return (self.columns, self.rows, self.scale)

    def cell_of(self, index: int) -> tuple[int, int]:
        """
        Grid cell for the page at ``index``.

        Returns:
            (column, row), filled left-to-right then top-to-bottom.
        """
        return index % self.columns, index // self.columns


@dataclass(frozen=True)
class CellPlacement:
    """
    A page positioned on the canvas.

    Attributes:
        index: Page index within the revision (0-indexed)
        column: Grid column
        row: Grid row
        left: X of the cell's top-left corner (canvas pixels)
        top: Y of the cell's top-left corner (canvas pixels)
        width: Scaled page width
        height: Scaled page height
    """

    index: int
    column: int
    row: int
    left: float
    top: float
    width: float
    height: float

    @property
    def box(self) -> tuple[float, float, float, float]:
        """(left, top, right, bottom) of the scaled page."""
        return (self.left, self.top, self.left + self.width, self.top + self.height)
