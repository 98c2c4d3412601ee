"""
Module: layout.config

Purpose:
    Canvas configuration for the grid layout engine.
    Defines the fixed raster target every frame is drawn into.

Key Classes:
    - CanvasSpec: Immutable canvas size

Dependencies:
    - dataclasses (std)

Used By:
    - layout.planner: Grid planning
    - output.renderer: Canvas allocation
    - history.config: Run configuration
"""

from __future__ import annotations

from dataclasses import dataclass


# Full HD landscape, matches typical video frame size
DEFAULT_CANVAS_WIDTH = 1920
DEFAULT_CANVAS_HEIGHT = 1080


@dataclass(frozen=True)
class CanvasSpec:
    """
    Fixed canvas size for a whole run (immutable).

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels

    Example:
        >>> CanvasSpec().size
        (1920, 1080)
    """

    width: int = DEFAULT_CANVAS_WIDTH
    height: int = DEFAULT_CANVAS_HEIGHT

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.width <= 0:
            raise ValueError(f"canvas width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"canvas height must be positive: {self.height}")

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple, as expected by PIL."""
        return (self.width, self.height)

    @property
    def area(self) -> int:
        """Canvas area in pixels."""
        return self.width * self.height
