"""
Module: output

Purpose:
    Frame rendering and persistence.

Key Functions:
    - render_frame(): Tile pages and stamp the label
    - draw_label(): Label stamp
    - write_frame(): PNG encoding
    - write_manifest(): Run manifest

Dependencies:
    - PIL: Drawing and encoding

Used By:
    - history.sequencer: Render pass
"""

from .label import draw_label, label_box
from .renderer import LayoutCapacityError, RenderablePage, render_frame
from .writer import (
    FrameWriteError,
    frame_filename,
    frame_index_width,
    write_frame,
    write_manifest,
)

__all__ = [
    # Rendering
    "render_frame",
    "RenderablePage",
    "LayoutCapacityError",
    "draw_label",
    "label_box",
    # Writing
    "write_frame",
    "write_manifest",
    "frame_filename",
    "frame_index_width",
    "FrameWriteError",
]
