"""
Module: output.label

Purpose:
    Stamp a frame with its label (revision id and date).
    Measures the text, centers it horizontally near the bottom edge,
    draws it and strokes a box around it.

Key Functions:
    - draw_label(): Draw the label and its box onto an image
    - label_box(): Geometry of the label for a given text extent

Dependencies:
    - PIL: Image drawing

Used By:
    - output.renderer: After pages and background are composited
"""

from __future__ import annotations

import logging
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

# Default settings
DEFAULT_FONT_SIZE = 24
DEFAULT_LABEL_PADDING = 5
DEFAULT_TEXT_COLOR = "black"
DEFAULT_BOX_LINE_WIDTH = 1


def label_box(
    canvas_size: Tuple[int, int],
    text_width: float,
    text_height: float,
    padding: int = DEFAULT_LABEL_PADDING,
) -> Tuple[Tuple[float, float], Tuple[float, float, float, float]]:
    """
    Calculate where the label text and its box go.

    The text baseline sits one text height above the bottom edge and the
    text is centered horizontally. The box extends ``padding`` below the
    baseline and ``padding - 1`` above the text, one pixel wider on the
    right.

    Args:
        canvas_size: (width, height) of the frame
        text_width: Measured text width
        text_height: Measured text height
        padding: Space between text and box

    Returns:
        ((x, baseline), (left, top, right, bottom))

    Example:
        >>> label_box((1920, 1080), 100, 20)
        ((910.0, 1060), (905.0, 1036, 1016.0, 1065))
    """
    width, height = canvas_size
    x = (width - text_width) / 2.0
    baseline = height - text_height
    box = (
        x - padding,
        baseline - text_height - (padding - 1),
        x + text_width + padding + 1,
        baseline + padding,
    )
    return (x, baseline), box


def draw_label(
    image: Image.Image,
    text: str,
    *,
    font_size: int = DEFAULT_FONT_SIZE,
    padding: int = DEFAULT_LABEL_PADDING,
    text_color: str = DEFAULT_TEXT_COLOR,
    line_width: int = DEFAULT_BOX_LINE_WIDTH,
) -> Tuple[float, float, float, float]:
    """
    Draw ``text`` centered at the bottom of ``image`` with a bordered box.

    Draws in place on the frame being built.

    Args:
        image: Frame to draw on
        text: Label text
        font_size: Font size in pixels
        padding: Space between text and box
        text_color: Color for text and box outline
        line_width: Box outline width

    Returns:
        The box (left, top, right, bottom) that was stroked
    """
    draw = ImageDraw.Draw(image)
    font = _load_font(font_size)

    ink_left, ink_top, ink_right, ink_bottom = measure_text(draw, text, font)
    text_width = ink_right - ink_left
    text_height = ink_bottom - ink_top
    (x, baseline), box = label_box(image.size, text_width, text_height, padding)

    # Ink starts at x, the pen sits one left bearing before it
    draw.text((x - ink_left, baseline), text, fill=text_color, font=font, anchor="ls")
    draw.rectangle(box, outline=text_color, width=line_width)

    logger.debug(f"Stamped label '{text}' at ({x:.1f}, {baseline:.1f})")
    return box


def measure_text(
    draw: ImageDraw.ImageDraw,
    text: str,
    font: ImageFont.FreeTypeFont,
) -> Tuple[float, float, float, float]:
    """
    Ink box of ``text`` relative to a pen at the origin on the baseline.

    ``left`` is the font's left bearing, ``top`` is negative (above the
    baseline).

    Returns:
        (left, top, right, bottom)
    """
    return draw.textbbox((0, 0), text, font=font, anchor="ls")


def _load_font(size: int) -> ImageFont.FreeTypeFont:
    """
    Load a TrueType font for the label.

    Falls back to Pillow's bundled default font if none is installed.

    Args:
        size: Font size

    Returns:
        Font object
    """
    font_options = [
        "DejaVuSans.ttf",
        "arial.ttf",        # Windows
        "Arial.ttf",        # Mac
        "LiberationSans-Regular.ttf",
    ]

    for font_name in font_options:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning("Could not load TrueType font, using default")
    return ImageFont.load_default(size=size)
