"""
Module: output.writer

Purpose:
    Persist finished frames and the run manifest.
    Frame files are named by their 0-based sequence index, zero padded,
    independent of the revision they show.

Key Functions:
    - frame_filename(): Name for frame N of a run
    - write_frame(): Encode a frame to PNG
    - write_manifest(): Write frames.json describing the run

Key Classes:
    - FrameWriteError: Exception for write failures

Dependencies:
    - PIL: PNG encoding
    - json (std)

Used By:
    - history.sequencer: Render pass
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from PIL import Image

logger = logging.getLogger(__name__)

MIN_INDEX_WIDTH = 3
MANIFEST_FILENAME = "frames.json"


class FrameWriteError(Exception):
    """Error writing a frame or manifest to disk."""
    pass


def frame_index_width(total_frames: int) -> int:
    """
    Digits needed to zero pad every index of a run.

    At least 3 so short runs produce 000.png, 001.png, ...

    Example:
        >>> frame_index_width(12)
        3
        >>> frame_index_width(1001)
        4
    """
    return max(MIN_INDEX_WIDTH, len(str(max(total_frames - 1, 0))))


def frame_filename(index: int, total_frames: int) -> str:
    """
    File name of frame ``index``.

    Example:
        >>> frame_filename(7, 40)
        '007.png'
    """
    if index < 0:
        raise ValueError(f"frame index must be non-negative: {index}")
    return f"{index:0{frame_index_width(total_frames)}d}.png"


def write_frame(image: Image.Image, path: Path) -> Path:
    """
    Encode ``image`` as PNG at ``path``.

    Args:
        image: Finished frame
        path: Destination file

    Returns:
        The written path

    Raises:
        FrameWriteError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        image.save(path, format="PNG")
    except (OSError, ValueError) as e:
        raise FrameWriteError(f"write_frame: {path}: {e}") from e

    logger.debug(f"Wrote frame {path}")
    return path


def write_manifest(output_dir: Path, manifest: Dict[str, Any]) -> Path:
    """
    Write the run manifest as JSON.

    Keys are sorted and no timestamps are added, so re-running the same
    history produces the same file.

    Args:
        output_dir: Directory holding the frames
        manifest: Manifest dictionary

    Returns:
        Path to frames.json

    Raises:
        FrameWriteError: If writing fails

    Example:
        >>> write_manifest(Path("frames"), {"frames": []})
        PosixPath('frames/frames.json')
    """
    manifest_path = Path(output_dir) / MANIFEST_FILENAME
    try:
        with open(manifest_path, "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2, sort_keys=True)
            f.write("\n")
    except (OSError, TypeError) as e:
        raise FrameWriteError(f"write_manifest: {manifest_path}: {e}") from e

    logger.debug(f"Wrote manifest to {manifest_path}")
    return manifest_path
