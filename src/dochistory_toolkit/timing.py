"""
Module: timing

Purpose:
    Wall-clock instrumentation for history runs: how long the scan and
    render passes take, and how long each frame took to decode, render
    and write.

Key Classes:
    - TimingLog: Pass durations plus one duration per frame

Key Functions:
    - timed_phase: Time a whole pass
    - timed_frame: Time one frame

Dependencies:
    - time (std)
    - contextlib (std)

Used By:
    - history.sequencer: Scan and render passes
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Generator, List, Tuple


@dataclass
class TimingLog:
    """
    Timings of one history run.

    Attributes:
        phases: Pass name -> seconds ("scan", "render")
        frames: Frame index -> seconds

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, "scan"):
        ...     max_pages = scan_max_page_count(revisions, open_document)
        >>> print(log.summary())
    """
    phases: Dict[str, float] = field(default_factory=dict)
    frames: Dict[int, float] = field(default_factory=dict)

    @property
    def mean_frame_seconds(self) -> float:
        """Average frame duration, 0.0 before any frame is timed."""
        if not self.frames:
            return 0.0
        return sum(self.frames.values()) / len(self.frames)

    def slowest_frames(self, n: int = 3) -> List[Tuple[int, float]]:
        """The ``n`` slowest frames as (index, seconds), slowest first."""
        ranked = sorted(self.frames.items(), key=lambda item: (-item[1], item[0]))
        return ranked[:n]

    def summary(self) -> str:
        """Multi-line report for debug logging."""
        lines = ["", "=== History Timing Summary ==="]
        for phase, seconds in self.phases.items():
            lines.append(f"  {phase:10s} {seconds:.3f}s")

        if self.frames:
            lines.append(f"  {len(self.frames)} frames, {self.mean_frame_seconds:.3f}s per frame")
            slowest = ", ".join(f"{index} ({seconds:.3f}s)" for index, seconds in self.slowest_frames())
            lines.append(f"  slowest: {slowest}")

        lines.append("")
        return "\n".join(lines)


@contextmanager
def timed_phase(log: TimingLog, phase: str) -> Generator[None, None, None]:
    """Record the duration of a pass under ``phase``, even if it raises."""
    start = time.perf_counter()
    try:
        yield
    finally:
        log.phases[phase] = time.perf_counter() - start


@contextmanager
def timed_frame(log: TimingLog, index: int) -> Generator[None, None, None]:
    """Record the duration of frame ``index``, even if it raises."""
    start = time.perf_counter()
    try:
        yield
    finally:
        log.frames[index] = time.perf_counter() - start
