"""
Module: history

Purpose:
    Two-pass pipeline turning a document's revision history into a
    numbered frame sequence with a uniform layout scale.

Key Functions:
    - run_history(): Main entry point
    - render_history(): Scan + render over given revisions
    - scan_max_page_count(): Scan pass
    - render_single(): Tile a single document
    - list_revisions(): Ordered commits

Key Classes:
    - HistoryConfig / FrameConfig: Configuration
    - RevisionRecord: One revision
    - Frame / HistoryResult: Output records
    - SequenceError / RevisionError: Failures

Dependencies:
    - git (GitPython): Commit traversal
    - fitz (PyMuPDF): PDF decoding
    - PIL: Rendering

Used By:
    - cli
"""

from .config import FrameConfig, HistoryConfig
from .revisions import (
    RevisionError,
    RevisionRecord,
    TrackedFileOpener,
    list_revisions,
    pdf_dir_opener,
)
from .sequencer import (
    Frame,
    HistoryResult,
    SequenceError,
    render_history,
    render_single,
    run_history,
    scan_max_page_count,
)

__all__ = [
    # Config
    "FrameConfig",
    "HistoryConfig",
    # Revisions
    "RevisionRecord",
    "RevisionError",
    "TrackedFileOpener",
    "list_revisions",
    "pdf_dir_opener",
    # Sequencer
    "Frame",
    "HistoryResult",
    "SequenceError",
    "scan_max_page_count",
    "render_history",
    "run_history",
    "render_single",
]
