"""
Module: history.revisions

Purpose:
    Enumerate the revisions of a document and open each one.
    Revisions are git commits walked in topological order, oldest first.
    Each revision's PDF comes either from a directory of prebuilt
    ``<hash>.pdf`` files or from the commit's own tree.

Key Functions:
    - list_revisions(): Ordered commits of a repository range
    - pdf_dir_opener(): Opener for prebuilt per-commit PDFs

Key Classes:
    - RevisionRecord: One commit (hash + date)
    - TrackedFileOpener: Opener reading a committed PDF blob
    - RevisionError: Exception for repository failures

Dependencies:
    - git (GitPython): Commit traversal and blob access
    - documents.pdf: PDF decoding

Used By:
    - history.sequencer: Both passes
    - cli: history command
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import Callable, List, Optional

from git import Repo
from git.exc import GitError

from dochistory_toolkit.documents.pdf import PdfDocument, open_pdf, open_pdf_bytes

logger = logging.getLogger(__name__)

SHORT_ID_LENGTH = 7
DATE_FORMAT = "%Y-%m-%d"


class RevisionError(Exception):
    """Error reading revisions from the repository."""
    pass


@dataclass(frozen=True)
class RevisionRecord:
    """
    One revision of the document (immutable).

    Attributes:
        commit_hash: Full commit hash
        committed_at: Committer date, in the committer's own timezone

    Example:
        >>> rev = RevisionRecord("7af0f9d1c0ffee", datetime(2015, 3, 2, 9, 0))
        >>> rev.label
        '7af0f9d 2015-03-02'
    """

    commit_hash: str
    committed_at: datetime

    @property
    def short_id(self) -> str:
        """Abbreviated hash."""
        return self.commit_hash[:SHORT_ID_LENGTH]

    @property
    def date_text(self) -> str:
        """Commit date as YYYY-MM-DD."""
        return self.committed_at.strftime(DATE_FORMAT)

    @property
    def label(self) -> str:
        """Frame label: short hash and date."""
        return f"{self.short_id} {self.date_text}"


DocumentOpener = Callable[[RevisionRecord], PdfDocument]


def revision_range(from_commit: Optional[str] = None, to_commit: Optional[str] = None) -> str:
    """
    Git revision range string.

    ``from_commit`` is excluded, like ``git log A..B``.

    Example:
        >>> revision_range("7af0f9")
        '7af0f9..HEAD'
    """
    end = to_commit or "HEAD"
    if from_commit:
        return f"{from_commit}..{end}"
    return end


def list_revisions(
    repo_path: Path,
    from_commit: Optional[str] = None,
    to_commit: Optional[str] = None,
) -> List[RevisionRecord]:
    """
    List commits of ``repo_path`` in topological order, oldest first.

    Args:
        repo_path: Path to the git repository
        from_commit: Base commit, excluded (None walks from the root)
        to_commit: Last commit to include, None for HEAD

    Returns:
        Ordered list of RevisionRecords

    Raises:
        RevisionError: If the repository or range cannot be read
    """
    repo_path = Path(repo_path)
    rev = revision_range(from_commit, to_commit)

    try:
        repo = Repo(str(repo_path))
    except GitError as e:
        raise RevisionError(f"Not a git repository: {repo_path}: {e}") from e

    try:
        records = [
            RevisionRecord(commit.hexsha, commit.committed_datetime)
            for commit in repo.iter_commits(rev, topo_order=True, reverse=True)
        ]
    except (GitError, ValueError) as e:
        raise RevisionError(f"Failed to read {rev} from {repo_path}: {e}") from e
    finally:
        repo.close()

    logger.info(f"Found {len(records)} revisions in {repo_path} ({rev})")
    return records


def pdf_dir_opener(pdf_dir: Path) -> DocumentOpener:
    """
    Opener for prebuilt PDFs named ``<full hash>.pdf`` in ``pdf_dir``.

    Example:
        >>> open_document = pdf_dir_opener(Path("pdfs"))
        >>> with open_document(rev) as doc:
        ...     doc.page_count
    """
    pdf_dir = Path(pdf_dir)

    def _open(revision: RevisionRecord) -> PdfDocument:
        return open_pdf(pdf_dir / f"{revision.commit_hash}.pdf")

    return _open


class TrackedFileOpener:
    """
    Opener reading a committed PDF straight out of each commit's tree.

    Attributes:
        tracked_path: Repository-relative path of the PDF
    """

    def __init__(self, repo_path: Path, tracked_path: str) -> None:
        self.tracked_path = PurePosixPath(tracked_path).as_posix()
        try:
            self._repo = Repo(str(repo_path))
        except GitError as e:
            raise RevisionError(f"Not a git repository: {repo_path}: {e}") from e

    def __call__(self, revision: RevisionRecord) -> PdfDocument:
        """
        Open the PDF as it was at ``revision``.

        Raises:
            RevisionError: If the commit is unknown or lacks the file
        """
        try:
            tree = self._repo.commit(revision.commit_hash).tree
        except (GitError, ValueError) as e:
            raise RevisionError(f"Unknown commit {revision.commit_hash}: {e}") from e

        try:
            blob = tree / self.tracked_path
        except KeyError as e:
            raise RevisionError(
                f"{self.tracked_path} not present in commit {revision.short_id}"
            ) from e
        if blob.type != "blob":
            raise RevisionError(f"{self.tracked_path} is not a file in commit {revision.short_id}")

        data = blob.data_stream.read()
        return open_pdf_bytes(data, f"{revision.short_id}:{self.tracked_path}")

    def close(self) -> None:
        """Release the repository handle."""
        self._repo.close()
