"""
Module: documents.pdf

Purpose:
    PDF decoding and page rasterisation. Opens one revision of the
    document, reports its page count and page size, and renders pages
    to RGBA images at a given scale.

Key Functions:
    - open_pdf(): Open a PDF from disk
    - open_pdf_bytes(): Open a PDF from an in-memory blob

Key Classes:
    - PdfDocument: Owner of the underlying fitz.Document
    - PdfPage: Borrowed view of one page
    - DocumentError: Exception for decode failures

Dependencies:
    - fitz (PyMuPDF): PDF access and rendering
    - PIL.Image: Image handling

Used By:
    - history.sequencer: Scan and render passes
    - output.renderer: Page rasterisation (through PdfPage)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import fitz
from PIL import Image

from dochistory_toolkit.layout.models import PageDimensions

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Error opening or reading a PDF document."""
    pass


class PdfPage:
    """
    One page of an open PdfDocument.

    The page is borrowed from its document: it is only valid while the
    document is open and is never closed on its own.

    Example:
        >>> with open_pdf(Path("paper.pdf")) as doc:
        ...     img = doc.page(0).rasterize(0.5)
    """

    def __init__(self, page: fitz.Page, index: int) -> None:
        self._page = page
        self.index = index

    @property
    def dimensions(self) -> PageDimensions:
        """Unscaled page size in PDF points."""
        rect = self._page.rect
        return PageDimensions(rect.width, rect.height)

    def rasterize(self, scale: float) -> Image.Image:
        """
        Render the page at ``scale`` to an RGBA image.

        Areas the page does not paint stay transparent.

        Args:
            scale: Pixels per PDF point

        Returns:
            RGBA PIL Image

        Raises:
            DocumentError: If PyMuPDF fails to render the page
        """
        matrix = fitz.Matrix(scale, scale)
        try:
            pix = self._page.get_pixmap(matrix=matrix, colorspace=fitz.csRGB, alpha=True)
        except (RuntimeError, ValueError) as e:
            raise DocumentError(f"Failed to render page {self.index}: {e}") from e
        return Image.frombytes("RGBA", (pix.width, pix.height), pix.samples)


class PdfDocument:
    """
    An open PDF, the single owner of its pages.

    Use as a context manager so the document is closed even when a frame
    fails half way through.

    Attributes:
        name: Human readable source (path or revision id), for messages
    """

    def __init__(self, document: fitz.Document, name: str) -> None:
        self._document = document
        self.name = name

    def __enter__(self) -> "PdfDocument":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying document."""
        self._document.close()

    @property
    def page_count(self) -> int:
        """Number of pages."""
        return self._document.page_count

    def page(self, index: int) -> PdfPage:
        """
        Borrow page ``index``.

        Raises:
            DocumentError: If index is out of range
        """
        if index < 0 or index >= self.page_count:
            raise DocumentError(
                f"{self.name}: page {index} out of range (document has {self.page_count} pages)"
            )
        return PdfPage(self._document[index], index)

    def pages(self) -> List[PdfPage]:
        """All pages in native order."""
        return [self.page(i) for i in range(self.page_count)]

    def page_dimensions(self) -> PageDimensions:
        """
        Size of the first page, taken as the size of every page.

        Raises:
            DocumentError: If the document has no pages
        """
        self.require_pages()
        return self.page(0).dimensions

    def require_pages(self) -> int:
        """
        Return the page count, failing on an empty document.

        Raises:
            DocumentError: If the document has no pages
        """
        count = self.page_count
        if count < 1:
            raise DocumentError(f"{self.name}: document has no pages")
        return count


def open_pdf(path: Path) -> PdfDocument:
    """
    Open a PDF file.

    Args:
        path: Path to the PDF

    Returns:
        Open PdfDocument (caller closes it)

    Raises:
        DocumentError: If the file is missing or is not a readable PDF

    Example:
        >>> with open_pdf(Path("0a1b2c3.pdf")) as doc:
        ...     doc.page_count
        12
    """
    path = Path(path)
    if not path.is_file():
        raise DocumentError(f"PDF not found: {path}")

    try:
        document = fitz.open(path.as_posix())
    except (RuntimeError, ValueError, OSError) as e:
        raise DocumentError(f"Failed to open {path}: {e}") from e

    if not document.is_pdf:
        document.close()
        raise DocumentError(f"Not a PDF: {path}")

    logger.debug(f"Opened {path} ({document.page_count} pages)")
    return PdfDocument(document, path.name)


def open_pdf_bytes(data: bytes, name: str) -> PdfDocument:
    """
    Open a PDF held in memory, e.g. a blob read from a git commit.

    Args:
        data: Raw PDF bytes
        name: Label used in log and error messages

    Returns:
        Open PdfDocument (caller closes it)

    Raises:
        DocumentError: If the bytes are not a readable PDF
    """
    if not data:
        raise DocumentError(f"{name}: empty PDF data")

    try:
        document = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise DocumentError(f"Failed to open {name}: {e}") from e

    logger.debug(f"Opened {name} from memory ({document.page_count} pages)")
    return PdfDocument(document, name)
