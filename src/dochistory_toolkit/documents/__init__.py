"""
Module: documents

Purpose:
    Document decoding collaborators (PDF via PyMuPDF).

Key Functions:
    - open_pdf(): Open a PDF on disk
    - open_pdf_bytes(): Open a PDF from bytes

Key Classes:
    - PdfDocument: Open document
    - PdfPage: Borrowed page view
    - DocumentError: Decode failure
"""

from .pdf import DocumentError, PdfDocument, PdfPage, open_pdf, open_pdf_bytes

__all__ = [
    "DocumentError",
    "PdfDocument",
    "PdfPage",
    "open_pdf",
    "open_pdf_bytes",
]
