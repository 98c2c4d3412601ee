"""
Tests for documents.pdf using small PDFs generated with PyMuPDF.
"""

import pytest
from unittest.mock import Mock
from PIL import Image

from dochistory_toolkit.documents.pdf import (
    DocumentError,
    PdfDocument,
    PdfPage,
    open_pdf,
    open_pdf_bytes,
)
from dochistory_toolkit.layout import PageDimensions


class TestOpenPdf:
    """Tests for open_pdf() and PdfDocument."""

    def test_open_pdf_when_valid_then_reports_pages_and_size(self, make_pdf):
        # Arrange
        path = make_pdf(pages=3, width=200, height=300)

        # Act
        with open_pdf(path) as doc:
            count = doc.require_pages()
            dims = doc.page_dimensions()
            pages = doc.pages()

        # Assert
        assert count == 3
        assert dims == PageDimensions(200, 300)
        assert [p.index for p in pages] == [0, 1, 2]

    def test_open_pdf_when_missing_then_raises(self, tmp_path):
        with pytest.raises(DocumentError, match="not found"):
            open_pdf(tmp_path / "missing.pdf")

    def test_open_pdf_when_not_a_pdf_then_raises(self, tmp_path):
        # Arrange
        path = tmp_path / "notes.pdf"
        path.write_bytes(b"this is not a pdf at all")

        # Act & Assert
        with pytest.raises(DocumentError):
            open_pdf(path)

    def test_page_when_out_of_range_then_raises(self, make_pdf):
        with open_pdf(make_pdf(pages=1)) as doc:
            with pytest.raises(DocumentError, match="out of range"):
                doc.page(1)

    def test_document_closed_after_with_block(self):
        fitz_doc = Mock()
        fitz_doc.page_count = 1

        with PdfDocument(fitz_doc, "mock.pdf"):
            pass

        fitz_doc.close.assert_called_once_with()

    def test_require_pages_when_empty_then_raises(self):
        fitz_doc = Mock()
        fitz_doc.page_count = 0
        doc = PdfDocument(fitz_doc, "empty.pdf")

        with pytest.raises(DocumentError, match="no pages"):
            doc.require_pages()
        with pytest.raises(DocumentError, match="no pages"):
            doc.page_dimensions()


class TestOpenPdfBytes:

    def test_open_pdf_bytes_when_valid_then_opens(self, make_pdf):
        data = make_pdf(pages=2).read_bytes()

        with open_pdf_bytes(data, "abc1234:doc.pdf") as doc:
            assert doc.page_count == 2
            assert doc.name == "abc1234:doc.pdf"

    def test_open_pdf_bytes_when_empty_then_raises(self):
        with pytest.raises(DocumentError, match="empty"):
            open_pdf_bytes(b"", "abc1234:doc.pdf")

    def test_open_pdf_bytes_when_garbage_then_raises(self):
        with pytest.raises(DocumentError):
            open_pdf_bytes(b"%PDF-garbage", "abc1234:doc.pdf")


class TestRasterize:

    def test_rasterize_when_scaled_then_rgba_of_scaled_size(self, make_pdf):
        # Arrange
        path = make_pdf(pages=1, width=200, height=300)

        # Act
        with open_pdf(path) as doc:
            image = doc.page(0).rasterize(0.5)

        # Assert
        assert isinstance(image, Image.Image)
        assert image.mode == "RGBA"
        assert image.size == (100, 150)
        red, green, blue, alpha = image.getpixel((15, 15))
        assert red > 200 and green < 50 and blue < 50 and alpha == 255
        assert image.getpixel((90, 140))[3] == 0

    def test_rasterize_uses_scale_matrix(self):
        # Arrange
        mock_page = Mock()
        mock_pixmap = Mock()
        mock_pixmap.width = 2
        mock_pixmap.height = 1
        mock_pixmap.samples = bytes([255, 0, 0, 255, 0, 0, 0, 0])
        mock_page.get_pixmap.return_value = mock_pixmap

        # Act
        image = PdfPage(mock_page, 0).rasterize(1.5)

        # Assert
        matrix = mock_page.get_pixmap.call_args.kwargs["matrix"]
        assert (matrix.a, matrix.d) == (1.5, 1.5)
        assert mock_page.get_pixmap.call_args.kwargs["alpha"] is True
        assert image.getpixel((0, 0)) == (255, 0, 0, 255)
        assert image.getpixel((1, 0))[3] == 0

    def test_rasterize_when_mupdf_fails_then_raises(self):
        mock_page = Mock()
        mock_page.get_pixmap.side_effect = RuntimeError("broken content stream")

        with pytest.raises(DocumentError, match="page 3"):
            PdfPage(mock_page, 3).rasterize(1.0)
