import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import dochistory_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


class FakePage:
    """Page stand-in: fixed size, rasterises to a solid color."""

    def __init__(self, width=100.0, height=100.0, color=(255, 0, 0, 255), raster_size=None):
        from dochistory_toolkit.layout.models import PageDimensions

        self._dims = PageDimensions(width, height)
        self.color = color
        self.raster_size = raster_size
        self.rasterized_at = []

    @property
    def dimensions(self):
        return self._dims

    def rasterize(self, scale):
        self.rasterized_at.append(scale)
        size = self.raster_size or (
            max(1, round(self._dims.width * scale)),
            max(1, round(self._dims.height * scale)),
        )
        return Image.new("RGBA", size, self.color)


class FakeDocument:
    """Document stand-in tracking whether it was closed."""

    def __init__(self, name, page_count, width=100.0, height=140.0, fail_render=False):
        self.name = name
        self.page_count = page_count
        self.width = width
        self.height = height
        self.fail_render = fail_render
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True

    def require_pages(self):
        from dochistory_toolkit.documents.pdf import DocumentError

        if self.page_count < 1:
            raise DocumentError(f"{self.name}: document has no pages")
        return self.page_count

    def page_dimensions(self):
        from dochistory_toolkit.layout.models import PageDimensions

        self.require_pages()
        return PageDimensions(self.width, self.height)

    def pages(self):
        if self.fail_render:
            from dochistory_toolkit.documents.pdf import DocumentError

            raise DocumentError(f"{self.name}: broken page stream")
        return [FakePage(self.width, self.height) for _ in range(self.page_count)]


class FakeHistory:
    """Revisions with page counts, plus an opener that records every open."""

    def __init__(self, page_counts, fail_render_at=None):
        from datetime import datetime, timedelta, timezone
        from dochistory_toolkit.history.revisions import RevisionRecord

        start = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.revisions = [
            RevisionRecord(f"{i:02d}" + "ab" * 19, start + timedelta(days=i))
            for i in range(len(page_counts))
        ]
        self.page_counts = dict(zip((r.commit_hash for r in self.revisions), page_counts))
        self.fail_render_at = fail_render_at
        self.opened = []

    def __call__(self, revision):
        index = self.revisions.index(revision)
        doc = FakeDocument(
            revision.short_id,
            self.page_counts[revision.commit_hash],
            fail_render=(index == self.fail_render_at),
        )
        self.opened.append(doc)
        return doc


# Common test fixtures
@pytest.fixture
def fake_page():
    """Factory for fake pages."""
    return FakePage


@pytest.fixture
def fake_history():
    """Factory for fake revision histories."""
    return FakeHistory


@pytest.fixture
def make_pdf(tmp_path: Path):
    """Create a PDF with red squares in the top-left corner of each page."""
    import fitz

    def _make(name="doc.pdf", pages=1, width=200, height=300):
        doc = fitz.open()
        for _ in range(pages):
            page = doc.new_page(width=width, height=height)
            page.draw_rect(fitz.Rect(10, 10, 50, 50), color=(1, 0, 0), fill=(1, 0, 0))
        path = tmp_path / name
        doc.save(path.as_posix())
        doc.close()
        return path

    return _make
