from collections.abc import Callable
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def _write_pdf(path: Path, page_texts: list[str]) -> Path:
    c = canvas.Canvas(str(path), pagesize=letter)
    for text in page_texts:
        if text:
            c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return path


@pytest.fixture()
def make_pdf(tmp_path: Path) -> Callable[[list[str]], Path]:
    """Factory writing a PDF with one page per given string."""
    docs_dir = tmp_path / "docs"
    docs_dir.mkdir()

    def _make(page_texts: list[str], name: str = "doc.pdf") -> Path:
        return _write_pdf(docs_dir / name, page_texts)

    return _make


@pytest.fixture()
def sample_pdf_path(make_pdf: Callable[..., Path]) -> Path:
    """A single-page PDF with known text content."""
    return make_pdf(["Hello PDF World"], name="sample.pdf")


@pytest.fixture()
def multi_page_pdf_path(make_pdf: Callable[..., Path]) -> Path:
    """A two-page PDF with known text on each page."""
    return make_pdf(["Page one content", "Page two content"], name="multi.pdf")


@pytest.fixture()
def scratch_dir(tmp_path: Path) -> Path:
    """Isolated temp directory for per-page output files."""
    path = tmp_path / "scratch"
    path.mkdir()
    return path
