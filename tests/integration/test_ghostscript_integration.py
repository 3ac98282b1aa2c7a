import shutil
from collections.abc import Callable
from pathlib import Path

import pytest

from transcoder.config.settings import Settings
from transcoder.ghostscript.exceptions import ExternalToolError
from transcoder.ghostscript.factory import TranscoderFactory
from transcoder.ghostscript.transcoder import Transcoder

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(shutil.which("gs") is None, reason="Ghostscript is not installed"),
]


@pytest.fixture()
def transcoder(scratch_dir: Path) -> Transcoder:
    return TranscoderFactory.create(Settings(temp_dir=scratch_dir))


@pytest.fixture()
def long_pdf_path(make_pdf: Callable[..., Path]) -> Path:
    return make_pdf([f"Page {n} of the sample" for n in range(1, 91)], name="long.pdf")


class TestExtractText:
    def test_extracts_every_page(self, transcoder: Transcoder, long_pdf_path: Path) -> None:
        pages = transcoder.extract_text(long_pdf_path)

        assert len(pages) == 90
        assert "Page 1 of the sample" in pages[0]
        assert "Page 90 of the sample" in pages[89]

    def test_single_page_range(self, transcoder: Transcoder, long_pdf_path: Path) -> None:
        pages = transcoder.extract_text(long_pdf_path, page_start=1, page_count=1)

        assert len(pages) == 1
        assert "Page 1 of the sample" in pages[0]

    def test_range_in_the_middle(self, transcoder: Transcoder, long_pdf_path: Path) -> None:
        pages = transcoder.extract_text(long_pdf_path, page_start=10, page_count=3)

        assert len(pages) == 3
        assert "Page 10 of the sample" in pages[0]
        assert "Page 12 of the sample" in pages[2]

    def test_repeated_calls_are_identical_and_clean(
        self,
        transcoder: Transcoder,
        multi_page_pdf_path: Path,
        scratch_dir: Path,
    ) -> None:
        first = transcoder.extract_text(multi_page_pdf_path)
        assert list(scratch_dir.iterdir()) == []

        second = transcoder.extract_text(multi_page_pdf_path)
        assert list(scratch_dir.iterdir()) == []

        assert first == second
        assert "Page one content" in first[0]

    def test_invalid_document_raises_tool_error(
        self,
        transcoder: Transcoder,
        tmp_path: Path,
        scratch_dir: Path,
    ) -> None:
        broken = tmp_path / "broken.pdf"
        broken.write_bytes(b"this is not a document")

        with pytest.raises(ExternalToolError) as exc_info:
            transcoder.extract_text(broken)

        assert exc_info.value.exit_code not in (None, 0)
        assert list(scratch_dir.iterdir()) == []


class TestConversions:
    def test_to_pdf(self, transcoder: Transcoder, long_pdf_path: Path, tmp_path: Path) -> None:
        destination = tmp_path / "range.pdf"

        transcoder.to_pdf(long_pdf_path, destination, 1, 1)

        assert destination.stat().st_size > 0

    def test_to_image(self, transcoder: Transcoder, sample_pdf_path: Path, tmp_path: Path) -> None:
        destination = tmp_path / "page.jpg"

        transcoder.to_image(sample_pdf_path, destination)

        assert destination.stat().st_size > 0

    def test_to_images(
        self, transcoder: Transcoder, multi_page_pdf_path: Path, tmp_path: Path
    ) -> None:
        first = transcoder.to_images(multi_page_pdf_path, tmp_path / "page-%d.jpg")

        assert first == tmp_path / "page-1.jpg"
        assert (tmp_path / "page-2.jpg").stat().st_size > 0

    def test_add_bookmarks(
        self, transcoder: Transcoder, multi_page_pdf_path: Path, tmp_path: Path
    ) -> None:
        bookmarks = tmp_path / "bookmarks"
        bookmarks.write_text(
            "[/Title (First) /Page 1 /OUT pdfmark\n[/Title (Second) /Page 2 /OUT pdfmark\n"
        )
        output = tmp_path / "bookmarked.pdf"

        transcoder.add_bookmarks(multi_page_pdf_path, output, bookmarks)

        assert output.stat().st_size > 0

    def test_optimize_pdf(
        self, transcoder: Transcoder, multi_page_pdf_path: Path, tmp_path: Path
    ) -> None:
        destination = tmp_path / "optimized.pdf"

        transcoder.optimize_pdf(multi_page_pdf_path, destination, "screen")

        assert destination.stat().st_size > 0
