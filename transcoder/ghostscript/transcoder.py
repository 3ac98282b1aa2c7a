import re
from pathlib import Path
from typing import ClassVar

from transcoder.ghostscript.binary import GhostscriptBinary
from transcoder.ghostscript.exceptions import ExternalToolError, OutputMissingError
from transcoder.logging.logger import Log
from transcoder.text.extractor import TextExtractor

_OUTPUT_TEMPLATE_RE = re.compile(r"%%|%(0?\d*)d")


def _first_output(destination: str | Path) -> Path:
    """Resolve a %d / %0Nd output template to the file written for page 1.

    A doubled %% stands for a literal percent sign, as in Ghostscript.
    """

    def _expand(match: re.Match[str]) -> str:
        if match.group(0) == "%%":
            return "%"
        return f"%{match.group(1)}d" % 1

    return Path(_OUTPUT_TEMPLATE_RE.sub(_expand, str(destination)))


class Transcoder:
    """Converts PDF documents by shelling out to Ghostscript."""

    PDF_QUALITIES: ClassVar[tuple[str, ...]] = (
        "screen",
        "ebook",
        "printer",
        "prepress",
        "default",
    )

    def __init__(
        self,
        binary: GhostscriptBinary,
        text_extractor: TextExtractor,
        jpeg_quality: int = 75,
        image_resolution: int = 300,
    ) -> None:
        self._binary = binary
        self._text_extractor = text_extractor
        self._jpeg_quality = jpeg_quality
        self._image_resolution = image_resolution

    def to_images(
        self,
        input_path: str | Path,
        destination: str | Path,
        num_pages: int = 0,
    ) -> Path:
        """Render pages to JPEG files.

        Args:
            input_path: The path to the input document.
            destination: Output path, usually containing a %d page placeholder.
            num_pages: Render only the first num_pages pages; 0 renders all.

        Returns:
            The path of the first rendered page.
        """
        flags = self._jpeg_flags(destination, input_path)
        if num_pages > 0:
            flags = ["-dFirstPage=1", f"-dLastPage={num_pages}", *flags]
        self._run(flags, "Ghostscript was unable to transcode to Image")
        return self._ensure_output(
            _first_output(destination), "Ghostscript was unable to transcode to Image"
        )

    def to_image(
        self,
        input_path: str | Path,
        destination: str | Path,
        page_num: int = 1,
    ) -> Path:
        """Render a single page to a JPEG file."""
        if page_num < 1:
            raise ValueError(f"page_num must be positive, got {page_num}")
        flags = self._jpeg_flags(destination, input_path)
        flags[-1:-1] = [f"-dFirstPage={page_num}", f"-dLastPage={page_num}"]
        self._run(flags, "Ghostscript was unable to transcode to Image")
        return self._ensure_output(
            _first_output(destination), "Ghostscript was unable to transcode to Image"
        )

    def add_bookmarks(
        self,
        input_path: str | Path,
        output_path: str | Path,
        bookmarks_path: str | Path,
    ) -> Path:
        """Write a copy of the PDF with pdfmark bookmarks applied."""
        self._run(
            [
                "-dBATCH",
                "-dNOPAUSE",
                "-sDEVICE=pdfwrite",
                f"-sOutputFile={output_path}",
                str(input_path),
                str(bookmarks_path),
            ],
            "Ghostscript was unable to add bookmarks",
        )
        return self._ensure_output(Path(output_path), "Ghostscript was unable to add bookmarks")

    def optimize_pdf(
        self,
        input_path: str | Path,
        destination: str | Path,
        quality: str = "ebook",
    ) -> Path:
        """Rewrite a PDF with one of the Ghostscript PDFSETTINGS presets."""
        if quality not in self.PDF_QUALITIES:
            raise ValueError(
                f"Unknown PDF quality '{quality}'. Choose from: {list(self.PDF_QUALITIES)}"
            )
        self._run(
            [
                "-sDEVICE=pdfwrite",
                "-dCompatibilityLevel=1.4",
                f"-dPDFSETTINGS=/{quality}",
                "-dNOPAUSE",
                "-dBATCH",
                "-dQUIET",
                "-dColorConversionStrategy=/sRGB",
                "-dProcessColorModel=/DeviceRGB",
                "-dColorConversionStrategyForImages=/DeviceRGB",
                f"-sOutputFile={destination}",
                str(input_path),
            ],
            "Ghostscript was unable to optimize PDF",
        )
        return self._ensure_output(Path(destination), "Ghostscript was unable to optimize PDF")

    def to_pdf(
        self,
        input_path: str | Path,
        destination: str | Path,
        page_start: int,
        page_quantity: int,
    ) -> Path:
        """Copy a page range of a document into a new PDF.

        Args:
            input_path: The path to the input document.
            destination: The path to the output PDF.
            page_start: The number of the first page (1-based).
            page_quantity: The number of pages to include.
        """
        if page_start < 1 or page_quantity < 1:
            raise ValueError(
                f"Invalid page range: start={page_start}, quantity={page_quantity}"
            )
        self._run(
            [
                "-sDEVICE=pdfwrite",
                "-dNOPAUSE",
                "-dBATCH",
                "-dSAFER",
                f"-dFirstPage={page_start}",
                f"-dLastPage={page_start + page_quantity - 1}",
                f"-sOutputFile={destination}",
                str(input_path),
            ],
            "Ghostscript was unable to transcode to PDF",
        )
        return self._ensure_output(Path(destination), "Ghostscript was unable to transcode to PDF")

    def extract_text(
        self,
        input_path: str | Path,
        page_start: int = 0,
        page_count: int = 0,
    ) -> list[str]:
        """Extract cleaned text per page. See TextExtractor.extract."""
        return self._text_extractor.extract(input_path, page_start, page_count)

    def _jpeg_flags(self, destination: str | Path, input_path: str | Path) -> list[str]:
        return [
            "-sDEVICE=jpeg",
            "-dNOPAUSE",
            "-dBATCH",
            "-dSAFER",
            f"-dJPEGQ={self._jpeg_quality}",
            f"-r{self._image_resolution}x{self._image_resolution}",
            f"-sOutputFile={destination}",
            str(input_path),
        ]

    def _run(self, flags: list[str], failure_message: str) -> None:
        try:
            self._binary.command(flags)
        except ExternalToolError as exc:
            raise ExternalToolError(
                failure_message,
                exit_code=exc.exit_code,
                stderr=exc.stderr,
            ) from exc

    def _ensure_output(self, path: Path, failure_message: str) -> Path:
        if not path.is_file() or path.stat().st_size == 0:
            Log.error(f"{failure_message}: no output at {path}")
            raise OutputMissingError(f"{failure_message}: no output at {path}")
        return path
