import tempfile
from collections.abc import Iterator
from pathlib import Path

from transcoder.ghostscript.binary import GhostscriptBinary
from transcoder.ghostscript.exceptions import (
    ExternalToolError,
    ExtractionIOError,
    PageFileMissingError,
)
from transcoder.logging.logger import Log
from transcoder.text.models import ExtractionRequest, PageRange
from transcoder.text.page_counter import PageCounter
from transcoder.text.page_files import PageFileSet
from transcoder.text.sanitizer import clean_page_text


class TextExtractor:
    """Extracts per-page text from a document with the Ghostscript txtwrite device.

    Ghostscript writes one file per rendered page into a uniquely named temp
    file sequence. The files are then read in page order, cleaned and deleted.
    """

    def __init__(
        self,
        binary: GhostscriptBinary,
        page_counter: PageCounter | None = None,
        temp_dir: Path | None = None,
        max_pages: int = 10000,
    ) -> None:
        self._binary = binary
        self._page_counter = page_counter if page_counter is not None else PageCounter()
        self._temp_dir = temp_dir if temp_dir is not None else Path(tempfile.gettempdir())
        self._max_pages = max_pages

    def extract(
        self,
        input_path: str | Path,
        page_start: int = 0,
        page_count: int = 0,
    ) -> list[str]:
        """Return the cleaned text of each page, in page order.

        Both page_start and page_count set to 0 selects every page.

        Raises:
            InvalidPageRangeError: if the page range is inconsistent.
            ExternalToolError: if Ghostscript fails.
            PageFileMissingError: if an expected page file is missing.
        """
        request = ExtractionRequest(Path(input_path), page_start, page_count)
        page_range = request.page_range()
        files = PageFileSet(self._temp_dir)

        try:
            self._binary.command(self._render_flags(request, page_range, files))
        except ExternalToolError as exc:
            files.purge()
            raise ExternalToolError(
                "Ghostscript was unable to extract text from PDF",
                exit_code=exc.exit_code,
                stderr=exc.stderr,
            ) from exc

        try:
            produced = self._resolve_page_total(request, page_range, files)
            pages = list(self._iter_pages(files, produced))
        finally:
            files.purge()

        Log.info(f"Extracted text of {len(pages)} pages from {request.input_path}")
        return pages

    def _render_flags(
        self,
        request: ExtractionRequest,
        page_range: PageRange | None,
        files: PageFileSet,
    ) -> list[str]:
        flags = ["-sDEVICE=txtwrite", "-dNOPAUSE", "-dBATCH"]
        if page_range is not None:
            flags.append(f"-dFirstPage={page_range.first}")
            if page_range.last is not None:
                flags.append(f"-dLastPage={page_range.last}")
        flags.append(f"-sOutputFile={files.output_pattern}")
        flags.append(str(request.input_path))
        return flags

    def _resolve_page_total(
        self,
        request: ExtractionRequest,
        page_range: PageRange | None,
        files: PageFileSet,
    ) -> int:
        """Number of page files to read; output files are always numbered from 1."""
        if page_range is not None and page_range.count is not None:
            return page_range.count
        limit = self._discovery_limit(request.input_path, page_range)
        produced = files.discover(limit)
        Log.info(f"Discovered {produced} page files for {request.input_path}")
        return produced

    def _discovery_limit(self, input_path: Path, page_range: PageRange | None) -> int:
        total = self._page_counter.count(input_path)
        if total is None:
            return self._max_pages
        first = page_range.first if page_range is not None else 1
        return max(total - first + 1, 0)

    def _iter_pages(self, files: PageFileSet, total: int) -> Iterator[str]:
        for page in range(1, total + 1):
            yield self._read_page(files, page)

    def _read_page(self, files: PageFileSet, page: int) -> str:
        path = files.path(page)
        try:
            raw = files.read(page)
        except FileNotFoundError as exc:
            raise PageFileMissingError(f"Page file {path} is missing") from exc
        except OSError as exc:
            raise ExtractionIOError(f"Page file {path} could not be read: {exc}") from exc
        finally:
            files.discard(page)
        return clean_page_text(raw)
