from pathlib import Path

import pymupdf

from transcoder.logging.logger import Log


class PageCounter:
    """Counts document pages with PyMuPDF, without rendering them."""

    def count(self, input_path: Path) -> int | None:
        """Return the page count, or None if the document cannot be opened."""
        try:
            with pymupdf.open(input_path) as doc:  # type: ignore[no-untyped-call]
                return int(doc.page_count)
        except Exception as exc:
            Log.debug(f"Page count unavailable for {input_path}: {exc}")
            return None
