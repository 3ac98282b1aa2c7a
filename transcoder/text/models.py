from dataclasses import dataclass
from pathlib import Path

from transcoder.ghostscript.exceptions import InvalidPageRangeError


@dataclass(frozen=True)
class PageRange:
    """1-based inclusive range of document pages. last=None means end of document."""

    first: int
    last: int | None = None

    @property
    def count(self) -> int | None:
        if self.last is None:
            return None
        return self.last - self.first + 1


@dataclass(frozen=True)
class ExtractionRequest:
    """Input of a text extraction call. Zero means unset."""

    input_path: Path
    page_start: int = 0
    page_count: int = 0

    def page_range(self) -> PageRange | None:
        """Resolve the requested page range.

        Returns:
            None when both values are unset (all pages), otherwise the range.

        Raises:
            InvalidPageRangeError: if the values are negative or page_count is
                set without page_start.
        """
        if self.page_start < 0 or self.page_count < 0:
            raise InvalidPageRangeError(
                f"Page range must not be negative: start={self.page_start}, "
                f"count={self.page_count}"
            )
        if self.page_start == 0 and self.page_count == 0:
            return None
        if self.page_start == 0:
            raise InvalidPageRangeError(
                f"page_count={self.page_count} requires a positive page_start"
            )
        if self.page_count == 0:
            return PageRange(first=self.page_start)
        return PageRange(
            first=self.page_start,
            last=self.page_start + self.page_count - 1,
        )
