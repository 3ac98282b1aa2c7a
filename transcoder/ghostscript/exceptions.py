class TranscoderError(Exception):
    """Base exception for all Ghostscript transcoding errors."""


class BinaryNotFoundError(TranscoderError):
    """Raised when none of the configured Ghostscript binaries can be found."""


class ExternalToolError(TranscoderError):
    """Raised when the Ghostscript invocation fails or exits non-zero."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


class OutputMissingError(TranscoderError):
    """Raised when Ghostscript reports success but the output file is absent or empty."""


class ExtractionIOError(TranscoderError, OSError):
    """Base exception for I/O failures during text extraction."""


class PageFileMissingError(ExtractionIOError):
    """Raised when an expected per-page text file does not exist."""


class InvalidPageRangeError(ExtractionIOError):
    """Raised when page_start/page_count do not describe a valid page range."""
