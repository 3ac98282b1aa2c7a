from transcoder.config.settings import Settings
from transcoder.ghostscript.binary import GhostscriptBinary, find_binary
from transcoder.ghostscript.transcoder import Transcoder
from transcoder.text.extractor import TextExtractor
from transcoder.text.page_counter import PageCounter


class TranscoderFactory:
    """Creates a Transcoder wired to the configured Ghostscript binary."""

    @classmethod
    def create(cls, settings: Settings) -> Transcoder:
        binary = GhostscriptBinary(
            find_binary(settings.gs_binaries),
            timeout_seconds=settings.gs_timeout_seconds,
        )
        text_extractor = TextExtractor(
            binary,
            page_counter=PageCounter(),
            temp_dir=settings.temp_dir,
            max_pages=settings.max_pages,
        )
        return Transcoder(
            binary,
            text_extractor,
            jpeg_quality=settings.jpeg_quality,
            image_resolution=settings.image_resolution,
        )
