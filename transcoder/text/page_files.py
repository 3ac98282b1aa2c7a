import uuid
from collections.abc import Iterator
from pathlib import Path

from transcoder.logging.logger import Log


class PageFileSet:
    """Per-page output files written by Ghostscript for one extraction call.

    File N (1-based) lives at ``<temp_dir>/<prefix>N``. The prefix carries a
    uuid4 so concurrent calls never share files.
    """

    PREFIX = "gs-text-"

    def __init__(self, temp_dir: Path, token: str | None = None) -> None:
        self._temp_dir = temp_dir
        self._name_prefix = f"{self.PREFIX}{token or uuid.uuid4()}-"

    @property
    def output_pattern(self) -> str:
        """Value for -sOutputFile; Ghostscript substitutes %d with the page number.

        Literal percent signs in the directory are doubled so Ghostscript does
        not read them as format directives.
        """
        prefix = str(self._temp_dir / self._name_prefix).replace("%", "%%")
        return f"{prefix}%d"

    def path(self, page: int) -> Path:
        return self._temp_dir / f"{self._name_prefix}{page}"

    def exists(self, page: int) -> bool:
        return self.path(page).is_file()

    def discover(self, limit: int) -> int:
        """Count consecutive page files starting at 1, probing at most `limit` pages."""
        produced = 0
        while produced < limit and self.exists(produced + 1):
            produced += 1
        return produced

    def read(self, page: int) -> bytes:
        return self.path(page).read_bytes()

    def discard(self, page: int) -> None:
        """Delete one page file; failures are logged, never raised."""
        path = self.path(page)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            Log.warning(f"Could not delete temp page file {path}: {exc}")

    def leftovers(self) -> Iterator[Path]:
        return self._temp_dir.glob(f"{self._name_prefix}*")

    def purge(self) -> None:
        """Delete every file of this set that still exists."""
        for path in list(self.leftovers()):
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                Log.warning(f"Could not delete temp page file {path}: {exc}")
