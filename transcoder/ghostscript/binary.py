import shutil
import subprocess
from pathlib import Path

from transcoder.ghostscript.exceptions import BinaryNotFoundError, ExternalToolError
from transcoder.logging.logger import Log


def find_binary(candidates: list[str]) -> str:
    """Return the first candidate resolvable on PATH or as an existing file.

    Raises:
        BinaryNotFoundError: if no candidate can be resolved.
    """
    for candidate in candidates:
        resolved = shutil.which(candidate)
        if resolved is not None:
            return resolved
        if Path(candidate).is_file():
            return candidate
    raise BinaryNotFoundError(
        f"Ghostscript binary not found. Tried: {candidates}"
    )


class GhostscriptBinary:
    """Runs the Ghostscript executable with a list of command-line flags."""

    def __init__(self, path: str, timeout_seconds: int | None = None) -> None:
        self._path = path
        self._timeout_seconds = timeout_seconds

    @property
    def path(self) -> str:
        return self._path

    def command(self, flags: list[str]) -> None:
        """Run Ghostscript synchronously.

        Raises:
            ExternalToolError: on non-zero exit, spawn failure or timeout.
        """
        cmd = [self._path, *flags]
        Log.debug(f"Running {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self._timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            raise ExternalToolError(
                f"Ghostscript timed out after {self._timeout_seconds}s"
            ) from exc
        except OSError as exc:
            raise ExternalToolError(f"Ghostscript could not be started: {exc}") from exc

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            Log.error(f"Ghostscript exited with code {result.returncode}: {stderr}")
            raise ExternalToolError(
                f"Ghostscript exited with code {result.returncode}",
                exit_code=result.returncode,
                stderr=stderr,
            )
