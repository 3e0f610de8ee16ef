"""
Tracks every temporary file and directory a run creates so they can all be
removed once the run ends, whichever way it ends.
"""

from pathlib import Path
import shutil

from media_transcriber.errors import CleanupError
from media_transcriber.logger import log_info, log_warning


class TempResourceTracker:
    """
    Accumulates temporary paths and removes them on `cleanup_all`.

    Can be used as a context manager, in which case cleanup runs on exit
    whether or not the block raised.
    """

    def __init__(self):
        self._paths: list[Path] = []

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def track(self, path: Path | str) -> Path:
        """Registers a path for removal and returns it."""
        path = Path(path)
        if path not in self._paths:
            self._paths.append(path)
        return path

    def cleanup_all(self) -> list[CleanupError]:
        """
        Removes every tracked path, newest first.

        Removal is best effort: a path that cannot be removed is logged and
        reported in the returned list, and the remaining paths are still
        processed. Calling this again after it has run is a no-op.

        Returns:
            The errors for paths that could not be removed
        """
        errors: list[CleanupError] = []
        while self._paths:
            path = self._paths.pop()
            try:
                if path.is_dir():
                    shutil.rmtree(path)
                    log_info(f"Cleaned up temporary directory: {path}")
                elif path.exists():
                    path.unlink()
                    log_info(f"Cleaned up temporary file: {path}")
            except OSError as e:
                error = CleanupError(path, str(e))
                log_warning(str(error))
                errors.append(error)
        return errors

    def __enter__(self) -> "TempResourceTracker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup_all()
