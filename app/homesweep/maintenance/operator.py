"""Directory deletion operator.

Handles recursive deletion of candidate directories with protected
folder checking and per-path failure isolation.
"""

import logging
import os
import shutil
import stat
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from homesweep.maintenance.protected import is_protected_directory

logger = logging.getLogger(__name__)


def _clear_readonly(func: Callable[[str], object], path: str, exc: BaseException) -> None:
    """rmtree error handler: clear the read-only attribute and retry once.

    Windows refuses to delete read-only files and directories with an
    access-denied error. Other failures, and failures of anything but
    the unlink or rmdir step, are re-raised.
    """
    if not isinstance(exc, PermissionError) or func not in (os.unlink, os.remove, os.rmdir):
        raise exc
    os.chmod(path, stat.S_IWRITE)
    func(path)


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of a single directory deletion.

    Attributes:
        path: Absolute path that was operated on.
        success: Whether the directory was removed.
        error: Error message if the deletion failed, None otherwise.
    """

    path: str
    success: bool
    error: str | None = None


class DirectoryOperator:
    """Deletes directories and everything below them."""

    def delete(self, paths: list[Path]) -> list[DeletionResult]:
        """Delete multiple directories and return results.

        Args:
            paths: Directories to delete.

        Returns:
            List of DeletionResult, one per input path.
        """
        return [self.delete_one(path) for path in paths]

    def delete_one(self, path: Path) -> DeletionResult:
        """Recursively delete a single directory.

        Protected profile folders are refused. Links are refused rather
        than followed. OS errors are returned, not raised.

        Args:
            path: Directory to delete.

        Returns:
            DeletionResult indicating success or failure.
        """
        path_str = str(path)

        if is_protected_directory(path):
            return DeletionResult(
                path=path_str,
                success=False,
                error=f"Protected directory cannot be deleted: {path_str}",
            )

        try:
            if path.is_symlink() or path.is_junction():
                return DeletionResult(
                    path=path_str,
                    success=False,
                    error=f"Refusing to delete link: {path_str}",
                )

            if not path.is_dir():
                return DeletionResult(
                    path=path_str,
                    success=False,
                    error=f"Directory does not exist: {path_str}",
                )

            shutil.rmtree(path, onexc=_clear_readonly)
        except OSError as e:
            logger.warning("Failed to delete %s: %s", path_str, e)
            return DeletionResult(path=path_str, success=False, error=str(e))

        logger.info("Deleted %s", path_str)
        return DeletionResult(path=path_str, success=True)
