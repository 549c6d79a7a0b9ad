"""
Filesystem helpers used by the transfer workflow.

Small, idempotent wrappers around pathlib/shutil: directory creation,
forced file removal and scoped temporary directories.
"""

import logging
import os
import shutil
import sys
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from provisionkit.core.exceptions import ProvisionKitError

logger = logging.getLogger(__name__)

IS_WINDOWS = sys.platform == "win32"


class FilesystemError(ProvisionKitError):
    """Exception raised for filesystem operation failures."""

    pass


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists (idempotent).

    Args:
        path: Directory path

    Returns:
        Path object (resolved)
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path.resolve()


def remove_file(path: Union[str, Path]) -> None:
    """
    Remove a file, ignoring a missing one.

    Raises:
        FilesystemError: If the file exists but cannot be removed
    """
    path = Path(path)
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise FilesystemError(f"Failed to remove file '{path}': {e}") from e


def safe_rmtree(path: Union[str, Path]) -> None:
    """
    Remove a directory tree, clearing read-only flags on Windows.

    A missing path is ignored.

    Raises:
        FilesystemError: If path is not a directory or deletion fails
    """
    path = Path(path).resolve()

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        if IS_WINDOWS:

            def handle_remove_readonly(func, path, exc):
                """Error handler for Windows read-only files."""
                if not os.access(path, os.W_OK):
                    os.chmod(path, 0o777)
                    func(path)
                else:
                    raise

            shutil.rmtree(path, onerror=handle_remove_readonly)
        else:
            shutil.rmtree(path)

    except Exception as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


@contextmanager
def temporary_directory(prefix: str = "provisionkit_") -> Iterator[Path]:
    """
    Context manager for temporary directory with automatic cleanup.

    The directory is removed on every exit path, including exceptions. A
    cleanup failure is logged and never replaces an exception raised in the
    body.

    Example:
        >>> with temporary_directory() as tmp:
        ...     (tmp / 'download.tar.gz').write_bytes(b'...')
    """
    temp_dir = Path(tempfile.mkdtemp(prefix=prefix))

    try:
        yield temp_dir
    finally:
        try:
            safe_rmtree(temp_dir)
        except FilesystemError as e:
            logger.warning(f"Could not remove temporary directory {temp_dir}: {e}")
        else:
            logger.debug(f"Removed temporary directory {temp_dir}")
