"""
Local path helpers for downloaded objects.

Object keys are used verbatim as file names. These helpers build the local
path and report keys that would land outside the destination directory,
without rewriting them.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path, PurePosixPath

__all__ = [
    "TMP_DIRECTORY_PREFIX",
    "TMP_DIRECTORY_MODE",
    "create_temp_directory",
    "build_local_path",
    "key_escapes_directory",
]

logger = logging.getLogger(__name__)

TMP_DIRECTORY_PREFIX = "ceph_temp_folder_"
TMP_DIRECTORY_MODE = 0o744  # rwxr--r--


def create_temp_directory(prefix: str = TMP_DIRECTORY_PREFIX, mode: int = TMP_DIRECTORY_MODE) -> Path:
    """
    Create a fresh temporary directory with the given permissions.

    ``tempfile.mkdtemp`` guarantees a unique name and creates it 0o700; the
    mode is then set explicitly so the umask does not interfere.

    Raises:
        OSError: If the directory cannot be created
    """
    path = Path(tempfile.mkdtemp(prefix=prefix))
    os.chmod(path, mode)
    return path


def key_escapes_directory(key: str) -> bool:
    """
    Tell whether joining ``key`` onto a directory would leave that directory.

    Examples:
        >>> key_escapes_directory("reports/today.txt")
        False

        >>> key_escapes_directory("../secrets.txt")
        True

        >>> key_escapes_directory("/etc/passwd")
        True
    """
    rel = PurePosixPath(key)
    return not str(rel) or rel.is_absolute() or ".." in rel.parts or "\\" in key


def build_local_path(directory: Path, key: str) -> Path:
    """
    Join the destination directory with an object key used verbatim.

    Keys that escape the directory are not sanitised; a warning is logged.
    """
    if key_escapes_directory(key):
        logger.warning(f"Object key {key!r} resolves outside {directory}")
    return Path(os.path.join(directory, key))
