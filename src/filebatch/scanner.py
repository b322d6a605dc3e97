"""Root validation and file discovery"""

import fnmatch
import logging
import os

from filebatch.errors import RootAccessError, RootNotDirectoryError, RootNotFoundError
from filebatch.models import FileTask


logger = logging.getLogger(__name__)


def validate_root(root: str) -> str:
    """Check that root is a listable directory.

    Args:
        root: Directory to process

    Returns:
        Absolute path of the root

    Raises:
        RootNotFoundError: If root does not exist
        RootNotDirectoryError: If root is not a directory
        RootAccessError: If root cannot be listed
    """
    root = os.path.abspath(root)
    if not os.path.exists(root):
        raise RootNotFoundError(root)
    if not os.path.isdir(root):
        raise RootNotDirectoryError(root)
    try:
        with os.scandir(root):
            pass
    except OSError as e:
        raise RootAccessError(root, e.strerror or str(e)) from e
    return root


def matches_pattern(filename: str, pattern: str) -> bool:
    """Case-sensitive glob match against a file base name."""
    return fnmatch.fnmatchcase(filename, pattern)


def _task_for(filepath: str) -> FileTask:
    # lstat so broken symlinks are still discovered and fail later as per-file errors
    try:
        size = os.lstat(filepath).st_size
    except OSError:
        size = 0
    return FileTask(path=filepath, size_bytes=size)


def discover_files(root: str, pattern: str = '*', recursive: bool = True) -> list[FileTask]:
    """Enumerate every non-directory entry under root whose name matches pattern.

    Unreadable files and broken symlinks are included on purpose so that they
    show up as failures in the batch report. Sub-directories that cannot be
    listed are logged and skipped.

    Args:
        root: Directory to scan (validated with validate_root)
        pattern: Glob matched against file base names
        recursive: If True, descend into sub-directories

    Returns:
        FileTasks sorted by path
    """
    root = validate_root(root)
    files: list[str] = []

    if recursive:

        def on_walk_error(e: OSError):
            logger.warning(f'[SCAN] Cannot list {e.filename}: {e.strerror}')

        for dirpath, _, filenames in os.walk(root, onerror=on_walk_error):
            for name in filenames:
                if matches_pattern(name, pattern):
                    files.append(os.path.join(dirpath, name))
    else:
        with os.scandir(root) as it:
            for entry in it:
                if entry.is_dir():
                    continue
                if matches_pattern(entry.name, pattern):
                    files.append(entry.path)

    files.sort()
    logger.debug(f'[SCAN] Found {len(files)} files matching {pattern!r} under {root}')
    return [_task_for(f) for f in files]
