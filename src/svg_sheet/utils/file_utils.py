"""File system abstraction for the SVG sprite sheet builder.

Provides a consistent interface for file system operations across the
application, including reading icons, listing directories, collecting file
metadata for change detection, and writing the sprite atomically. This module
works with path_utils.py so that path handling is standardized throughout the
project.
"""

import io
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from svg_sheet.utils.path_utils import path_resolver

# Type aliases for clarity and documentation
PathLike = str | Path
FileSignature = tuple[int, int]  # (modification time in ns, size in bytes)


def read_text(file_path: PathLike) -> str:
    """Read text content from a file.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        The text content of the file

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read due to permissions
        UnicodeDecodeError: If the file content cannot be decoded as text
    """
    normalized_path = path_resolver.normalize_path(file_path)
    # Line endings are kept as they are on disk
    with open(normalized_path, encoding="utf-8", newline="") as f:
        return f.read()


def ensure_dir_exists(dir_path: PathLike) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Wrapper around path_resolver.ensure_dir_exists for API consistency.

    Args:
        dir_path: Directory path (string or Path object)

    Returns:
        Path to the directory
    """
    return path_resolver.ensure_dir_exists(dir_path)


def list_files(dir_path: PathLike, pattern: str = "*") -> list[Path]:
    """List files in a directory matching a pattern, sorted by name.

    Args:
        dir_path: Path to the directory (string or Path object)
        pattern: Glob pattern to match files

    Returns:
        List of Path objects for matching files (directories excluded)

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path exists but is not a directory
    """
    normalized_path = path_resolver.normalize_path(dir_path)

    if not normalized_path.exists():
        raise FileNotFoundError(f"Directory not found: {normalized_path}")

    if not normalized_path.is_dir():
        raise NotADirectoryError(f"Not a directory: {normalized_path}")

    paths = [p for p in normalized_path.glob(pattern) if p.is_file()]
    return sorted(paths, key=lambda p: p.name)


def get_file_signature(file_path: PathLike) -> FileSignature:
    """Get the modification time and size of a file from a single stat call.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        Tuple of modification time in nanoseconds and size in bytes

    Raises:
        FileNotFoundError: If the file does not exist
    """
    stat = path_resolver.normalize_path(file_path).stat()
    return stat.st_mtime_ns, stat.st_size


class NullWriter(io.StringIO):
    """Text sink that discards everything written to it."""

    def write(self, s: str) -> int:
        """Discard ``s`` and report it as written."""
        return len(s)


@contextmanager
def atomic_text_writer(file_path: PathLike, make_dirs: bool = True) -> Iterator[TextIO]:
    """Open a file for writing so that it is replaced only on success.

    Content goes to a temporary file in the destination directory, which is
    moved over the target when the block exits normally. If the block raises,
    the temporary file is removed and the target keeps its prior content.

    Args:
        file_path: Path to the file (string or Path object)
        make_dirs: Whether to create parent directories if they don't exist

    Yields:
        A writable text stream

    Raises:
        FileNotFoundError: If the parent directory does not exist and make_dirs is False
        PermissionError: If the file cannot be written due to permissions
    """
    normalized_path = path_resolver.normalize_path(file_path)

    if make_dirs:
        ensure_dir_exists(normalized_path.parent)

    fd, temp_name = tempfile.mkstemp(
        dir=normalized_path.parent, prefix=f".{normalized_path.name}.", suffix=".tmp"
    )
    temp_file = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            yield f
        # mkstemp creates owner-only files; keep the target's mode or use a readable default
        mode = normalized_path.stat().st_mode & 0o777 if normalized_path.exists() else 0o644
        os.chmod(temp_file, mode)
        # Move the temporary file to the target location (atomic on POSIX systems)
        os.replace(temp_file, normalized_path)
    except BaseException:
        # Clean up the temporary file if anything went wrong
        if temp_file.exists():
            temp_file.unlink()
        raise
