"""File operation utilities"""

import os
import tempfile
from pathlib import Path
from typing import Union

from ..api.exceptions import FileAccessError, ManifestWriteError

TEMPORARY_SUFFIX = ".tmp"


def temporary_prefix(filename: str) -> str:
    """Name prefix of the temporary files written on the way to filename"""
    return f".{filename}."


def is_temporary_of(name: str, filename: str) -> bool:
    """Whether name is a leftover temporary file of an atomic write to filename"""
    return name.startswith(temporary_prefix(filename)) and name.endswith(TEMPORARY_SUFFIX)


def read_file_bytes(file_path: Path) -> bytes:
    """
    Read the whole file into memory

    Args:
        file_path: Path to file

    Returns:
        File content

    Raises:
        FileAccessError: If the file cannot be opened or read
    """
    try:
        with open(file_path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise FileAccessError(file_path, e.strerror or str(e)) from e


def write_file_atomic(file_path: Path, content: Union[str, bytes]) -> Path:
    """
    Write content through a temporary file and rename it into place

    Args:
        file_path: Target path
        content: Text (utf-8) or bytes

    Returns:
        The written path

    Raises:
        ManifestWriteError: If the file cannot be written
    """
    data = content.encode('utf-8') if isinstance(content, str) else content
    tmp_path = None

    try:
        with tempfile.NamedTemporaryFile(
            dir=file_path.parent,
            prefix=temporary_prefix(file_path.name),
            suffix=TEMPORARY_SUFFIX,
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(data)
        os.replace(tmp_path, file_path)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise ManifestWriteError(file_path, e.strerror or str(e)) from e

    return file_path


def relative_posix_path(path: Path, root: Path) -> str:
    """Path of ``path`` below ``root`` with forward slashes"""
    return path.relative_to(root).as_posix()


def format_size(size: int) -> str:
    """
    Format file size in human-readable format

    Args:
        size: Size in bytes

    Returns:
        Formatted size string
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} PB"
