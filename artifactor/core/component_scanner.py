"""Component discovery in a source directory"""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from .digest_engine import digest_file
from ..api.exceptions import FileAccessError
from ..constants import RESERVED_FILENAMES
from ..models.component import Component
from ..utils.file_utils import is_temporary_of, relative_posix_path

logger = logging.getLogger(__name__)


def iter_source_files(root: Path, exclude: Iterable[str] = RESERVED_FILENAMES) -> Iterator[Path]:
    """
    Walk ``root`` and yield regular files whose basename is not excluded

    Leftover temporaries of interrupted writes to an excluded name are
    skipped too. Directories are walked but never yielded. Order follows
    the filesystem.

    Raises:
        FileAccessError: If a directory cannot be listed
    """
    excluded = frozenset(exclude)

    def _raise(error: OSError):
        raise FileAccessError(error.filename or root, error.strerror) from error

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise):
        for filename in filenames:
            if filename in excluded or any(is_temporary_of(filename, name) for name in excluded):
                logger.debug(f"Skipping reserved file {Path(dirpath) / filename}")
                continue

            path = Path(dirpath) / filename
            if path.is_file():
                yield path


def build_component(root: Union[str, Path],
                    relative_path: str,
                    storage_prefix: str,
                    url_prefix: str) -> Component:
    """
    Digest one file below ``root`` and describe it as a component

    Args:
        root: Source directory
        relative_path: Path below root (forward slashes)
        storage_prefix: Storage prefix of the version
        url_prefix: Public url prefix of the version

    Raises:
        FileAccessError: If the file cannot be read
    """
    local_path = Path(root) / relative_path
    size, digests = digest_file(local_path)

    return Component.create(
        filepath=relative_path,
        local_path=local_path,
        storage_prefix=storage_prefix,
        url_prefix=url_prefix,
        size=size,
        digests=digests,
    )


def scan_components(root: Union[str, Path],
                    storage_prefix: str,
                    url_prefix: str,
                    exclude: Iterable[str] = RESERVED_FILENAMES) -> List[Component]:
    """
    Build a component for every eligible file below ``root``

    The first unreadable file aborts the scan. A directory without eligible
    files yields an empty list.

    Args:
        root: Source directory
        storage_prefix: Storage prefix of the version
        url_prefix: Public url prefix of the version
        exclude: Basenames to skip

    Returns:
        Components in traversal order

    Raises:
        FileAccessError: If root is not a directory or a file is unreadable
    """
    root = Path(root)
    if not root.is_dir():
        raise FileAccessError(root, "not a directory")

    components = []
    for path in iter_source_files(root, exclude):
        relative_path = relative_posix_path(path, root)
        components.append(
            build_component(root, relative_path, storage_prefix, url_prefix)
        )

    logger.debug(f"Scanned {len(components)} components in {root}")
    return components
