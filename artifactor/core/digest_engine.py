"""Content digest calculation for components"""

import hashlib
from pathlib import Path
from typing import Tuple, Union

from ..models.component import DigestSet
from ..utils.file_utils import read_file_bytes

# hashlib algorithm name for each DigestSet field, in manifest order.
# The "sha512" field holds the truncated SHA-512/256 variant.
DIGEST_ALGORITHMS = (
    ("md5", "md5"),
    ("sha256", "sha256"),
    ("sha384", "sha384"),
    ("sha512", "sha512_256"),
)


def calculate_content_hash(content: bytes, algorithm: str) -> str:
    """
    Calculate hash of content bytes

    Args:
        content: Content bytes
        algorithm: hashlib algorithm name

    Returns:
        Hex digest string
    """
    hash_func = hashlib.new(algorithm)
    hash_func.update(memoryview(content))
    return hash_func.hexdigest()


def compute_digests(content: bytes) -> DigestSet:
    """
    Compute every component digest over the same buffer

    Each algorithm makes its own full pass over ``content``; the buffer is
    never re-read from disk.

    Args:
        content: File content

    Returns:
        DigestSet with md5, sha256, sha384 and sha512 (SHA-512/256) hex digests
    """
    return DigestSet(**{
        field: calculate_content_hash(content, algorithm)
        for field, algorithm in DIGEST_ALGORITHMS
    })


def digest_file(file_path: Union[str, Path]) -> Tuple[int, DigestSet]:
    """
    Read a file once and digest its content

    Args:
        file_path: Path to file

    Returns:
        Tuple of (size in bytes, digests)

    Raises:
        FileAccessError: If the file cannot be fully read
    """
    content = read_file_bytes(Path(file_path))
    return len(content), compute_digests(content)


__all__ = [
    "DigestSet",
    "DIGEST_ALGORITHMS",
    "calculate_content_hash",
    "compute_digests",
    "digest_file",
]
