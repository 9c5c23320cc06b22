"""Utility functions for artifactor"""

from .async_utils import run_async
from .file_utils import read_file_bytes, write_file_atomic, format_size
from .hash_utils import crc32c_checksum

__all__ = [
    "run_async",
    "read_file_bytes",
    "write_file_atomic",
    "format_size",
    "crc32c_checksum",
]
