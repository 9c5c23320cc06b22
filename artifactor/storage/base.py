# artifactor/storage/base.py
"""Object store abstract base class"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Dict, Any

from ..api.exceptions import ConfigurationError
from ..constants import StorageScheme, SUPPORTED_STORAGE_SCHEMES


@dataclass(frozen=True)
class StorageLocation:
    """Bucket addressed by a storage prefix such as ``gcs://bucket/path/``"""
    scheme: StorageScheme
    bucket: str
    key_prefix: str = ""

    @property
    def bucket_url(self) -> str:
        return f"{self.scheme.value}://{self.bucket}/"

    def object_name(self, storage_path: str) -> str:
        """Object key of a full storage path inside this bucket"""
        scheme, sep, rest = storage_path.partition("://")
        if sep and scheme.lower() == self.scheme.value and rest.startswith(self.bucket + "/"):
            return rest[len(self.bucket) + 1:]
        return storage_path


def parse_storage_prefix(prefix: str) -> StorageLocation:
    """
    Split a storage prefix into scheme, bucket and key prefix

    Args:
        prefix: Prefix like ``gcs://bucket/some/path/``

    Returns:
        StorageLocation

    Raises:
        ConfigurationError: If the scheme is unsupported or the bucket is missing
    """
    scheme, sep, rest = prefix.partition("://")
    if not sep:
        raise ConfigurationError(
            f"Storage prefix must start with one of "
            f"{', '.join(s + '://' for s in SUPPORTED_STORAGE_SCHEMES)}: {prefix}"
        )

    try:
        storage_scheme = StorageScheme(scheme.lower())
    except ValueError:
        raise ConfigurationError(f"Unsupported storage scheme: {scheme}")

    bucket, _, key_prefix = rest.partition("/")
    if not bucket:
        raise ConfigurationError(f"Storage prefix does not name a bucket: {prefix}")

    return StorageLocation(storage_scheme, bucket, key_prefix)


class ObjectStore(ABC):
    """Abstract base class for all object store backends

    Every operation raises on failure; callers decide how failures of a
    batch are reported.
    """

    def __init__(self, bucket: str, config: Dict[str, Any] = None):
        """
        Initialize object store

        Args:
            bucket: Bucket (or container) name
            config: Backend-specific configuration
        """
        self.bucket = bucket
        self.config = config or {}
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize backend (e.g., create clients)"""
        if not self._initialized:
            await self._do_initialize()
            self._initialized = True

    @abstractmethod
    async def _do_initialize(self) -> None:
        """Actual initialization logic to be implemented by subclasses"""
        pass

    @abstractmethod
    async def put_object(self,
                         name: str,
                         data: bytes,
                         cache_control: str,
                         crc32c: str) -> None:
        """
        Write an object

        Args:
            name: Object name inside the bucket
            data: Object content
            cache_control: Cache-Control value
            crc32c: Base64 CRC-32C of data for integrity verification
        """
        pass

    @abstractmethod
    async def make_public(self, name: str) -> None:
        """
        Grant public read access on an object

        Args:
            name: Object name inside the bucket
        """
        pass

    @abstractmethod
    async def exists(self, name: str) -> bool:
        """
        Check if an object exists

        Args:
            name: Object name inside the bucket

        Returns:
            True if exists
        """
        pass

    @abstractmethod
    async def list(self, prefix: str = "") -> List[str]:
        """
        List objects

        Args:
            prefix: Name prefix to filter results

        Returns:
            Sorted object names
        """
        pass

    @abstractmethod
    async def get_metadata(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Get object metadata

        Args:
            name: Object name inside the bucket

        Returns:
            Metadata (size, cache_control, crc32c, public) or None if not found
        """
        pass

    async def close(self) -> None:
        """Close backend connections"""
        if self._initialized:
            await self._do_close()
            self._initialized = False

    async def _do_close(self) -> None:
        """Actual cleanup logic to be implemented by subclasses"""
        pass

    async def __aenter__(self):
        """Async context manager entry"""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
