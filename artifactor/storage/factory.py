"""Object store factory"""

from typing import Dict, Any, Type, Optional

from .base import ObjectStore, StorageLocation, parse_storage_prefix
from .filesystem import FileSystemStore
from .gcs import GCSStore
from .s3 import S3Store
from .bos import BOSStore
from ..constants import StorageScheme


class StoreFactory:
    """Factory for creating object store instances"""

    # Registry of object store backends
    _backends: Dict[StorageScheme, Type[ObjectStore]] = {
        StorageScheme.GCS: GCSStore,
        StorageScheme.GS: GCSStore,
        StorageScheme.S3: S3Store,
        StorageScheme.BOS: BOSStore,
        StorageScheme.FILE: FileSystemStore,
    }

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            config: Backend options passed to every created store
        """
        self.config = config or {}

    def __call__(self, location: StorageLocation) -> ObjectStore:
        return self.create(location, self.config)

    @classmethod
    def create(cls, location: StorageLocation, config: Dict[str, Any] = None) -> ObjectStore:
        """Create object store for the bucket of a storage location

        Args:
            location: Parsed storage prefix
            config: Backend-specific configuration

        Returns:
            Object store instance

        Raises:
            ValueError: If the scheme has no registered backend
        """
        if location.scheme not in cls._backends:
            raise ValueError(f"Unsupported storage scheme: {location.scheme.value}")

        backend_class = cls._backends[location.scheme]
        return backend_class(location.bucket, dict(config or {}))

    @classmethod
    def create_from_prefix(cls, prefix: str, config: Dict[str, Any] = None) -> ObjectStore:
        """Create object store from a storage prefix string"""
        return cls.create(parse_storage_prefix(prefix), config)

    @classmethod
    def register_backend(cls, scheme: StorageScheme, backend_class: Type[ObjectStore]):
        """Register a new object store backend

        Args:
            scheme: Storage scheme enum
            backend_class: Backend class
        """
        cls._backends[scheme] = backend_class

    @classmethod
    def get_supported_schemes(cls) -> list[str]:
        """Get list of supported storage schemes"""
        return [scheme.value for scheme in cls._backends.keys()]
