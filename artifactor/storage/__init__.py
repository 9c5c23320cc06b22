# artifactor/storage/__init__.py
"""Object store backends for artifactor"""

from .base import ObjectStore, StorageLocation, parse_storage_prefix
from .filesystem import FileSystemStore
from .gcs import GCSStore
from .s3 import S3Store
from .bos import BOSStore
from .factory import StoreFactory

__all__ = [
    'ObjectStore',
    'StorageLocation',
    'parse_storage_prefix',
    'FileSystemStore',
    'GCSStore',
    'S3Store',
    'BOSStore',
    'StoreFactory',
]
