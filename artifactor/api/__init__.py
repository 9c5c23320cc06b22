"""Public API for artifactor"""

from .publisher import Publisher, publish
from .exceptions import (
    ArtifactorError,
    ConfigurationError,
    FileAccessError,
    ManifestWriteError,
    SigningError,
    StorageError,
    UploadError,
)

__all__ = [
    "Publisher",
    "publish",
    "ArtifactorError",
    "ConfigurationError",
    "FileAccessError",
    "ManifestWriteError",
    "SigningError",
    "StorageError",
    "UploadError",
]
