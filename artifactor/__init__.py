"""Artifactor - Publish signed, checksummed artifact versions to object storage.

A directory of build outputs becomes an immutable version: every file is
hashed, a JSON manifest and a checksum listing are written and signed, and
everything is uploaded to an object store, with aliases such as ``latest``
pointing at the newest manifest.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Core API
from .api.publisher import Publisher, publish

# Data models
from .models import (
    Component,
    DigestSet,
    Project,
    PublishOptions,
    PublishResult,
    VersionManifest,
    ChecksumManifest,
)

# Exceptions
from .api.exceptions import (
    ArtifactorError,
    ConfigurationError,
    FileAccessError,
    ManifestWriteError,
    SigningError,
    StorageError,
    UploadError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "Publisher",
    "publish",

    # Data models
    "Component",
    "DigestSet",
    "Project",
    "PublishOptions",
    "PublishResult",
    "VersionManifest",
    "ChecksumManifest",

    # Exceptions
    "ArtifactorError",
    "ConfigurationError",
    "FileAccessError",
    "ManifestWriteError",
    "SigningError",
    "StorageError",
    "UploadError",
]
