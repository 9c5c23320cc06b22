# artifactor/models/__init__.py
"""Data models for artifactor"""

from .component import Component, DigestSet
from .manifest import VersionManifest, ChecksumManifest, CHECKSUM_ALGORITHMS
from .options import PublishOptions
from .project import Project
from .result import PublishResult

__all__ = [
    # Component models
    "Component",
    "DigestSet",

    # Manifest models
    "VersionManifest",
    "ChecksumManifest",
    "CHECKSUM_ALGORITHMS",

    # Configuration models
    "PublishOptions",
    "Project",

    # Result models
    "PublishResult",
]
