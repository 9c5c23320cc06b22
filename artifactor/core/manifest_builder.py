"""Manifest builder for artifact versions"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence, Union

from ..api.exceptions import ManifestWriteError
from ..constants import MANIFEST_FILENAME, CHECKSUMS_FILENAME
from ..models.component import Component
from ..models.manifest import VersionManifest, ChecksumManifest
from ..utils.file_utils import write_file_atomic


class ManifestBuilder:
    """Writes the version manifest and the checksum listing of a version

    Both files land in the scanned source directory and are written only
    once the complete component list is known.
    """

    def __init__(self,
                 root: Union[str, Path],
                 project: str,
                 version: str,
                 storage_prefix: str,
                 timestamp: Optional[datetime] = None):
        """Initialize manifest builder

        Args:
            root: Source directory the manifests are written to
            project: Project name
            version: Version string
            storage_prefix: Canonical storage prefix of the version
            timestamp: Publish time (defaults to now, UTC)
        """
        self.root = Path(root)
        self.project = project
        self.version = version
        self.storage_prefix = storage_prefix
        self.timestamp = timestamp or datetime.now(timezone.utc)
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_FILENAME

    @property
    def checksums_path(self) -> Path:
        return self.root / CHECKSUMS_FILENAME

    def build_version_manifest(self, components: Sequence[Component]) -> VersionManifest:
        return VersionManifest(
            project=self.project,
            version=self.version,
            storage_prefix=self.storage_prefix,
            components=tuple(components),
            timestamp=self.timestamp,
        )

    def write_version_manifest(self, components: Sequence[Component]) -> Path:
        """Serialize the version manifest to manifest.json

        Returns:
            Path to the written manifest

        Raises:
            ManifestWriteError: If serialization or writing fails
        """
        manifest = self.build_version_manifest(components)

        try:
            content = json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ManifestWriteError(self.manifest_path, str(e)) from e

        write_file_atomic(self.manifest_path, content + "\n")
        self.logger.info(f"Wrote {self.manifest_path} ({len(components)} components)")
        return self.manifest_path

    def write_checksum_manifest(self, components: Sequence[Component]) -> Path:
        """Render the checksum listing to the checksums file

        Returns:
            Path to the written checksum file

        Raises:
            ManifestWriteError: If writing fails
        """
        content = ChecksumManifest(tuple(components)).render()
        write_file_atomic(self.checksums_path, content)
        self.logger.info(f"Wrote {self.checksums_path}")
        return self.checksums_path
