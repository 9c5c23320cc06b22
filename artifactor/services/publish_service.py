# artifactor/services/publish_service.py
"""Publish service implementation"""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..constants import (
    CHECKSUMS_FILENAME,
    CHECKSUMS_SIGNATURE_FILENAME,
    MANIFEST_FILENAME,
    MANIFEST_SIGNATURE_FILENAME,
)
from ..core import (
    AliasCoordinator,
    ManifestBuilder,
    Uploader,
    build_component,
    scan_components,
)
from ..models import Component, Project, PublishOptions, PublishResult
from ..signing import Signer, create_signer
from ..storage.factory import StoreFactory

# Generated files, in the order they are appended to the version
GENERATED_FILENAMES = (
    CHECKSUMS_FILENAME,
    CHECKSUMS_SIGNATURE_FILENAME,
    MANIFEST_FILENAME,
    MANIFEST_SIGNATURE_FILENAME,
)


class PublishService:
    """Creates and publishes one artifact version

    The pipeline runs strictly in order: scan, write manifests, sign,
    re-hash the generated files, upload to the version prefix, then
    republish the generated files under each alias. Any error stops the
    pipeline and propagates unchanged; re-running the publish overwrites
    the same storage paths.
    """

    def __init__(self,
                 signer: Optional[Signer] = None,
                 uploader: Optional[Uploader] = None):
        """
        Initialize publish service

        Args:
            signer: Signer to use (built from the options if omitted)
            uploader: Uploader to use (built from the options if omitted)
        """
        self.signer = signer
        self.uploader = uploader
        self.logger = logging.getLogger(self.__class__.__name__)

    def _signer_for(self, options: PublishOptions) -> Signer:
        if self.signer is not None:
            return self.signer
        kwargs = {'key': options.gpg_key} if options.gpg_key else {}
        return create_signer(options.signer, **kwargs)

    def _uploader_for(self, options: PublishOptions) -> Uploader:
        if self.uploader is not None:
            return self.uploader
        return Uploader(
            store_provider=StoreFactory(options.storage_options),
            cache_max_age=options.cache_max_age,
            max_concurrency=options.max_concurrency,
        )

    async def create_version(self,
                             options: PublishOptions,
                             timestamp: Optional[datetime] = None) -> PublishResult:
        """
        Create and publish a version

        Args:
            options: Publish options
            timestamp: Publish time recorded in the manifest (default: now)

        Returns:
            PublishResult

        Raises:
            FileAccessError, ManifestWriteError, SigningError, UploadError
        """
        start_time = time.time()
        project = Project.from_options(options)
        signer = self._signer_for(options)
        uploader = self._uploader_for(options)
        root = Path(options.source_dir)

        storage_prefix = project.version_storage_prefix(options.version)
        url_prefix = project.version_url_prefix(options.version)

        self.logger.info(f"Creating version {project.name} {options.version}")

        # 1. Discover components
        components = scan_components(root, storage_prefix, url_prefix)
        if not components:
            self.logger.warning(f"No components found in {root}")

        # 2. Manifests and their signatures
        builder = ManifestBuilder(
            root,
            project=project.name,
            version=options.version,
            storage_prefix=storage_prefix,
            timestamp=timestamp or datetime.now(timezone.utc),
        )
        manifest_path = builder.write_version_manifest(components)
        signer.sign(manifest_path)

        checksums_path = builder.write_checksum_manifest(components)
        signer.sign(checksums_path)

        # 3. Generated files become components of the version
        manifest_components = self.generated_components(root, storage_prefix, url_prefix)

        result = PublishResult(
            project=project.name,
            version=options.version,
            storage_prefix=storage_prefix,
            manifest_path=manifest_path,
            checksums_path=checksums_path,
            components=components,
            manifest_components=manifest_components,
            dry_run=options.dry_run,
        )

        if options.dry_run:
            self.logger.info("Dry run, skipping upload")
            result.duration = time.time() - start_time
            return result

        # 4. Canonical upload
        result.uploaded_objects += await uploader.upload(
            project.storage_prefix,
            components + manifest_components,
        )

        # 5. Aliases, one after another
        coordinator = AliasCoordinator(project, uploader)
        result.aliases = await coordinator.publish_aliases(
            options.effective_aliases,
            manifest_components,
        )
        result.uploaded_objects += sum(len(c) for c in result.aliases.values())

        result.duration = time.time() - start_time
        self.logger.info(
            f"Published {project.name} {options.version}: "
            f"{result.uploaded_objects} objects in {result.duration:.2f}s"
        )
        return result

    @staticmethod
    def generated_components(root: Path,
                             storage_prefix: str,
                             url_prefix: str) -> List[Component]:
        """Digest the manifest, checksum and signature files"""
        return [
            build_component(root, filename, storage_prefix, url_prefix)
            for filename in GENERATED_FILENAMES
        ]
