"""Publisher API for publishing operations"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Any, Union

from ..core.uploader import Uploader
from ..models import PublishOptions, PublishResult
from ..services.config_service import ConfigService
from ..services.publish_service import PublishService
from ..signing.base import Signer
from ..utils.async_utils import run_async


class Publisher:
    """Publisher class for publishing artifact versions"""

    def __init__(self,
                 signer: Optional[Signer] = None,
                 uploader: Optional[Uploader] = None):
        """
        Initialize publisher

        Args:
            signer: Signer override (default: from options)
            uploader: Uploader override (default: from options)
        """
        self.publish_service = PublishService(signer=signer, uploader=uploader)

    def publish(self,
                options: PublishOptions,
                timestamp: Optional[datetime] = None) -> PublishResult:
        """
        Create and publish a version

        Args:
            options: Validated publish options
            timestamp: Manifest timestamp (default: now)

        Returns:
            PublishResult

        Raises:
            ArtifactorError: On any failure of the pipeline
        """
        return run_async(self.publish_async(options, timestamp))

    async def publish_async(self,
                            options: PublishOptions,
                            timestamp: Optional[datetime] = None) -> PublishResult:
        """Async variant of :meth:`publish`"""
        return await self.publish_service.create_version(options, timestamp)


def publish(config: Optional[Union[str, Path]] = None,
            signer: Optional[Signer] = None,
            uploader: Optional[Uploader] = None,
            **settings: Any) -> PublishResult:
    """
    Convenience function for publishing a version

    Args:
        config: Optional YAML configuration file
        signer: Signer override
        uploader: Uploader override
        **settings: project, version, dir, storage_prefix, url_prefix,
            aliases, latest, cache_max_age, max_concurrency, signer name
            (as ``signer_name``), gpg_key, dry_run

    Returns:
        PublishResult

    Examples:
        >>> publish(project="tool", version="v1", dir="dist",
        ...         storage_prefix="gcs://releases/", url_prefix="https://dl.example.com/")
    """
    if 'signer_name' in settings:
        settings['signer'] = settings.pop('signer_name')

    options = ConfigService(Path(config) if config else None).build_options(**settings)
    return Publisher(signer=signer, uploader=uploader).publish(options)
