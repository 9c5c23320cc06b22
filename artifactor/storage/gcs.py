"""Google Cloud Storage backend implementation"""

import asyncio
import logging
from typing import List, Optional, Dict, Any

from .base import ObjectStore
from ..api.exceptions import StorageError


class GCSStore(ObjectStore):
    """Google Cloud Storage implementation

    Credentials come from the environment (application default credentials).
    """

    def __init__(self, bucket: str, config: Dict[str, Any] = None):
        """
        Initialize GCS store

        Args:
            bucket: Bucket name
            config: GCS configuration including:
                - project: Google Cloud project for the client (optional)
        """
        super().__init__(bucket, config)
        self.client = None
        self._bucket = None

    async def _do_initialize(self) -> None:
        """Create the storage client"""
        try:
            from google.cloud import storage
        except ImportError:
            raise StorageError(
                "GCS storage backend requires 'google-cloud-storage' package. "
                "Install with: pip install google-cloud-storage"
            )

        try:
            self.client = storage.Client(project=self.config.get('project'))
            self._bucket = self.client.bucket(self.bucket)
        except Exception as e:
            raise StorageError(f"Failed to initialize GCS storage: {e}") from e

    async def _run(self, func, *args):
        # google-cloud-storage is synchronous, run in executor
        return await asyncio.get_running_loop().run_in_executor(None, func, *args)

    async def put_object(self,
                         name: str,
                         data: bytes,
                         cache_control: str,
                         crc32c: str) -> None:
        """Upload object; GCS rejects it if the CRC-32C does not match"""
        await self.initialize()

        def _upload():
            blob = self._bucket.blob(name)
            blob.cache_control = cache_control
            blob.crc32c = crc32c
            blob.upload_from_string(data)

        try:
            await self._run(_upload)
        except Exception as e:
            logging.error(f"GCS upload failed: {e}")
            raise

    async def make_public(self, name: str) -> None:
        """Grant allUsers read access"""
        await self.initialize()
        await self._run(lambda: self._bucket.blob(name).make_public())

    async def exists(self, name: str) -> bool:
        """Check if object exists in GCS"""
        await self.initialize()
        return await self._run(lambda: self._bucket.blob(name).exists())

    async def list(self, prefix: str = "") -> List[str]:
        """List objects in GCS with prefix"""
        await self.initialize()

        def _list():
            return [blob.name for blob in self.client.list_blobs(self.bucket, prefix=prefix)]

        return sorted(await self._run(_list))

    async def get_metadata(self, name: str) -> Optional[Dict[str, Any]]:
        """Get object metadata from GCS"""
        await self.initialize()

        def _get_metadata():
            blob = self._bucket.get_blob(name)
            if blob is None:
                return None
            return {
                'size': blob.size,
                'cache_control': blob.cache_control,
                'crc32c': blob.crc32c,
                'updated': blob.updated.isoformat() if blob.updated else None,
                'public_url': blob.public_url,
            }

        return await self._run(_get_metadata)

    async def _do_close(self) -> None:
        """Close GCS client"""
        if self.client is not None:
            self.client.close()
        self.client = None
        self._bucket = None
