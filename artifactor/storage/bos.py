"""Baidu Object Storage (BOS) backend implementation"""

import asyncio
import logging
import os
from typing import List, Optional, Dict, Any

from .base import ObjectStore
from ..api.exceptions import StorageError
from ..constants import ENV_BOS_ACCESS_KEY, ENV_BOS_SECRET_KEY, ENV_BOS_ENDPOINT


class BOSStore(ObjectStore):
    """Baidu Object Storage implementation

    BOS has no native CRC-32C verification; the checksum travels as user
    metadata (``x-bce-meta-crc32c``) so consumers can still read it.
    """

    def __init__(self, bucket: str, config: Dict[str, Any] = None):
        """
        Initialize BOS store

        Args:
            bucket: Bucket name
            config: BOS configuration including:
                - access_key: Access key (default: $BOS_AK)
                - secret_key: Secret key (default: $BOS_SK)
                - endpoint: BOS endpoint (default: $BOS_ENDPOINT)
        """
        super().__init__(bucket, config)
        self.client = None
        self.access_key = self.config.get('access_key') or os.environ.get(ENV_BOS_ACCESS_KEY)
        self.secret_key = self.config.get('secret_key') or os.environ.get(ENV_BOS_SECRET_KEY)
        self.endpoint = (self.config.get('endpoint')
                         or os.environ.get(ENV_BOS_ENDPOINT, 'https://bj.bcebos.com'))

    async def _do_initialize(self) -> None:
        """Initialize BOS connection"""
        try:
            from baidubce.services.bos.bos_client import BosClient
            from baidubce.bce_client_configuration import BceClientConfiguration
            from baidubce.auth.bce_credentials import BceCredentials
        except ImportError:
            raise StorageError(
                "BOS storage backend requires 'bce-python-sdk' package. "
                "Install with: pip install bce-python-sdk"
            )

        try:
            bos_config = BceClientConfiguration(
                credentials=BceCredentials(self.access_key, self.secret_key),
                endpoint=self.endpoint
            )
            self.client = BosClient(bos_config)
        except Exception as e:
            raise StorageError(f"Failed to initialize BOS storage: {e}") from e

    async def _run(self, func, *args):
        # BOS SDK is synchronous, run in executor
        return await asyncio.get_running_loop().run_in_executor(None, func, *args)

    async def put_object(self,
                         name: str,
                         data: bytes,
                         cache_control: str,
                         crc32c: str) -> None:
        """Upload object to BOS"""
        await self.initialize()

        def _upload():
            self.client.put_object_from_string(
                self.bucket,
                name,
                data,
                user_metadata={'crc32c': crc32c},
                user_headers={'Cache-Control': cache_control},
            )

        try:
            await self._run(_upload)
        except Exception as e:
            logging.error(f"BOS upload failed: {e}")
            raise

    async def make_public(self, name: str) -> None:
        """Apply the public-read canned ACL"""
        await self.initialize()
        await self._run(lambda: self.client.set_object_canned_acl(
            self.bucket, name, canned_acl='public-read'
        ))

    async def exists(self, name: str) -> bool:
        """Check if object exists in BOS"""
        return await self.get_metadata(name) is not None

    async def list(self, prefix: str = "") -> List[str]:
        """List objects in BOS with prefix"""
        await self.initialize()

        def _list():
            files = []
            marker = None

            while True:
                response = self.client.list_objects(
                    self.bucket,
                    prefix=prefix,
                    marker=marker,
                    max_keys=1000
                )

                for obj in response.contents:
                    files.append(obj.key)

                if response.is_truncated:
                    marker = response.next_marker
                else:
                    break

            return files

        return sorted(await self._run(_list))

    async def get_metadata(self, name: str) -> Optional[Dict[str, Any]]:
        """Get object metadata from BOS"""
        await self.initialize()

        from baidubce.exception import BceHttpClientError

        def _get_metadata():
            try:
                meta = self.client.get_object_meta_data(self.bucket, name)
            except BceHttpClientError as e:
                if getattr(e.last_error, 'status_code', None) == 404:
                    return None
                raise

            metadata = meta.metadata
            return {
                'size': int(getattr(metadata, 'content_length', 0) or 0),
                'cache_control': getattr(metadata, 'cache_control', None),
                'crc32c': getattr(metadata, 'bce_meta_crc32c', None),
                'etag': (getattr(metadata, 'etag', '') or '').strip('"'),
            }

        return await self._run(_get_metadata)

    async def _do_close(self) -> None:
        """Close BOS connection"""
        # BOS client doesn't require explicit cleanup
        self.client = None
