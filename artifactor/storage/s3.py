# artifactor/storage/s3.py
"""AWS S3 storage backend implementation"""

import asyncio
import logging
from typing import List, Optional, Dict, Any

from .base import ObjectStore
from ..api.exceptions import StorageError


class S3Store(ObjectStore):
    """AWS S3 (and S3-compatible) storage implementation"""

    def __init__(self, bucket: str, config: Dict[str, Any] = None):
        """
        Initialize S3 store

        Args:
            bucket: S3 bucket name
            config: S3 configuration including:
                - access_key_id: AWS access key ID (optional, default chain otherwise)
                - secret_access_key: AWS secret access key
                - region: AWS region
                - endpoint_url: Custom endpoint (for S3-compatible services)
        """
        super().__init__(bucket, config)
        self.client = None

    async def _do_initialize(self) -> None:
        """Create the S3 client"""
        try:
            import boto3
        except ImportError:
            raise StorageError(
                "S3 storage backend requires 'boto3' package. "
                "Install with: pip install boto3"
            )

        try:
            self.client = boto3.client(
                "s3",
                region_name=self.config.get('region'),
                endpoint_url=self.config.get('endpoint_url'),
                aws_access_key_id=self.config.get('access_key_id'),
                aws_secret_access_key=self.config.get('secret_access_key'),
            )
        except Exception as e:
            raise StorageError(f"Failed to initialize S3 storage: {e}") from e

    async def _run(self, func, *args):
        # boto3 is synchronous, run in executor
        return await asyncio.get_running_loop().run_in_executor(None, func, *args)

    async def put_object(self,
                         name: str,
                         data: bytes,
                         cache_control: str,
                         crc32c: str) -> None:
        """Upload object; S3 verifies the supplied CRC-32C"""
        await self.initialize()

        def _upload():
            self.client.put_object(
                Bucket=self.bucket,
                Key=name,
                Body=data,
                CacheControl=cache_control,
                ChecksumCRC32C=crc32c,
            )

        try:
            await self._run(_upload)
        except Exception as e:
            logging.error(f"S3 upload failed: {e}")
            raise

    async def make_public(self, name: str) -> None:
        """Apply the public-read canned ACL"""
        await self.initialize()
        await self._run(lambda: self.client.put_object_acl(
            Bucket=self.bucket, Key=name, ACL="public-read"
        ))

    async def exists(self, name: str) -> bool:
        """Check if object exists in S3"""
        return await self.get_metadata(name) is not None

    async def list(self, prefix: str = "") -> List[str]:
        """List objects in S3 with prefix"""
        await self.initialize()

        def _list():
            keys = []
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                keys.extend(obj["Key"] for obj in page.get("Contents", []))
            return keys

        return sorted(await self._run(_list))

    async def get_metadata(self, name: str) -> Optional[Dict[str, Any]]:
        """Get object metadata from S3"""
        await self.initialize()

        from botocore.exceptions import ClientError

        def _head():
            try:
                response = self.client.head_object(
                    Bucket=self.bucket, Key=name, ChecksumMode="ENABLED"
                )
            except ClientError as e:
                if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                    return None
                raise

            return {
                'size': response.get('ContentLength'),
                'cache_control': response.get('CacheControl'),
                'crc32c': response.get('ChecksumCRC32C'),
                'etag': response.get('ETag', '').strip('"'),
                'modified': response.get('LastModified'),
            }

        return await self._run(_head)

    async def _do_close(self) -> None:
        """Close S3 client"""
        if self.client is not None:
            self.client.close()
        self.client = None
