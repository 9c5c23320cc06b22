"""Filesystem object store implementation"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Dict, Any

import aiofiles

from .base import ObjectStore
from ..api.exceptions import StorageError
from ..constants import ENV_FILESYSTEM_ROOT
from ..utils.hash_utils import crc32c_checksum

METADATA_DIR = ".artifactor-meta"


class FileSystemStore(ObjectStore):
    """Local filesystem object store

    ``file://<bucket>/<name>`` is stored at ``<base_path>/<bucket>/<name>``.
    Object attributes (cache-control, crc32c, acl) are kept as JSON under
    ``<base_path>/<bucket>/.artifactor-meta/``.
    """

    def __init__(self, bucket: str, config: Dict[str, Any] = None):
        """
        Initialize filesystem store

        Args:
            bucket: Directory below base_path acting as bucket
            config: Configuration including:
                - base_path: Root of all buckets (default: $ARTIFACTOR_FILESYSTEM_ROOT or cwd)
        """
        super().__init__(bucket, config)
        base_path = self.config.get('base_path') or os.environ.get(ENV_FILESYSTEM_ROOT, ".")
        self.base_path = Path(base_path)
        self.bucket_path = self.base_path / bucket

    async def _do_initialize(self) -> None:
        """Ensure the bucket directory exists"""
        self.bucket_path.mkdir(parents=True, exist_ok=True)

    def _object_path(self, name: str) -> Path:
        return self.bucket_path / name

    def _metadata_path(self, name: str) -> Path:
        return self.bucket_path / METADATA_DIR / f"{name}.json"

    async def _read_metadata(self, name: str) -> Dict[str, Any]:
        path = self._metadata_path(name)
        if not path.exists():
            return {}
        async with aiofiles.open(path, 'r') as f:
            return json.loads(await f.read())

    async def _write_metadata(self, name: str, metadata: Dict[str, Any]) -> None:
        path = self._metadata_path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, 'w') as f:
            await f.write(json.dumps(metadata, indent=2, sort_keys=True))

    async def put_object(self,
                         name: str,
                         data: bytes,
                         cache_control: str,
                         crc32c: str) -> None:
        """Write object after verifying its CRC-32C"""
        await self.initialize()

        actual = crc32c_checksum(data)
        if actual != crc32c:
            raise StorageError(
                f"CRC32C mismatch for {name}: expected {crc32c}, got {actual}"
            )

        target_path = self._object_path(name)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(target_path, 'wb') as f:
                await f.write(data)

            # A rewrite replaces the object and resets its acl
            await self._write_metadata(name, {
                'size': len(data),
                'cache_control': cache_control,
                'crc32c': crc32c,
                'public': False,
            })
        except OSError as e:
            logging.error(f"Upload failed: {e}")
            raise StorageError(f"Failed to write {target_path}: {e}") from e

    async def make_public(self, name: str) -> None:
        """Record public-read access for an object"""
        await self.initialize()

        if not self._object_path(name).exists():
            raise StorageError(f"No such object: {name}")

        metadata = await self._read_metadata(name)
        metadata['public'] = True
        await self._write_metadata(name, metadata)

    async def exists(self, name: str) -> bool:
        """Check if object exists"""
        await self.initialize()
        return self._object_path(name).is_file()

    async def list(self, prefix: str = "") -> List[str]:
        """List object names starting with prefix"""
        await self.initialize()

        names = []
        for path in self.bucket_path.rglob("*"):
            if not path.is_file():
                continue
            relative = path.relative_to(self.bucket_path).as_posix()
            if relative.startswith(METADATA_DIR + "/"):
                continue
            if relative.startswith(prefix):
                names.append(relative)

        return sorted(names)

    async def get_metadata(self, name: str) -> Optional[Dict[str, Any]]:
        """Get object metadata"""
        await self.initialize()

        path = self._object_path(name)
        if not path.is_file():
            return None

        metadata = await self._read_metadata(name)
        metadata.setdefault('size', path.stat().st_size)
        metadata['path'] = str(path)
        return metadata

    def get_local_path(self, name: str) -> Path:
        """Get the actual local path of an object (filesystem-specific)"""
        return self._object_path(name)
