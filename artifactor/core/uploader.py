"""Concurrent component upload to an object store"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import aiofiles

from ..api.exceptions import FileAccessError, UploadError
from ..constants import DEFAULT_CACHE_MAX_AGE, DEFAULT_MAX_CONCURRENCY
from ..models.component import Component
from ..storage.base import ObjectStore, StorageLocation, parse_storage_prefix
from ..storage.factory import StoreFactory
from ..utils.hash_utils import crc32c_checksum

StoreProvider = Callable[[StorageLocation], ObjectStore]


async def read_component_bytes(path: Path) -> bytes:
    """Read the local bytes of a component for upload"""
    try:
        async with aiofiles.open(path, 'rb') as f:
            return await f.read()
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e)) from e


class Uploader:
    """Uploads a batch of components to the bucket of a storage prefix

    Every component is one unit of work. At most ``max_concurrency`` units
    run at the same time. The first failure cancels the units that have not
    finished yet, and every failure observed is reported together in one
    :class:`UploadError`. Objects already written are left in place.
    """

    def __init__(self,
                 store_provider: Optional[StoreProvider] = None,
                 cache_max_age: int = DEFAULT_CACHE_MAX_AGE,
                 max_concurrency: int = DEFAULT_MAX_CONCURRENCY):
        """Initialize uploader

        Args:
            store_provider: Callable creating an object store for a location
            cache_max_age: Seconds for the cache-control max-age directive
            max_concurrency: Upper bound of simultaneous uploads
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self.store_provider = store_provider or StoreFactory()
        self.cache_max_age = cache_max_age
        self.max_concurrency = max_concurrency
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def cache_control(self) -> str:
        return f"max-age={self.cache_max_age}"

    async def upload(self, storage_prefix: str, components: Sequence[Component]) -> int:
        """Upload all components to their storage paths

        Args:
            storage_prefix: Prefix identifying the bucket (e.g. ``gcs://bucket/project/``)
            components: Components carrying storage and local paths

        Returns:
            Number of uploaded objects

        Raises:
            UploadError: If any component failed to upload
        """
        location = parse_storage_prefix(storage_prefix)
        components = list(components)

        self.logger.info(
            f"Uploading {len(components)} objects to {location.bucket_url}"
        )

        async with self.store_provider(location) as store:
            errors = await self._upload_all(store, location, components)

        if errors:
            for path, exc in errors:
                self.logger.error(f"Upload of {path} failed: {exc}")
            raise UploadError(errors)

        return len(components)

    async def _upload_one(self,
                          store: ObjectStore,
                          location: StorageLocation,
                          component: Component,
                          semaphore: asyncio.Semaphore) -> None:
        async with semaphore:
            data = await read_component_bytes(component.local_path)
            name = location.object_name(component.storage_path)

            await store.put_object(
                name,
                data,
                cache_control=self.cache_control,
                crc32c=crc32c_checksum(data),
            )
            await store.make_public(name)

            self.logger.debug(f"Uploaded {component.filepath} -> {component.storage_path}")

    async def _upload_all(self,
                          store: ObjectStore,
                          location: StorageLocation,
                          components: List[Component]) -> List[Tuple[str, BaseException]]:
        """Run all units and return failures in batch order"""
        if not components:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrency)
        tasks = [
            asyncio.create_task(self._upload_one(store, location, component, semaphore))
            for component in components
        ]

        try:
            _done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

        if pending:
            self.logger.warning(f"Upload failed, cancelling {len(pending)} pending uploads")
            for task in pending:
                task.cancel()
            await asyncio.wait(pending)

        errors = []
        for component, task in zip(components, tasks):
            if task.cancelled():
                continue
            exc = task.exception()
            if exc is not None:
                errors.append((component.storage_path, exc))

        return errors
