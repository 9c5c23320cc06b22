"""Alias republication of version manifests"""

import logging
from typing import Dict, List, Sequence

from .uploader import Uploader
from ..models.component import Component
from ..models.project import Project


class AliasCoordinator:
    """Republishes the manifest components of a version under alias prefixes

    Aliases (e.g. ``latest``) point at the same bytes as the canonical
    version: local paths and digests are reused, only the storage path
    changes, and every alias gets its own new component values.
    """

    def __init__(self, project: Project, uploader: Uploader):
        self.project = project
        self.uploader = uploader
        self.logger = logging.getLogger(self.__class__.__name__)

    def retarget(self, alias: str, components: Sequence[Component]) -> List[Component]:
        """Components stored under ``<project-prefix>/<alias>/``"""
        prefix = self.project.alias_storage_prefix(alias)
        return [component.retarget(prefix) for component in components]

    async def publish_alias(self, alias: str, components: Sequence[Component]) -> List[Component]:
        """Upload retargeted components for one alias

        Raises:
            UploadError: If any upload of the alias fails
        """
        aliased = self.retarget(alias, components)
        self.logger.info(f"Publishing alias '{alias}' ({len(aliased)} files)")
        await self.uploader.upload(self.project.storage_prefix, aliased)
        return aliased

    async def publish_aliases(self,
                              aliases: Sequence[str],
                              components: Sequence[Component]) -> Dict[str, List[Component]]:
        """Publish aliases one at a time in the given order

        A failing alias stops the remaining ones; its error propagates.

        Returns:
            Mapping of alias to the components uploaded for it
        """
        published = {}
        for alias in aliases:
            published[alias] = await self.publish_alias(alias, components)
        return published
