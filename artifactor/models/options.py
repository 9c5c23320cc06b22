"""Publish options model"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any, Tuple

from ..constants import (
    DEFAULT_CACHE_MAX_AGE,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_LATEST_ALIAS,
    DEFAULT_SIGNER,
)


@dataclass(frozen=True)
class PublishOptions:
    """Read-only settings of one publish invocation

    Prefixes are expected to be normalized (trailing ``/``) by
    :class:`~artifactor.services.config_service.ConfigService`.
    """

    project_name: str
    version: str
    source_dir: Path
    storage_prefix: str
    url_prefix: str
    aliases: Tuple[str, ...] = ()
    latest: bool = True
    cache_max_age: int = DEFAULT_CACHE_MAX_AGE
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    signer: str = DEFAULT_SIGNER
    gpg_key: Optional[str] = None
    dry_run: bool = False
    storage_options: Dict[str, Any] = field(default_factory=dict)

    @property
    def effective_aliases(self) -> List[str]:
        """Aliases in supplied order, plus ``latest`` when enabled"""
        aliases = []
        for alias in self.aliases:
            if alias not in aliases:
                aliases.append(alias)

        if self.latest and DEFAULT_LATEST_ALIAS not in aliases:
            aliases.append(DEFAULT_LATEST_ALIAS)

        return aliases

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "project": self.project_name,
            "version": self.version,
            "source_dir": str(self.source_dir),
            "storage_prefix": self.storage_prefix,
            "url_prefix": self.url_prefix,
            "aliases": self.effective_aliases,
            "cache_max_age": self.cache_max_age,
            "max_concurrency": self.max_concurrency,
            "signer": self.signer,
            "dry_run": self.dry_run,
        }
