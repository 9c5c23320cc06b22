"""Result models for operations"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

from .component import Component


@dataclass
class PublishResult:
    """Outcome of a successful publish (failures raise instead)"""
    project: str
    version: str
    storage_prefix: str
    manifest_path: Optional[Path] = None
    checksums_path: Optional[Path] = None
    components: List[Component] = field(default_factory=list)
    manifest_components: List[Component] = field(default_factory=list)
    aliases: Dict[str, List[Component]] = field(default_factory=dict)
    uploaded_objects: int = 0
    dry_run: bool = False
    duration: float = 0.0

    @property
    def total_bytes(self) -> int:
        return sum(c.size for c in self.components)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "project": self.project,
            "version": self.version,
            "storage_prefix": self.storage_prefix,
            "manifest_path": str(self.manifest_path) if self.manifest_path else None,
            "checksums_path": str(self.checksums_path) if self.checksums_path else None,
            "components": [c.to_dict() for c in self.components],
            "aliases": {
                alias: [c.storage_path for c in components]
                for alias, components in self.aliases.items()
            },
            "uploaded_objects": self.uploaded_objects,
            "dry_run": self.dry_run,
            "duration": self.duration,
        }
