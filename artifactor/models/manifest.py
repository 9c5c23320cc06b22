# artifactor/models/manifest.py
"""Manifest models"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Tuple, Any, Sequence

from .component import Component
from ..constants import CHECKSUM_TAB_WIDTH

# (DigestSet attribute, fixed-width label) in checksum file order
CHECKSUM_ALGORITHMS: Tuple[Tuple[str, str], ...] = (
    ("md5", "md5   "),
    ("sha256", "sha256"),
    ("sha384", "sha384"),
    ("sha512", "sha512"),
)


@dataclass(frozen=True)
class VersionManifest:
    """Structured description of one artifact version"""
    project: str
    version: str
    storage_prefix: str
    components: Tuple[Component, ...]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def unix_timestamp(self) -> int:
        return int(self.timestamp.timestamp())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the manifest.json document"""
        return {
            "timestamp": self.timestamp.isoformat(),
            "unix_timestamp": self.unix_timestamp,
            "project": self.project,
            "version": self.version,
            "gcs_prefix": self.storage_prefix,
            "components": [c.to_dict() for c in self.components],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VersionManifest':
        """Create from a manifest.json document"""
        return cls(
            project=data["project"],
            version=data["version"],
            storage_prefix=data["gcs_prefix"],
            components=tuple(Component.from_dict(c) for c in data["components"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


@dataclass(frozen=True)
class ChecksumManifest:
    """Plain-text digest listing over a component list"""
    components: Tuple[Component, ...]
    tab_width: int = CHECKSUM_TAB_WIDTH

    def path_column_width(self, filepath: str) -> int:
        """Width of the path column of one block: next tab stop past the path"""
        return (len(filepath) // self.tab_width + 1) * self.tab_width

    def _pad(self, text: str) -> str:
        # each block is aligned on its own, with at least one tab
        tabs = -(-(self.path_column_width(text) - len(text)) // self.tab_width)
        return text + "\t" * tabs

    def lines(self) -> List[str]:
        """Rendered lines; an empty string separates component blocks"""
        lines = []
        for index, component in enumerate(self.components):
            if index:
                lines.append("")
            path_cell = self._pad(component.filepath)
            for attribute, label in CHECKSUM_ALGORITHMS:
                digest = getattr(component.digests, attribute)
                lines.append(f"{path_cell}{label}\t{digest}")
        return lines

    def render(self) -> str:
        lines = self.lines()
        if not lines:
            return ""
        return "\n".join(lines) + "\n"


def render_checksums(components: Sequence[Component]) -> str:
    """Render the checksum listing of the given components"""
    return ChecksumManifest(tuple(components)).render()
