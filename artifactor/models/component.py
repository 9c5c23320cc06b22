"""Component data models"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Any


@dataclass(frozen=True)
class DigestSet:
    """Hex-encoded content digests of one file"""

    md5: str
    sha256: str
    sha384: str
    sha512: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to manifest checksum fields"""
        return {
            "md5_checksum": self.md5,
            "sha256_checksum": self.sha256,
            "sha384_checksum": self.sha384,
            "sha512_checksum": self.sha512,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DigestSet':
        """Create from manifest checksum fields"""
        return cls(
            md5=data["md5_checksum"],
            sha256=data["sha256_checksum"],
            sha384=data["sha384_checksum"],
            sha512=data["sha512_checksum"],
        )


@dataclass(frozen=True)
class Component:
    """One published file of an artifact version

    ``filepath`` is relative to the scanned source directory and always uses
    forward slashes. ``local_path`` is where the bytes are read from at
    upload time and is not part of the manifest.
    """

    filepath: str
    storage_path: str
    url: str
    size: int
    digests: DigestSet
    local_path: Path

    @classmethod
    def create(cls,
               filepath: str,
               local_path: Path,
               storage_prefix: str,
               url_prefix: str,
               size: int,
               digests: DigestSet) -> 'Component':
        """Create a component, deriving its storage path and url from the prefixes"""
        return cls(
            filepath=filepath,
            storage_path=storage_prefix + filepath,
            url=url_prefix + filepath,
            size=size,
            digests=digests,
            local_path=Path(local_path),
        )

    @property
    def name(self) -> str:
        """Basename of the component"""
        return self.filepath.rsplit("/", 1)[-1]

    def retarget(self, storage_prefix: str) -> 'Component':
        """Return a copy of this component stored under another prefix"""
        return replace(self, storage_path=storage_prefix + self.filepath)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a manifest entry"""
        data = {
            "filepath": self.filepath,
            "gcs_filepath": self.storage_path,
            "url": self.url,
            "bytes": self.size,
        }
        data.update(self.digests.to_dict())
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], root: Path = Path(".")) -> 'Component':
        """Create from a manifest entry"""
        return cls(
            filepath=data["filepath"],
            storage_path=data["gcs_filepath"],
            url=data["url"],
            size=data["bytes"],
            digests=DigestSet.from_dict(data),
            local_path=Path(root) / data["filepath"],
        )
