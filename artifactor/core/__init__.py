"""Core functionality for artifactor"""

from .digest_engine import compute_digests, digest_file
from .component_scanner import scan_components, build_component
from .manifest_builder import ManifestBuilder
from .uploader import Uploader
from .alias_coordinator import AliasCoordinator

__all__ = [
    "compute_digests",
    "digest_file",
    "scan_components",
    "build_component",
    "ManifestBuilder",
    "Uploader",
    "AliasCoordinator",
]
