from __future__ import annotations

import os
from pathlib import Path

import pytest

from artifactor.api.exceptions import FileAccessError
from artifactor.core.component_scanner import scan_components
from artifactor.core.digest_engine import compute_digests

STORAGE = "gcs://bucket/tool/v1/"
URL = "https://dl.example.com/tool/v1/"


def _by_path(components):
    return {c.filepath: c for c in components}


def test_scan_builds_components(source_dir: Path) -> None:
    components = _by_path(scan_components(source_dir, STORAGE, URL))

    assert set(components) == {"bin_a", "bin_b"}
    bin_a = components["bin_a"]
    assert bin_a.storage_path == "gcs://bucket/tool/v1/bin_a"
    assert bin_a.url == "https://dl.example.com/tool/v1/bin_a"
    assert bin_a.size == 1
    assert bin_a.digests == compute_digests(b"A")
    assert bin_a.local_path == source_dir / "bin_a"


def test_scan_recurses_with_forward_slashes(source_dir: Path) -> None:
    nested = source_dir / "lib" / "linux"
    nested.mkdir(parents=True)
    (nested / "tool.so").write_bytes(b"elf")

    components = _by_path(scan_components(source_dir, STORAGE, URL))

    assert "lib/linux/tool.so" in components
    assert components["lib/linux/tool.so"].storage_path == STORAGE + "lib/linux/tool.so"
    assert "lib" not in components


def test_scan_skips_reserved_files(source_dir: Path) -> None:
    for name in ("manifest.json", "manifest.json.asc.sig", "checksums", "checksums.asc.sig"):
        (source_dir / name).write_text("stale")
    (source_dir / "sub").mkdir()
    (source_dir / "sub" / "checksums").write_text("stale")

    components = scan_components(source_dir, STORAGE, URL)

    assert sorted(c.filepath for c in components) == ["bin_a", "bin_b"]


def test_scan_skips_interrupted_manifest_writes(source_dir: Path) -> None:
    (source_dir / ".manifest.json.k2x9q1.tmp").write_text("{")
    (source_dir / ".checksums.a8b7c6.tmp").write_text("partial")
    (source_dir / ".config.tmp").write_text("kept")

    components = scan_components(source_dir, STORAGE, URL)

    assert sorted(c.filepath for c in components) == [".config.tmp", "bin_a", "bin_b"]


def test_scan_is_order_insensitive_set(source_dir: Path) -> None:
    first = scan_components(source_dir, STORAGE, URL)
    second = scan_components(source_dir, STORAGE, URL)

    assert sorted(first, key=lambda c: c.filepath) == sorted(second, key=lambda c: c.filepath)


def test_scan_empty_directory(tmp_path: Path) -> None:
    assert scan_components(tmp_path, STORAGE, URL) == []


def test_scan_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(FileAccessError):
        scan_components(tmp_path / "missing", STORAGE, URL)


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0,
                    reason="permission bits are not enforced")
def test_scan_unreadable_file_aborts(source_dir: Path) -> None:
    locked = source_dir / "locked"
    locked.write_bytes(b"secret")
    locked.chmod(0)
    try:
        with pytest.raises(FileAccessError) as excinfo:
            scan_components(source_dir, STORAGE, URL)
        assert excinfo.value.path == str(locked)
    finally:
        locked.chmod(0o644)
