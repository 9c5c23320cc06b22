from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from artifactor.api import Publisher
from artifactor.api.exceptions import SigningError, UploadError
from artifactor.core.uploader import Uploader
from artifactor.core.digest_engine import compute_digests
from artifactor.models import DigestSet, PublishOptions
from artifactor.services.publish_service import PublishService
from artifactor.storage import StoreFactory

from conftest import MemoryStore, StubSigner

TIMESTAMP = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _options(source_dir: Path, **overrides) -> PublishOptions:
    settings = dict(
        project_name="tool",
        version="v1",
        source_dir=source_dir,
        storage_prefix="file://bucket/",
        url_prefix="https://dl.example.com/",
    )
    settings.update(overrides)
    return PublishOptions(**settings)


def _filesystem_uploader(store_root: Path) -> Uploader:
    return Uploader(store_provider=StoreFactory({"base_path": str(store_root)}))


def _stored_names(store_root: Path):
    bucket = store_root / "bucket"
    return sorted(
        p.relative_to(bucket).as_posix()
        for p in bucket.rglob("*")
        if p.is_file() and ".artifactor-meta" not in p.parts
    )


def test_publish_version_with_latest(source_dir: Path, store_root: Path,
                                     stub_signer: StubSigner) -> None:
    publisher = Publisher(signer=stub_signer, uploader=_filesystem_uploader(store_root))

    result = publisher.publish(_options(source_dir), timestamp=TIMESTAMP)

    assert _stored_names(store_root) == [
        "tool/latest/checksums",
        "tool/latest/checksums.asc.sig",
        "tool/latest/manifest.json",
        "tool/latest/manifest.json.asc.sig",
        "tool/v1/bin_a",
        "tool/v1/bin_b",
        "tool/v1/checksums",
        "tool/v1/checksums.asc.sig",
        "tool/v1/manifest.json",
        "tool/v1/manifest.json.asc.sig",
    ]
    assert result.uploaded_objects == 10
    assert list(result.aliases) == ["latest"]
    assert stub_signer.signed == ["manifest.json", "checksums"]
    assert [c.filepath for c in result.manifest_components] == [
        "checksums", "checksums.asc.sig", "manifest.json", "manifest.json.asc.sig",
    ]

    manifest = json.loads((store_root / "bucket" / "tool" / "v1" / "manifest.json").read_text())
    assert manifest["gcs_prefix"] == "file://bucket/tool/v1/"
    assert manifest["unix_timestamp"] == 1714564800
    assert sorted(c["filepath"] for c in manifest["components"]) == ["bin_a", "bin_b"]
    entries = {c["filepath"]: c for c in manifest["components"]}
    assert entries["bin_a"]["url"] == "https://dl.example.com/tool/v1/bin_a"
    for filepath, content in (("bin_a", b"A"), ("bin_b", b"B")):
        entry = entries[filepath]
        assert entry["bytes"] == 1
        assert DigestSet.from_dict(entry) == compute_digests(content)

    version_dir = store_root / "bucket" / "tool" / "v1"
    assert (version_dir / "bin_a").read_bytes() == b"A"
    assert (version_dir / "bin_b").read_bytes() == b"B"
    for name in ("checksums", "checksums.asc.sig", "manifest.json", "manifest.json.asc.sig"):
        assert (version_dir / name).read_bytes() == (source_dir / name).read_bytes()
        metadata = json.loads(
            (store_root / "bucket" / ".artifactor-meta" / "tool" / "v1" / f"{name}.json").read_text()
        )
        assert metadata["public"] is True

    latest = store_root / "bucket" / "tool" / "latest" / "manifest.json"
    assert latest.read_bytes() == (source_dir / "manifest.json").read_bytes()

    checksums = (store_root / "bucket" / "tool" / "v1" / "checksums").read_text()
    assert checksums.count("\n\n") == 1
    assert checksums.endswith("\n") and not checksums.endswith("\n\n")


def test_publish_ignores_stale_manifests(source_dir: Path, store_root: Path,
                                         stub_signer: StubSigner) -> None:
    (source_dir / "manifest.json").write_text("{}")
    (source_dir / "checksums.asc.sig").write_text("old signature")
    publisher = Publisher(signer=stub_signer, uploader=_filesystem_uploader(store_root))

    result = publisher.publish(_options(source_dir, latest=False))

    assert sorted(c.filepath for c in result.components) == ["bin_a", "bin_b"]
    assert result.aliases == {}
    assert result.uploaded_objects == 6
    assert "old signature" not in (source_dir / "checksums.asc.sig").read_text()


def test_publish_extra_aliases_before_latest(source_dir: Path, stub_signer: StubSigner) -> None:
    async def scenario():
        store = MemoryStore()
        service = PublishService(signer=stub_signer, uploader=Uploader(lambda location: store))
        result = await service.create_version(_options(source_dir, aliases=("stable",)))
        return store, result

    store, result = asyncio.run(scenario())

    assert list(result.aliases) == ["stable", "latest"]
    assert "tool/stable/manifest.json.asc.sig" in store.objects
    assert "tool/latest/checksums" in store.objects


def test_publish_empty_directory(tmp_path: Path, stub_signer: StubSigner) -> None:
    async def scenario():
        store = MemoryStore()
        service = PublishService(signer=stub_signer, uploader=Uploader(lambda location: store))
        result = await service.create_version(_options(tmp_path, latest=False))
        return store, result

    store, result = asyncio.run(scenario())

    assert result.components == []
    assert sorted(store.objects) == [
        "tool/v1/checksums",
        "tool/v1/checksums.asc.sig",
        "tool/v1/manifest.json",
        "tool/v1/manifest.json.asc.sig",
    ]
    assert (tmp_path / "checksums").read_text() == ""


def test_dry_run_uploads_nothing(source_dir: Path, stub_signer: StubSigner) -> None:
    store = MemoryStore()
    publisher = Publisher(signer=stub_signer, uploader=Uploader(lambda location: store))

    result = publisher.publish(_options(source_dir, dry_run=True))

    assert result.dry_run
    assert result.uploaded_objects == 0
    assert store.objects == {}
    assert (source_dir / "manifest.json.asc.sig").is_file()


def test_upload_failure_skips_aliases(source_dir: Path, stub_signer: StubSigner) -> None:
    store = MemoryStore(fail=["tool/v1/bin_b"])
    publisher = Publisher(signer=stub_signer, uploader=Uploader(lambda location: store))

    with pytest.raises(UploadError) as excinfo:
        publisher.publish(_options(source_dir))

    assert "file://bucket/tool/v1/bin_b" in excinfo.value.failed_paths
    assert not any(name.startswith("tool/latest/") for name in store.objects)


def test_signing_failure_stops_before_upload(source_dir: Path) -> None:
    class FailingSigner(StubSigner):
        def sign(self, input_path):
            raise SigningError(input_path, "no secret key")

    store = MemoryStore()
    publisher = Publisher(signer=FailingSigner(), uploader=Uploader(lambda location: store))

    with pytest.raises(SigningError):
        publisher.publish(_options(source_dir))

    assert store.objects == {}
    assert (source_dir / "manifest.json").is_file()
    assert not (source_dir / "checksums").exists()
