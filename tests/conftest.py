from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest

from artifactor.api.exceptions import StorageError
from artifactor.signing.base import Signer
from artifactor.storage.base import ObjectStore


class StubSigner(Signer):
    """Writes a fake armored signature instead of calling gpg"""

    name = "stub"

    def __init__(self) -> None:
        self.signed: List[str] = []

    def sign(self, input_path):
        input_path = Path(input_path)
        output_path = self.signature_path(input_path)
        output_path.write_text(
            "-----BEGIN PGP SIGNATURE-----\n"
            f"stub {input_path.name}\n"
            "-----END PGP SIGNATURE-----\n",
            encoding="utf-8",
        )
        self.signed.append(input_path.name)
        return output_path


class MemoryStore(ObjectStore):
    """In-memory object store recording every call"""

    def __init__(self,
                 bucket: str = "bucket",
                 fail: Iterable[str] = (),
                 delay: float = 0.0,
                 gate: Optional[asyncio.Event] = None) -> None:
        super().__init__(bucket, {})
        self.objects: Dict[str, Dict] = {}
        self.public: List[str] = []
        self.fail = set(fail)
        self.delay = delay
        self.gate = gate
        self.active = 0
        self.peak = 0

    async def _do_initialize(self) -> None:
        pass

    async def put_object(self, name, data, cache_control, crc32c):
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if name in self.fail:
                raise StorageError(f"rejected {name}")
            if self.gate is not None:
                await self.gate.wait()
            self.objects[name] = {
                "data": bytes(data),
                "cache_control": cache_control,
                "crc32c": crc32c,
            }
        finally:
            self.active -= 1

    async def make_public(self, name):
        self.public.append(name)

    async def exists(self, name):
        return name in self.objects

    async def list(self, prefix=""):
        return sorted(n for n in self.objects if n.startswith(prefix))

    async def get_metadata(self, name):
        return self.objects.get(name)


@pytest.fixture
def stub_signer() -> StubSigner:
    return StubSigner()


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    root = tmp_path / "dist"
    root.mkdir()
    (root / "bin_a").write_bytes(b"A")
    (root / "bin_b").write_bytes(b"B")
    return root


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    return tmp_path / "store"
