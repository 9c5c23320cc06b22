from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from artifactor.api.exceptions import ConfigurationError, SigningError
from artifactor.signing import GpgSigner, create_signer, get_supported_signers, register_signer
from artifactor.signing import factory as signer_factory

from conftest import StubSigner


class FakeGpg:
    """Stands in for subprocess.run and records the commands"""

    def __init__(self, returncode: int = 0, stderr: str = "", write_output: bool = True) -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.write_output = write_output
        self.commands = []

    def __call__(self, command, capture_output=False, text=False):
        self.commands.append(command)
        if self.returncode == 0 and self.write_output:
            output = command[command.index("--output") + 1]
            Path(output).write_text("-----BEGIN PGP SIGNATURE-----\n")
        return subprocess.CompletedProcess(command, self.returncode, stdout="", stderr=self.stderr)


@pytest.fixture
def manifest(tmp_path: Path) -> Path:
    path = tmp_path / "manifest.json"
    path.write_text("{}")
    return path


def test_build_command(tmp_path: Path) -> None:
    signer = GpgSigner()

    command = signer.build_command(tmp_path / "in", tmp_path / "in.asc.sig")

    assert command == [
        "gpg", "--yes", "--armor",
        "--output", str(tmp_path / "in.asc.sig"),
        "--detach-sig", str(tmp_path / "in"),
    ]


def test_build_command_with_key(tmp_path: Path) -> None:
    command = GpgSigner(key="ABCDEF").build_command(tmp_path / "in", tmp_path / "out")

    assert command[3:5] == ["--local-user", "ABCDEF"]


def test_sign_writes_signature(manifest: Path, monkeypatch) -> None:
    fake = FakeGpg()
    monkeypatch.setattr(subprocess, "run", fake)

    signature = GpgSigner().sign(manifest)

    assert signature == manifest.with_name("manifest.json.asc.sig")
    assert signature.is_file()
    assert fake.commands[0][-1] == str(manifest)


def test_sign_failure_carries_stderr(manifest: Path, monkeypatch) -> None:
    monkeypatch.setattr(subprocess, "run", FakeGpg(returncode=2, stderr="gpg: no default secret key\n"))

    with pytest.raises(SigningError) as excinfo:
        GpgSigner().sign(manifest)

    error = excinfo.value
    assert error.returncode == 2
    assert error.stderr == "gpg: no default secret key\n"
    assert "no default secret key" in str(error)
    assert error.path == str(manifest)


def test_sign_without_output_file(manifest: Path, monkeypatch) -> None:
    monkeypatch.setattr(subprocess, "run", FakeGpg(write_output=False))

    with pytest.raises(SigningError):
        GpgSigner().sign(manifest)


def test_sign_missing_binary(manifest: Path) -> None:
    with pytest.raises(SigningError) as excinfo:
        GpgSigner(binary="artifactor-no-such-gpg").sign(manifest)

    assert "not found" in str(excinfo.value)


def test_sign_missing_input(tmp_path: Path) -> None:
    with pytest.raises(SigningError):
        GpgSigner().sign(tmp_path / "absent")


def test_signer_registry(monkeypatch) -> None:
    assert "gpg" in get_supported_signers()
    assert isinstance(create_signer("gpg", key="ABCDEF"), GpgSigner)

    # restored on teardown
    monkeypatch.setitem(signer_factory._signers, "stub", StubSigner)
    register_signer("stub", StubSigner)
    assert "stub" in get_supported_signers()
    assert isinstance(create_signer("stub"), StubSigner)

    with pytest.raises(ConfigurationError):
        create_signer("pgp-cloud")
