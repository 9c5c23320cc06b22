from __future__ import annotations

from pathlib import Path

import pytest

from artifactor.api.exceptions import ConfigurationError
from artifactor.services.config_service import ConfigService


def _service(tmp_path: Path, environ=None, config_path=None) -> ConfigService:
    return ConfigService(config_path=config_path, environ=environ or {}, project_root=tmp_path)


def _required(source_dir: Path, **overrides):
    settings = dict(
        project="tool",
        version="v1",
        dir=str(source_dir),
        storage_prefix="gcs://releases",
        url_prefix="https://dl.example.com",
    )
    settings.update(overrides)
    return settings


def test_defaults_and_normalization(tmp_path: Path, source_dir: Path) -> None:
    options = _service(tmp_path).build_options(**_required(source_dir))

    assert options.project_name == "tool"
    assert options.storage_prefix == "gcs://releases/"
    assert options.url_prefix == "https://dl.example.com/"
    assert options.latest is True
    assert options.effective_aliases == ["latest"]
    assert options.cache_max_age == 60
    assert options.max_concurrency == 16
    assert options.signer == "gpg"
    assert options.dry_run is False


@pytest.mark.parametrize("missing", ["project", "version", "dir", "storage_prefix", "url_prefix"])
def test_missing_required_setting(tmp_path: Path, source_dir: Path, missing: str) -> None:
    settings = _required(source_dir)
    settings[missing] = None

    with pytest.raises(ConfigurationError):
        _service(tmp_path).build_options(**settings)


@pytest.mark.parametrize("url_prefix", ["ftp://dl.example.com/", "dl.example.com/"])
def test_url_prefix_scheme_is_validated(tmp_path: Path, source_dir: Path, url_prefix: str) -> None:
    with pytest.raises(ConfigurationError):
        _service(tmp_path).build_options(**_required(source_dir, url_prefix=url_prefix))


@pytest.mark.parametrize("storage_prefix", ["releases/", "ftp://releases/", "gcs:///path/"])
def test_storage_prefix_is_validated(tmp_path: Path, source_dir: Path, storage_prefix: str) -> None:
    with pytest.raises(ConfigurationError):
        _service(tmp_path).build_options(**_required(source_dir, storage_prefix=storage_prefix))


def test_storage_prefix_scheme_is_lower_cased(tmp_path: Path, source_dir: Path) -> None:
    options = _service(tmp_path).build_options(
        **_required(source_dir, storage_prefix="GCS://Releases/nightly")
    )

    assert options.storage_prefix == "gcs://Releases/nightly/"


def test_missing_source_dir(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        _service(tmp_path).build_options(**_required(tmp_path / "absent"))


def test_names_must_not_contain_slash(tmp_path: Path, source_dir: Path) -> None:
    with pytest.raises(ConfigurationError):
        _service(tmp_path).build_options(**_required(source_dir, version="v1/rc"))


def test_aliases_from_comma_string(tmp_path: Path, source_dir: Path) -> None:
    options = _service(tmp_path).build_options(
        **_required(source_dir, aliases="stable, beta", latest=False)
    )

    assert options.effective_aliases == ["stable", "beta"]


def test_latest_not_duplicated(tmp_path: Path, source_dir: Path) -> None:
    options = _service(tmp_path).build_options(
        **_required(source_dir, aliases=["latest", "stable", "stable"])
    )

    assert options.effective_aliases == ["latest", "stable"]


def test_project_config_file_layering(tmp_path: Path, source_dir: Path) -> None:
    (tmp_path / ".artifactor.yaml").write_text(
        "project: from-file\n"
        "storage_prefix: s3://from-file/\n"
        "url_prefix: https://file.example.com/\n"
        "aliases: [stable]\n"
        "cache_max_age: 120\n"
        "bogus: 1\n"
    )
    environ = {"ARTIFACTOR_STORAGE_PREFIX": "gcs://from-env/"}

    options = _service(tmp_path, environ=environ).build_options(
        project=None,
        version="v2",
        dir=str(source_dir),
        url_prefix="https://flag.example.com",
    )

    assert options.project_name == "from-file"
    assert options.storage_prefix == "gcs://from-env/"
    assert options.url_prefix == "https://flag.example.com/"
    assert options.cache_max_age == 120
    assert options.effective_aliases == ["stable", "latest"]


def test_explicit_config_path_and_env_expansion(tmp_path: Path, source_dir: Path,
                                                monkeypatch) -> None:
    monkeypatch.setenv("RELEASE_BUCKET", "expanded")
    config = tmp_path / "custom.yaml"
    config.write_text("storage_prefix: gcs://${RELEASE_BUCKET}/\nlatest: false\n")

    options = _service(tmp_path, config_path=config).build_options(
        **_required(source_dir, storage_prefix=None)
    )

    assert options.storage_prefix == "gcs://expanded/"
    assert options.effective_aliases == []


def test_config_path_from_environment(tmp_path: Path, source_dir: Path) -> None:
    config = tmp_path / "env.yaml"
    config.write_text("max_concurrency: 4\n")

    service = _service(tmp_path, environ={"ARTIFACTOR_CONFIG": str(config)})
    options = service.build_options(**_required(source_dir))

    assert options.max_concurrency == 4


def test_invalid_yaml(tmp_path: Path, source_dir: Path) -> None:
    config = tmp_path / "broken.yaml"
    config.write_text("project: [unterminated\n")

    with pytest.raises(ConfigurationError):
        _service(tmp_path, config_path=config).build_options(**_required(source_dir))


@pytest.mark.parametrize("key,value", [
    ("max_concurrency", 0),
    ("max_concurrency", "many"),
    ("cache_max_age", -1),
    ("latest", "sometimes"),
])
def test_invalid_values(tmp_path: Path, source_dir: Path, key: str, value) -> None:
    with pytest.raises(ConfigurationError):
        _service(tmp_path).build_options(**_required(source_dir, **{key: value}))


def test_zero_cache_max_age_allowed(tmp_path: Path, source_dir: Path) -> None:
    options = _service(tmp_path).build_options(**_required(source_dir, cache_max_age=0))
    assert options.cache_max_age == 0
