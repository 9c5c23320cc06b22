"""Publish configuration service"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Any, Mapping

import yaml

from ..api.exceptions import ConfigurationError
from ..constants import (
    PROJECT_CONFIG_FILE,
    URL_PREFIX_SCHEMES,
    DEFAULT_CACHE_MAX_AGE,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_SIGNER,
    ENV_CONFIG_PATH,
    ENV_PROJECT,
    ENV_STORAGE_PREFIX,
    ENV_URL_PREFIX,
    ENV_CACHE_MAX_AGE,
    ENV_MAX_CONCURRENCY,
    ENV_GPG_KEY,
)
from ..models.options import PublishOptions
from ..storage.base import parse_storage_prefix

# Environment variable for each settings key
ENVIRONMENT_KEYS = {
    'project': ENV_PROJECT,
    'storage_prefix': ENV_STORAGE_PREFIX,
    'url_prefix': ENV_URL_PREFIX,
    'cache_max_age': ENV_CACHE_MAX_AGE,
    'max_concurrency': ENV_MAX_CONCURRENCY,
    'gpg_key': ENV_GPG_KEY,
}

CONFIG_KEYS = {
    'project', 'version', 'dir', 'storage_prefix', 'url_prefix', 'aliases',
    'latest', 'cache_max_age', 'max_concurrency', 'signer', 'gpg_key',
    'dry_run', 'storage_options',
}

DEFAULTS: Dict[str, Any] = {
    'aliases': [],
    'latest': True,
    'cache_max_age': DEFAULT_CACHE_MAX_AGE,
    'max_concurrency': DEFAULT_MAX_CONCURRENCY,
    'signer': DEFAULT_SIGNER,
    'gpg_key': None,
    'dry_run': False,
    'storage_options': {},
}


def _with_trailing_slash(value: str) -> str:
    return value if value.endswith("/") else value + "/"


class ConfigService:
    """Builds validated :class:`PublishOptions` from layered settings

    Precedence, lowest first: defaults, YAML config file, environment,
    explicit overrides (command line flags).
    """

    def __init__(self,
                 config_path: Optional[Path] = None,
                 environ: Optional[Mapping[str, str]] = None,
                 project_root: Optional[Path] = None):
        """Initialize config service

        Args:
            config_path: Explicit YAML config file (must exist if given)
            environ: Environment mapping (defaults to os.environ)
            project_root: Directory searched for .artifactor.yaml (default: cwd)
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.environ = os.environ if environ is None else environ
        if config_path is None and self.environ.get(ENV_CONFIG_PATH):
            config_path = Path(self.environ[ENV_CONFIG_PATH])
        self.config_path = Path(config_path) if config_path else None
        self.logger = logging.getLogger(self.__class__.__name__)

    def load_file(self, path: Path) -> Dict[str, Any]:
        """Load a YAML config file

        Environment variables in the file are expanded.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        try:
            with open(path, 'r') as f:
                content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}")

        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping")

        unknown = sorted(set(data) - CONFIG_KEYS)
        if unknown:
            self.logger.warning(f"Ignoring unknown keys in {path}: {', '.join(unknown)}")

        self.logger.debug(f"Loaded configuration from {path}")
        return {k: v for k, v in data.items() if k in CONFIG_KEYS}

    def _file_settings(self) -> Dict[str, Any]:
        if self.config_path is not None:
            if not self.config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {self.config_path}")
            return self.load_file(self.config_path)

        candidate = self.project_root / PROJECT_CONFIG_FILE
        if candidate.is_file():
            return self.load_file(candidate)

        return {}

    def _env_settings(self) -> Dict[str, Any]:
        return {
            key: self.environ[name]
            for key, name in ENVIRONMENT_KEYS.items()
            if self.environ.get(name)
        }

    def merge(self, **overrides: Any) -> Dict[str, Any]:
        """Merge all settings layers; ``None`` overrides are ignored"""
        explicit = {k: v for k, v in overrides.items() if v is not None}

        settings = dict(DEFAULTS)
        settings.update(self._file_settings())
        settings.update(self._env_settings())
        settings.update(explicit)
        return settings

    def build_options(self, **overrides: Any) -> PublishOptions:
        """Merge settings and validate them into publish options

        Args:
            **overrides: Explicit settings (project, version, dir,
                storage_prefix, url_prefix, aliases, latest, cache_max_age,
                max_concurrency, signer, gpg_key, dry_run, storage_options)

        Raises:
            ConfigurationError: If a required setting is missing or malformed
        """
        settings = self.merge(**overrides)

        for key in ('dir', 'version', 'project'):
            if not settings.get(key):
                raise ConfigurationError(f"'{key}' is required")

        source_dir = Path(settings['dir'])
        if not source_dir.is_dir():
            raise ConfigurationError(f"Source directory does not exist: {source_dir}")

        storage_prefix = settings.get('storage_prefix')
        if not storage_prefix:
            raise ConfigurationError("'storage_prefix' is required")
        location = parse_storage_prefix(_with_trailing_slash(str(storage_prefix)))
        storage_prefix = location.bucket_url + location.key_prefix

        url_prefix = settings.get('url_prefix')
        if not url_prefix or not str(url_prefix).startswith(URL_PREFIX_SCHEMES):
            raise ConfigurationError(
                "'url_prefix' is required and must start with "
                + " or ".join(URL_PREFIX_SCHEMES)
            )
        url_prefix = _with_trailing_slash(str(url_prefix))

        return PublishOptions(
            project_name=self._name(settings['project'], 'project'),
            version=self._name(settings['version'], 'version'),
            source_dir=source_dir,
            storage_prefix=storage_prefix,
            url_prefix=url_prefix,
            aliases=tuple(self._aliases(settings.get('aliases'))),
            latest=self._flag(settings.get('latest'), 'latest'),
            cache_max_age=self._positive_int(settings.get('cache_max_age'), 'cache_max_age', allow_zero=True),
            max_concurrency=self._positive_int(settings.get('max_concurrency'), 'max_concurrency'),
            signer=str(settings.get('signer') or DEFAULT_SIGNER),
            gpg_key=settings.get('gpg_key') or None,
            dry_run=self._flag(settings.get('dry_run'), 'dry_run'),
            storage_options=dict(settings.get('storage_options') or {}),
        )

    @staticmethod
    def _name(value: Any, key: str) -> str:
        name = str(value).strip()
        if not name or "/" in name:
            raise ConfigurationError(f"'{key}' must be a non-empty name without '/': {value!r}")
        return name

    @classmethod
    def _aliases(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [part for part in value.split(",") if part.strip()]
        if not isinstance(value, (list, tuple)):
            raise ConfigurationError(f"'aliases' must be a list: {value!r}")
        return [cls._name(alias, 'aliases') for alias in value]

    @staticmethod
    def _flag(value: Any, key: str) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ('1', 'true', 'yes', 'on'):
            return True
        if isinstance(value, str) and value.lower() in ('0', 'false', 'no', 'off'):
            return False
        raise ConfigurationError(f"'{key}' must be a boolean: {value!r}")

    @staticmethod
    def _positive_int(value: Any, key: str, allow_zero: bool = False) -> int:
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"'{key}' must be an integer: {value!r}")

        minimum = 0 if allow_zero else 1
        if number < minimum:
            raise ConfigurationError(f"'{key}' must be at least {minimum}: {number}")
        return number
