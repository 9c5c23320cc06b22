"""Global constants for artifactor"""

from enum import Enum

APP_NAME = "artifactor"
LOG_FORMAT = "%(message)s"

# Generated files managed by artifactor. They never take part in the
# initial scan of a source directory.
MANIFEST_FILENAME = "manifest.json"
CHECKSUMS_FILENAME = "checksums"
SIGNATURE_SUFFIX = ".asc.sig"
MANIFEST_SIGNATURE_FILENAME = MANIFEST_FILENAME + SIGNATURE_SUFFIX
CHECKSUMS_SIGNATURE_FILENAME = CHECKSUMS_FILENAME + SIGNATURE_SUFFIX

RESERVED_FILENAMES = frozenset([
    MANIFEST_FILENAME,
    MANIFEST_SIGNATURE_FILENAME,
    CHECKSUMS_FILENAME,
    CHECKSUMS_SIGNATURE_FILENAME,
])

# Checksum file layout
CHECKSUM_TAB_WIDTH = 8

# Publishing defaults
DEFAULT_CACHE_MAX_AGE = 60  # seconds, sent as cache-control:max-age=<N>
DEFAULT_MAX_CONCURRENCY = 16
DEFAULT_LATEST_ALIAS = "latest"
DEFAULT_SIGNER = "gpg"
DEFAULT_GPG_BINARY = "gpg"

# Project configuration file, looked up in the project root
PROJECT_CONFIG_FILE = ".artifactor.yaml"

URL_PREFIX_SCHEMES = ("https://", "http://")


class StorageScheme(Enum):
    GCS = "gcs"
    GS = "gs"
    S3 = "s3"
    BOS = "bos"
    FILE = "file"


SUPPORTED_STORAGE_SCHEMES = [scheme.value for scheme in StorageScheme]


# Error codes
class ErrorCode:
    CONFIGURATION_ERROR = "AR001"
    FILE_ACCESS_ERROR = "AR002"
    MANIFEST_WRITE_ERROR = "AR003"
    SIGNING_ERROR = "AR004"
    UPLOAD_ERROR = "AR005"
    STORAGE_ERROR = "AR006"


# Environment variables
ENV_CONFIG_PATH = "ARTIFACTOR_CONFIG"
ENV_PROJECT = "ARTIFACTOR_PROJECT"
ENV_STORAGE_PREFIX = "ARTIFACTOR_STORAGE_PREFIX"
ENV_URL_PREFIX = "ARTIFACTOR_URL_PREFIX"
ENV_CACHE_MAX_AGE = "ARTIFACTOR_CACHE_MAX_AGE"
ENV_MAX_CONCURRENCY = "ARTIFACTOR_MAX_CONCURRENCY"
ENV_GPG_KEY = "ARTIFACTOR_GPG_KEY"
ENV_FILESYSTEM_ROOT = "ARTIFACTOR_FILESYSTEM_ROOT"
ENV_BOS_ACCESS_KEY = "BOS_AK"
ENV_BOS_SECRET_KEY = "BOS_SK"
ENV_BOS_ENDPOINT = "BOS_ENDPOINT"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
