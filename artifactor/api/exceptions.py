"""Exception definitions for artifactor"""

from typing import List, Optional, Tuple

from ..constants import ErrorCode


class ArtifactorError(Exception):
    """Base exception for artifactor"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigurationError(ArtifactorError):
    """Missing or malformed publish settings"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR)


class FileAccessError(ArtifactorError):
    """A source file could not be fully read"""

    def __init__(self, path, reason: Optional[str] = None):
        message = f"Cannot read {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, ErrorCode.FILE_ACCESS_ERROR)
        self.path = str(path)


class ManifestWriteError(ArtifactorError):
    """A manifest could not be serialized or written"""

    def __init__(self, path, reason: Optional[str] = None):
        message = f"Failed to write manifest {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, ErrorCode.MANIFEST_WRITE_ERROR)
        self.path = str(path)


class SigningError(ArtifactorError):
    """The external signer reported failure"""

    def __init__(self, path, message: str, returncode: Optional[int] = None,
                 stderr: Optional[str] = None):
        super().__init__(f"Signing {path} failed: {message}", ErrorCode.SIGNING_ERROR)
        self.path = str(path)
        self.returncode = returncode
        self.stderr = stderr


class StorageError(ArtifactorError):
    """Storage backend could not be created or reached"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.STORAGE_ERROR)


class UploadError(ArtifactorError):
    """One or more objects of an upload batch failed

    Every failure of the batch is kept in ``errors`` as
    ``(storage_path, exception)`` pairs, ordered like the batch.
    """

    def __init__(self, errors: List[Tuple[str, BaseException]]):
        self.errors = list(errors)
        if len(self.errors) == 1:
            path, exc = self.errors[0]
            message = f"Upload of {path} failed: {exc}"
        else:
            lines = [f"{len(self.errors)} uploads failed:"]
            lines.extend(f"  {path}: {exc}" for path, exc in self.errors)
            message = "\n".join(lines)
        super().__init__(message, ErrorCode.UPLOAD_ERROR)

    @property
    def first(self) -> BaseException:
        """First failure in batch order"""
        return self.errors[0][1]

    @property
    def failed_paths(self) -> List[str]:
        return [path for path, _ in self.errors]
