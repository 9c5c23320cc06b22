# artifactor/signing/base.py
"""Signer abstract base class"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from ..constants import SIGNATURE_SUFFIX


class Signer(ABC):
    """Produces a detached, armored signature file next to an input file

    Implementations are synchronous, make a single attempt, and raise
    :class:`~artifactor.api.exceptions.SigningError` on any failure.
    """

    name = "abstract"

    def signature_path(self, input_path: Union[str, Path]) -> Path:
        """Conventional signature location: input path + ``.asc.sig``"""
        input_path = Path(input_path)
        return input_path.with_name(input_path.name + SIGNATURE_SUFFIX)

    @abstractmethod
    def sign(self, input_path: Union[str, Path]) -> Path:
        """
        Sign a file

        Args:
            input_path: File to sign (must exist)

        Returns:
            Path of the written signature file
        """
        pass

    def check(self) -> str:
        """Describe the signer backend; raise SigningError if it is unusable"""
        return self.name
