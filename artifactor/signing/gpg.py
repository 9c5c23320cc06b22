"""GnuPG signer"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .base import Signer
from ..api.exceptions import SigningError
from ..constants import DEFAULT_GPG_BINARY


class GpgSigner(Signer):
    """Signs files with the local ``gpg`` executable

    Going through the executable instead of a crypto library keeps whatever
    the user's gpg setup provides (gpg-agent, agent forwarding over ssh,
    smartcards).
    """

    name = "gpg"

    def __init__(self,
                 binary: str = DEFAULT_GPG_BINARY,
                 key: Optional[str] = None,
                 extra_args: Sequence[str] = ()):
        """
        Args:
            binary: gpg executable
            key: Key id passed as --local-user (default key otherwise)
            extra_args: Additional gpg arguments
        """
        self.binary = binary
        self.key = key
        self.extra_args = list(extra_args)
        self.logger = logging.getLogger(self.__class__.__name__)

    def build_command(self, input_path: Path, output_path: Path) -> List[str]:
        """Command line for signing input_path into output_path"""
        command = [self.binary, '--yes', '--armor']
        if self.key:
            command.extend(['--local-user', self.key])
        command.extend(self.extra_args)
        command.extend(['--output', str(output_path), '--detach-sig', str(input_path)])
        return command

    def sign(self, input_path: Union[str, Path]) -> Path:
        """Create ``<input>.asc.sig``

        Raises:
            SigningError: If gpg is missing, fails, or writes no signature
        """
        input_path = Path(input_path)
        output_path = self.signature_path(input_path)

        if not input_path.is_file():
            raise SigningError(input_path, "input file does not exist")

        command = self.build_command(input_path, output_path)
        self.logger.debug(f"Running {' '.join(command)}")

        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise SigningError(input_path, f"{self.binary} not found") from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise SigningError(
                input_path,
                stderr or f"{self.binary} exited with status {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr,
            )

        if not output_path.is_file():
            raise SigningError(input_path, f"{self.binary} did not write {output_path}")

        self.logger.info(f"Signed {input_path} -> {output_path.name}")
        return output_path

    def check(self) -> str:
        """Return the gpg version line"""
        if shutil.which(self.binary) is None:
            raise SigningError(self.binary, f"{self.binary} not found on PATH")

        result = subprocess.run([self.binary, '--version'], capture_output=True, text=True)
        if result.returncode != 0:
            raise SigningError(self.binary, result.stderr.strip(), returncode=result.returncode)

        lines = result.stdout.splitlines()
        return lines[0] if lines else self.binary
