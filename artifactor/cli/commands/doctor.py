"""System diagnostic command"""

import importlib.util
import sys

import click
from rich import box
from rich.console import Console
from rich.table import Table

from ...api.exceptions import ArtifactorError
from ...constants import EMOJI_SUCCESS, EMOJI_ERROR
from ...signing import create_signer, get_supported_signers

console = Console()

# Import name of the SDK behind each storage scheme
STORAGE_SDKS = {
    "gcs/gs": ("google.cloud.storage", "google-cloud-storage"),
    "s3": ("boto3", "boto3"),
    "bos": ("baidubce", "bce-python-sdk"),
}


class DiagnosticCheck:
    """Base class for diagnostic checks"""

    def __init__(self, name: str, description: str, required: bool = True):
        self.name = name
        self.description = description
        self.required = required
        self.passed = False
        self.message = ""

    def run(self) -> 'DiagnosticCheck':
        """Run the diagnostic check"""
        raise NotImplementedError


class SignerCheck(DiagnosticCheck):
    """Check that a signing backend is usable"""

    def __init__(self, signer_name: str):
        super().__init__(f"Signer ({signer_name})", "Signing backend is available")
        self.signer_name = signer_name

    def run(self):
        try:
            self.message = create_signer(self.signer_name).check()
            self.passed = True
        except ArtifactorError as e:
            self.message = str(e)
        return self


class StorageSdkCheck(DiagnosticCheck):
    """Check that the SDK of a storage backend is installed"""

    def __init__(self, scheme: str, module: str, package: str):
        super().__init__(f"Storage ({scheme})", f"{package} is installed", required=False)
        self.module = module
        self.package = package

    def run(self):
        try:
            found = importlib.util.find_spec(self.module) is not None
        except ModuleNotFoundError:
            found = False

        self.passed = found
        self.message = "installed" if found else f"pip install {self.package}"
        return self


@click.command()
@click.option('--signer', default='gpg', type=click.Choice(get_supported_signers()),
              help='Signing backend to check')
def doctor(signer):
    """Check signing and storage prerequisites"""
    checks = [SignerCheck(signer)]
    checks.extend(
        StorageSdkCheck(scheme, module, package)
        for scheme, (module, package) in STORAGE_SDKS.items()
    )

    table = Table(title="Diagnostics", box=box.SIMPLE)
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Details", style="dim")

    failed = False
    for check in checks:
        check.run()
        if check.passed:
            status = f"[green]{EMOJI_SUCCESS}[/green]"
        elif check.required:
            status = f"[red]{EMOJI_ERROR}[/red]"
            failed = True
        else:
            status = "[yellow]-[/yellow]"
        table.add_row(check.name, status, check.message)

    console.print(table)

    if failed:
        sys.exit(1)
