# artifactor/cli/main.py
"""Command line entry point"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from ..__version__ import __version__
from ..constants import APP_NAME, LOG_FORMAT
from .commands import publish, scan, doctor

# Log records go to stderr so command output stays pipeable
console = Console(stderr=True)

QUIET_LOGGERS = ("asyncio", "aiofiles", "google", "botocore", "boto3", "urllib3", "baidubce")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Route log records through rich

    Args:
        verbose: Show INFO records (pipeline progress)
        debug: Show DEBUG records with time and source location
    """
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=debug,
        show_path=debug,
        rich_tracebacks=True,
        tracebacks_suppress=[click],
    )
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler], force=True)

    # SDK chatter stays hidden unless it is a warning
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


class Context:
    """Options of the command group shared with subcommands"""

    def __init__(self, verbose: bool = False, debug: bool = False):
        self.verbose = verbose
        self.debug = debug


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Log pipeline progress')
@click.option('-d', '--debug', is_flag=True, help='Log everything, with tracebacks')
@click.option('-q', '--quiet', is_flag=True, help='Disable logging')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """Artifactor - Publish signed artifact versions

    Turns a directory of build outputs into a versioned, checksummed and
    signed release in object storage (GCS, S3, BOS or a local directory),
    with aliases such as "latest" pointing at the newest manifest.
    """
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context(verbose=verbose, debug=debug)


for command in (publish.publish, scan.scan, doctor.doctor):
    cli.add_command(command)


def main():
    """Console script entry point"""
    try:
        cli(prog_name=APP_NAME)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if {'-d', '--debug'} & set(sys.argv):
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
