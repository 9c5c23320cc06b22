"""Scan command implementation"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console

from ..utils.output import component_table, format_error
from ...api.exceptions import ArtifactorError
from ...core.component_scanner import scan_components
from ...utils.file_utils import format_size

console = Console()


@click.command()
@click.argument('source_dir', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option('--storage-prefix', default="",
              help='Storage prefix to show in the storage path column')
@click.option('--url-prefix', default="",
              help='Url prefix used for the component urls')
@click.option('--digests', is_flag=True, help='Show the sha256 digest of every file')
@click.option('--json', 'as_json', is_flag=True, help='Print manifest entries as JSON')
def scan(source_dir, storage_prefix, url_prefix, digests, as_json):
    """List the components a publish of SOURCE_DIR would contain

    Nothing is written; generated manifest and signature files are skipped.
    """
    try:
        components = scan_components(source_dir, storage_prefix, url_prefix)
    except ArtifactorError as e:
        format_error(e, title="Scan Error")
        sys.exit(1)

    components.sort(key=lambda c: c.filepath)

    if as_json:
        click.echo(json.dumps([c.to_dict() for c in components], indent=2))
        return

    if not components:
        console.print(f"[yellow]No components found in {source_dir}[/yellow]")
        return

    console.print(component_table(components, title=str(source_dir), show_digests=digests))
    total = sum(c.size for c in components)
    console.print(f"[bold]{len(components)}[/bold] components, {format_size(total)}")
