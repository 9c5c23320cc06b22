"""Publish command implementation"""

import sys
from pathlib import Path

import click
from rich.console import Console

from ..utils.output import format_publish_result, format_error
from ...api import Publisher
from ...api.exceptions import ArtifactorError
from ...services.config_service import ConfigService
from ...signing import get_supported_signers

console = Console()


@click.command()
@click.option('--project', '-p', default=None,
              help='Top level project name')
@click.option('--version', '-V', 'version', default=None,
              help='Version name')
@click.option('--dir', '-D', 'source_dir', default=None,
              type=click.Path(file_okay=False, path_type=Path),
              help='Directory with the files to publish')
@click.option('--storage-prefix', '--gcs-prefix', 'storage_prefix', default=None,
              help='Storage bucket address, e.g. gcs://bucket/ or s3://bucket/releases/')
@click.option('--url-prefix', default=None,
              help='Public url prefix used in the manifest (https://...)')
@click.option('--alias', '-a', 'aliases', multiple=True,
              help='Additional alias to publish the manifests under (repeatable)')
@click.option('--latest/--no-latest', default=None,
              help='Publish the "latest" alias (default: on)')
@click.option('--cache-max-age', type=int, default=None,
              help='Cache-Control max-age in seconds (default: 60)')
@click.option('--max-concurrency', type=int, default=None,
              help='Maximum simultaneous uploads (default: 16)')
@click.option('--signer', default=None,
              type=click.Choice(get_supported_signers()),
              help='Signing backend')
@click.option('--gpg-key', default=None,
              help='Key id used for signing (default: gpg default key)')
@click.option('--config', '-c', 'config_path', default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML configuration file (default: ./.artifactor.yaml)')
@click.option('--dry-run', is_flag=True, default=None,
              help='Write and sign manifests without uploading')
@click.pass_context
def publish(ctx, project, version, source_dir, storage_prefix, url_prefix, aliases,
            latest, cache_max_age, max_concurrency, signer, gpg_key, config_path, dry_run):
    """Create a version from a directory and publish it

    Every file in the directory is hashed and listed in manifest.json and
    checksums; both are signed and everything is uploaded below
    <storage-prefix>/<project>/<version>/. The manifest files are also
    published under each alias, e.g. <storage-prefix>/<project>/latest/.

    Examples:
        # Publish dist/ as version 1.2.0 of "tool" to GCS
        artifactor publish -p tool -V 1.2.0 -D dist \\
            --storage-prefix gcs://releases/ --url-prefix https://dl.example.com/

        # Extra alias, no "latest"
        artifactor publish ... --alias stable --no-latest
    """
    try:
        options = ConfigService(config_path).build_options(
            project=project,
            version=version,
            dir=str(source_dir) if source_dir else None,
            storage_prefix=storage_prefix,
            url_prefix=url_prefix,
            aliases=list(aliases) or None,
            latest=latest,
            cache_max_age=cache_max_age,
            max_concurrency=max_concurrency,
            signer=signer,
            gpg_key=gpg_key,
            dry_run=dry_run or None,
        )

        console.print(
            f"[bold]Creating version[/bold] {options.project_name} {options.version}"
        )

        with console.status("[bold green]Publishing...[/bold green]"):
            result = Publisher().publish(options)

        format_publish_result(result)

    except ArtifactorError as e:
        format_error(e)
        sys.exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Publishing cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]An unexpected error occurred:[/red] {e}")

        if ctx.obj is not None and ctx.obj.debug:
            console.print_exception()
        else:
            console.print("\n[dim]Run with --debug for more details[/dim]")

        sys.exit(1)
