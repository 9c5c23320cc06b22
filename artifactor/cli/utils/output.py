# artifactor/cli/utils/output.py
"""Output formatting utilities"""

from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from ...api.exceptions import ArtifactorError, UploadError
from ...constants import EMOJI_SUCCESS, EMOJI_ERROR
from ...models import Component, PublishResult
from ...utils.file_utils import format_size

console = Console()


def component_table(components: Sequence[Component],
                    title: str = "Components",
                    show_digests: bool = False) -> Table:
    """Build a table of components"""
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("File", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Storage Path", style="green")
    if show_digests:
        table.add_column("SHA256", style="dim")

    for component in components:
        row = [component.filepath, format_size(component.size), component.storage_path]
        if show_digests:
            row.append(component.digests.sha256)
        table.add_row(*row)

    return table


def format_publish_result(result: PublishResult) -> None:
    """Format and display publish operation result"""
    console.print(component_table(
        result.components + result.manifest_components,
        title=f"{result.project} {result.version}",
    ))

    if result.dry_run:
        lines = [
            f"[yellow]Dry run[/yellow]: manifests written and signed, nothing uploaded",
            f"",
            f"[bold]Manifest:[/bold] {result.manifest_path}",
            f"[bold]Checksums:[/bold] {result.checksums_path}",
        ]
        console.print(Panel("\n".join(lines), title="Publish Result", border_style="yellow"))
        return

    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] Published {result.project} {result.version}",
        f"",
        f"[bold]Prefix:[/bold] {result.storage_prefix}",
        f"[bold]Components:[/bold] {len(result.components)} ({format_size(result.total_bytes)})",
        f"[bold]Objects uploaded:[/bold] {result.uploaded_objects}",
        f"[bold]Duration:[/bold] {result.duration:.2f}s",
    ]

    if result.aliases:
        lines.append("")
        lines.append("[bold]Aliases:[/bold]")
        for alias, components in result.aliases.items():
            prefix = components[0].storage_path.rsplit("/", 1)[0] + "/" if components else ""
            lines.append(f"  • {alias}: {prefix}")

    console.print(Panel("\n".join(lines), title="Publish Result", border_style="green"))


def format_error(error: ArtifactorError, title: str = "Publish Error") -> None:
    """Display an artifactor error in a panel"""
    if isinstance(error, UploadError) and len(error.errors) > 1:
        body = "\n".join(
            [f"[red]{EMOJI_ERROR} {len(error.errors)} uploads failed:[/red]", ""]
            + [f"  • {path}: {exc}" for path, exc in error.errors]
        )
    else:
        body = f"[red]{EMOJI_ERROR} {error}[/red]"

    if error.error_code:
        body += f"\n\n[dim]Error code: {error.error_code}[/dim]"

    console.print(Panel(body, title=f"[bold red]{title}[/bold red]", border_style="red"))
