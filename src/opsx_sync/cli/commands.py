"""Implementations of the ``status``, ``update`` and ``config-path`` commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from opsx_sync.adapters import CommandAdapterRegistry
from opsx_sync.catalog import get_command_templates, get_skill_templates
from opsx_sync.core.global_config import (
    get_global_config,
    get_global_config_path,
    get_global_data_dir,
)
from opsx_sync.detection import (
    ToolVersionStatus,
    get_all_tool_version_status,
    get_configured_tools,
    group_by_tool,
    summarize_tool_status,
)
from opsx_sync.exceptions import GlobalConfigError
from opsx_sync.generator import sync_tools

console = Console()

_STATUS_STYLES = {
    ToolVersionStatus.NOT_CONFIGURED: "dim",
    ToolVersionStatus.NOT_GENERATED: "yellow",
    ToolVersionStatus.STALE: "yellow",
    ToolVersionStatus.UP_TO_DATE: "green",
    ToolVersionStatus.AHEAD: "red",
}


def _format_status(status: ToolVersionStatus) -> str:
    style = _STATUS_STYLES.get(status, "white")
    return f"[{style}]{status.value}[/{style}]"


def status(
    path: Path = typer.Argument(Path("."), help="Project root"),
    show_all: bool = typer.Option(False, "--all", help="Include tools that are not configured"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    workers: int = typer.Option(4, "--workers", help="Tools inspected in parallel"),
) -> None:
    """Show which generated artifacts are missing, stale or up to date."""
    project_root = path.resolve()
    statuses = get_all_tool_version_status(project_root, max_workers=workers)

    if json_output:
        payload = [
            {
                "tool": item.tool_id,
                "kind": item.kind.value,
                "id": item.artifact_id,
                "path": item.path.as_posix(),
                "status": item.status.value,
                "generated_version": item.generated_version,
                "current_version": item.current_version,
                "error": item.error,
            }
            for item in statuses
            if show_all or item.configured
        ]
        print(json.dumps(payload, indent=2))
        return

    grouped = group_by_tool(statuses)
    configured = [tool_id for tool_id, items in grouped.items() if items and items[0].configured]
    if not configured and not show_all:
        console.print("[yellow]No configured tools found.[/yellow]")
        valid = ", ".join(adapter.config_dir + "/" for adapter in CommandAdapterRegistry.get_all())
        console.print(f"[dim]Looked for: {valid}[/dim]")
        return

    table = Table(title=f"Generated artifacts in {project_root}", show_lines=False)
    table.add_column("Tool", style="cyan")
    table.add_column("Kind", style="dim")
    table.add_column("Id", style="bold")
    table.add_column("Status")
    table.add_column("On disk", justify="right")
    table.add_column("Catalog", justify="right")

    for tool_id, items in grouped.items():
        if not show_all and not items[0].configured:
            continue
        if not items[0].configured:
            table.add_row(tool_id, "", "", _format_status(ToolVersionStatus.NOT_CONFIGURED), "", "")
            continue
        for item in items:
            table.add_row(
                tool_id,
                item.kind.value,
                item.artifact_id,
                _format_status(item.status),
                item.generated_version or "-",
                item.current_version,
            )

    console.print(table)

    ahead = [tool_id for tool_id, items in grouped.items() if summarize_tool_status(items) is ToolVersionStatus.AHEAD]
    if ahead:
        console.print(
            f"[red]Artifacts newer than this catalog found for: {', '.join(ahead)}. "
            "They were left untouched; check which opsx-sync version generated them.[/red]"
        )


def update(
    path: Path = typer.Argument(Path("."), help="Project root"),
    tools: Optional[List[str]] = typer.Option(
        None, "--tool", "-t", help="Tool id to update (repeatable). Defaults to all configured tools."
    ),
    artifact_ids: Optional[List[str]] = typer.Option(
        None, "--id", help="Catalog identifier to update (repeatable). Defaults to all identifiers."
    ),
    force: bool = typer.Option(False, "--force", help="Also rewrite artifacts that are up to date"),
) -> None:
    """Regenerate missing or stale artifacts for configured tools."""
    project_root = path.resolve()

    if artifact_ids:
        known = sorted({entry.id for entry in get_skill_templates()} | {entry.id for entry in get_command_templates()})
        unknown = [artifact_id for artifact_id in artifact_ids if artifact_id not in known]
        if unknown:
            console.print(
                f"[red]Error:[/red] Unknown identifier: {', '.join(unknown)}. Valid identifiers: {', '.join(known)}"
            )
            raise typer.Exit(1)

    try:
        config = get_global_config()
    except GlobalConfigError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    selected = tools or get_configured_tools(project_root)
    if not selected:
        console.print("[yellow]No configured tools found; nothing to update.[/yellow]")
        return

    report = sync_tools(project_root, selected, config, force=force, artifact_ids=artifact_ids or None)

    for result in report.results:
        if not result.configured and not result.errors:
            console.print(f"[dim]{result.tool_id}: not configured, skipped[/dim]")
            continue
        for written in result.written:
            console.print(f"[green]✓[/green] {result.tool_id}: {written.as_posix()}")
        for skipped_path, reason in result.skipped:
            if reason.startswith("ahead"):
                console.print(f"[red]![/red] {result.tool_id}: {skipped_path.as_posix()} {reason}")
        for error in result.errors:
            console.print(f"[red]✗[/red] {result.tool_id}: {error}")

    written_count = len(report.written)
    console.print(f"\n{written_count} file(s) written.")
    if not report.success:
        raise typer.Exit(1)


def config_path() -> None:
    """Print the global config file and data directory locations."""
    console.print(f"Config: {get_global_config_path()}")
    console.print(f"Data:   {get_global_data_dir()}")


__all__ = ["status", "update", "config_path"]
