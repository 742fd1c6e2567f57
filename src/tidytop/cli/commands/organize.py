"""CLI command that scans and auto-organizes desktop directories."""

from __future__ import annotations

from typing import Annotated, Literal

import typer

from tidytop.desktop import Desktop

from ..context import DirsArgument, format_payload, load_config, open_desktop, scan_into

OutputFormat = Annotated[
    Literal["text", "json"],
    typer.Option("--format", "-f", show_default=True, case_sensitive=False, help="Output format (text or json)."),
]


def organize(
    dirs: DirsArgument = None,
    format: OutputFormat = "text",
    force: Annotated[bool, typer.Option("--force", help="Run even when auto-organize is disabled in settings.")] = False,
) -> None:
    """Scan desktop directories and show how their icons are grouped into fences."""
    config = load_config()
    desktop = open_desktop(config)
    scan_into(desktop, config, dirs)

    report = desktop.organize(force=force)
    if not report.ran:
        typer.secho("Auto-organize is disabled in settings; use --force to run anyway.", fg=typer.colors.YELLOW)

    payload = _arrangement(desktop)
    if format.lower() == "json":
        typer.echo(format_payload(payload, "json"))
        return

    for fence in payload["fences"]:
        typer.secho(f"{fence['title']} ({len(fence['icons'])})", bold=True)
        for name in fence["icons"]:
            typer.echo(f"  {name}")
    if payload["unassigned"]:
        typer.secho(f"Unassigned ({len(payload['unassigned'])})", bold=True)
        for name in payload["unassigned"]:
            typer.echo(f"  {name}")


def _arrangement(desktop: Desktop) -> dict[str, list]:
    fences = []
    for fence in sorted(desktop.fences.list_fences(), key=lambda fence: fence.title):
        members = desktop.membership.icons_of(fence.id).unwrap_or([])
        fences.append(
            {
                "id": fence.id,
                "title": fence.title,
                "category_id": fence.category_id,
                "icons": [_display_name(icon.name, icon.extension) for icon in members],
            }
        )
    unassigned = sorted(_display_name(icon.name, icon.extension) for icon in desktop.membership.unfenced())
    return {"fences": fences, "unassigned": unassigned}


def _display_name(name: str, extension: str) -> str:
    return f"{name}{extension}"
