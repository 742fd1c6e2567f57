"""CLI commands for saved desktop layouts."""

from __future__ import annotations

from typing import Annotated

import typer
from result import Err, Ok

from tidytop.layouts import LayoutError

from ..context import DirsArgument, fail, load_config, open_desktop, scan_into

app = typer.Typer(help="Capture and manage saved desktop layouts.")


@app.callback(invoke_without_command=True)
def _layouts_root(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("capture")
def capture(
    name: Annotated[str, typer.Argument(help="Name of the new layout")],
    dirs: DirsArgument = None,
    description: Annotated[str, typer.Option("--description", "-d", help="Free-form description")] = "",
) -> None:
    """Scan, auto-organize and save the arrangement as a new layout."""
    config = load_config()
    desktop = open_desktop(config)
    scan_into(desktop, config, dirs)
    desktop.organize(force=True)

    match desktop.capture_layout(name, description):
        case Ok(layout_id):
            typer.secho(f"✓ Captured layout '{name}' ({layout_id})", fg=typer.colors.GREEN)
        case Err(error):
            _handle_error(error)


@app.command("list")
def list_layouts() -> None:
    """List saved layouts, marking the active one."""
    desktop = open_desktop(load_config())
    layouts = desktop.layouts.list_layouts()
    if not layouts:
        typer.echo("No layouts saved.")
        return

    active_id = desktop.layouts.active_id
    for layout in layouts:
        marker = "*" if layout.id == active_id else " "
        typer.echo(
            f"{marker} {layout.id}  {layout.name}  "
            f"fences={len(layout.fences)} icons={layout.icon_count} "
            f"created={layout.created_at:%Y-%m-%d %H:%M}"
        )


@app.command("clone")
def clone(
    layout_id: Annotated[str, typer.Argument(help="Id of the layout to copy")],
    name: Annotated[str, typer.Argument(help="Name of the copy")],
) -> None:
    """Copy a saved layout under a new name."""
    desktop = open_desktop(load_config())
    cloned = desktop.layouts.clone(layout_id, name).and_then(desktop.layouts.persist)

    match cloned:
        case Ok(layout):
            typer.secho(f"✓ Cloned '{layout_id}' as '{layout.name}' ({layout.id})", fg=typer.colors.GREEN)
        case Err(error):
            _handle_error(error)


@app.command("activate")
def activate(layout_id: Annotated[str, typer.Argument(help="Id of the layout to make active")]) -> None:
    """Mark a saved layout as the active one."""
    desktop = open_desktop(load_config())

    match desktop.layouts.set_active(layout_id).and_then(lambda layout: desktop.layouts.persist(layout.id)):
        case Ok(layout):
            typer.secho(f"✓ Active layout is now '{layout.name}'", fg=typer.colors.GREEN)
        case Err(error):
            _handle_error(error)


@app.command("remove")
def remove(layout_id: Annotated[str, typer.Argument(help="Id of the layout to delete")]) -> None:
    """Delete a saved layout."""
    desktop = open_desktop(load_config())

    match desktop.remove_layout(layout_id):
        case Ok(layout):
            typer.secho(f"✓ Removed layout '{layout.name}'", fg=typer.colors.GREEN)
        case Err(error):
            _handle_error(error)


def _handle_error(error: LayoutError) -> None:
    fail(error.message)
