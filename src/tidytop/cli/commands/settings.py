"""CLI commands for desktop settings."""

from __future__ import annotations

import typer
from result import Err, Ok

from ..context import FormatOption, fail, format_payload, load_config, open_desktop

app = typer.Typer(help="Inspect and reset desktop settings.")


@app.callback(invoke_without_command=True)
def _settings_root(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("show")
def show(format: FormatOption = "yaml") -> None:
    """Print the persisted desktop settings (defaults when none are saved)."""
    desktop = open_desktop(load_config())
    typer.echo(format_payload(desktop.preferences.get().model_dump(mode="json"), format.lower()))


@app.command("reset")
def reset() -> None:
    """Restore default desktop settings."""
    desktop = open_desktop(load_config())

    match desktop.preferences.reset():
        case Ok(saved):
            typer.secho(f"✓ Settings reset to defaults (version {saved.version})", fg=typer.colors.GREEN)
        case Err(error):
            fail(error.message)
