from __future__ import annotations

import typer
from result import is_err

from ..context import FormatOption, config_store, format_payload, handle_config_error

app = typer.Typer(help="Inspect TidyTop configuration.")


@app.callback(invoke_without_command=True)
def _config_root(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("show")
def show(format: FormatOption = "yaml") -> None:
    """Print the effective configuration (file plus environment overrides)."""
    result = config_store().load().map(lambda config: config.model_dump(mode="json"))
    if is_err(result):
        handle_config_error(result.unwrap_err())
        raise typer.Exit(code=1)

    typer.echo(format_payload(result.unwrap(), format.lower()))


@app.command("path")
def path() -> None:
    """Print where the configuration file is looked up."""
    typer.echo(str(config_store().path))
