"""CLI commands for icon categories."""

from __future__ import annotations

import typer

from tidytop.categories import CategoryCatalog

from ..context import load_config

app = typer.Typer(help="Inspect icon categories.")


@app.callback(invoke_without_command=True)
def _categories_root(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("list")
def list_categories() -> None:
    """List built-in and configured categories in matching order."""
    catalog = CategoryCatalog(load_config().categories)
    for category in catalog.categories():
        origin = "system" if category.is_system else "user"
        state = "" if category.enabled else " (disabled)"
        typer.echo(f"{category.id:<12} {category.label:<24} priority={category.priority:<3} {origin}{state}")
