from __future__ import annotations

import os
from typing import Annotated

import typer

from tidytop.common import LoggingConfig, create_logger, setup_cli_logging
from tidytop.config import FileConfigStore
from tidytop.settings import settings

from .commands import categories as categories_commands
from .commands import config as config_commands
from .commands import layouts as layouts_commands
from .commands import organize as organize_commands
from .commands import settings as settings_commands

logger = create_logger("cli")

app = typer.Typer(help="TidyTop command-line interface.")
app.add_typer(config_commands.app, name="config")
app.add_typer(categories_commands.app, name="categories")
app.add_typer(layouts_commands.app, name="layouts")
app.add_typer(settings_commands.app, name="settings")
app.command("organize")(organize_commands.organize)


@app.callback(invoke_without_command=True)
def _root_callback(
    ctx: typer.Context,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable colored output")] = False,
) -> None:
    # Respect NO_COLOR environment variable and --no-color flag
    if no_color or os.getenv("NO_COLOR"):
        ctx.color = False

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _setup_logging() -> None:
    config_store = FileConfigStore(settings.to_app_directories(), settings.paths.config_filename)
    config = config_store.load().unwrap_or(None)
    logging_config = config.logging if config else LoggingConfig()

    if logging_config.enabled:
        setup_cli_logging(
            app_info=settings.app,
            config=logging_config,
            directories=settings.to_app_directories(),
        )
        logger.debug("CLI logging initialized", config=logging_config.model_dump())


def main() -> None:
    """Entrypoint for the tidytop CLI."""
    _setup_logging()
    app()
