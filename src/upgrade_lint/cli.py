"""Command-line interface for upgrade-lint."""

import typer

from .cli_commands import core_commands, lint_commands

app = typer.Typer(
    name="upgrade-lint",
    help="Check whether a cluster is ready to upgrade to a target platform version.",
    no_args_is_help=True,
)

lint_commands.register(app)
core_commands.register(app)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
