"""Core CLI commands: version, list-checks."""

from typing import Annotated

import typer
from rich.table import Table

from upgrade_lint import __version__
from upgrade_lint.check.base import CANONICAL_GROUP_ORDER
from upgrade_lint.check.selector import WILDCARD, SelectorSet
from upgrade_lint.checks import new_registry
from upgrade_lint.exceptions import InputValidationError

from .lint_handler import EXIT_FATAL
from .shared import console, print_error


def register(app: typer.Typer) -> None:
    """Register core commands on the given Typer app."""

    @app.command()
    def version() -> None:
        """Print the upgrade-lint version."""
        console.print(f"upgrade-lint {__version__}", markup=False)

    @app.command(name="list-checks")
    def list_checks(
        checks: Annotated[
            list[str] | None,
            typer.Option("--checks", help="Only list checks matching this selector"),
        ] = None,
    ) -> None:
        """List the registered checks in execution order."""
        try:
            selectors = SelectorSet.parse(checks or [WILDCARD])
        except InputValidationError as e:
            print_error(e)
            raise typer.Exit(code=EXIT_FATAL) from e

        registry = new_registry()
        table = Table(title="Checks", show_header=True, header_style="bold magenta")
        table.add_column("Group", style="cyan")
        table.add_column("ID", style="green")
        table.add_column("Name")
        table.add_column("Description", style="dim")

        count = 0
        for group in CANONICAL_GROUP_ORDER:
            for check in registry.select(selectors, group=group):
                table.add_row(group.value, check.id, check.name, check.description)
                count += 1

        if count == 0:
            console.print("[yellow]No checks match the given selectors[/yellow]")
            return
        console.print(table)
