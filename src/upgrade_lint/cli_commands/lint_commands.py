"""The lint command."""

from pathlib import Path
from typing import Annotated

import typer

from upgrade_lint.exceptions import ConfigurationError

from .lint_handler import EXIT_FATAL, build_options, run_lint
from .shared import get_settings_and_logger, print_error


def register(app: typer.Typer) -> None:
    """Register the lint command on the given Typer app."""

    @app.command()
    def lint(
        target_version: Annotated[
            str | None,
            typer.Option(
                "--target-version",
                help="Version you plan to upgrade to (defaults to the installed one)",
            ),
        ] = None,
        output: Annotated[
            str | None,
            typer.Option("--output", "-o", help="Output format: table, json or yaml"),
        ] = None,
        checks: Annotated[
            list[str] | None,
            typer.Option(
                "--checks",
                help="Check selector: '*', a group, an exact id or a glob. Repeatable.",
            ),
        ] = None,
        verbose: Annotated[
            bool,
            typer.Option("--verbose", "-v", help="List impacted objects"),
        ] = False,
        debug: Annotated[
            bool,
            typer.Option("--debug", help="Show per-check progress"),
        ] = False,
        timeout: Annotated[
            float | None,
            typer.Option("--timeout", help="Run-wide timeout in seconds"),
        ] = None,
        qps: Annotated[
            float | None,
            typer.Option("--qps", help="Cluster API requests per second"),
        ] = None,
        burst: Annotated[
            int | None,
            typer.Option("--burst", help="Cluster API burst capacity"),
        ] = None,
        fail_on_blocking: Annotated[
            bool | None,
            typer.Option(
                "--fail-on-blocking/--no-fail-on-blocking",
                help="Exit 1 when a blocking finding is reported",
                show_default=False,
            ),
        ] = None,
        fail_on_advisory: Annotated[
            bool | None,
            typer.Option(
                "--fail-on-advisory/--no-fail-on-advisory",
                help="Exit 1 when an advisory (or worse) finding is reported",
                show_default=False,
            ),
        ] = None,
        kubeconfig: Annotated[
            Path | None,
            typer.Option("--kubeconfig", help="Path to the kubeconfig file"),
        ] = None,
        context: Annotated[
            str | None,
            typer.Option("--context", help="Kubeconfig context to use"),
        ] = None,
        config_path: Annotated[
            Path | None,
            typer.Option("--config", help="Path to upgrade-lint.yaml"),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"),
        ] = None,
        log_file: Annotated[
            Path | None,
            typer.Option("--log-file", help="Also write JSON logs to this file"),
        ] = None,
    ) -> None:
        """Check whether the cluster is ready to upgrade to a target version."""
        try:
            settings, logger = get_settings_and_logger(
                config_path, log_level, log_file, verbose=debug
            )
        except ConfigurationError as e:
            print_error(e)
            raise typer.Exit(code=EXIT_FATAL) from e

        options = build_options(
            settings,
            target_version=target_version,
            output_format=output,
            checks=checks,
            verbose=verbose,
            debug=debug,
            timeout_seconds=timeout,
            qps=qps,
            burst=burst,
            fail_on_blocking=fail_on_blocking,
            fail_on_advisory=fail_on_advisory,
        )
        run_lint(settings, logger, options, kubeconfig=kubeconfig, context=context)
