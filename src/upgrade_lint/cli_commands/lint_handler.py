"""Lint command implementation logic."""

import sys
from pathlib import Path
from typing import Any

import typer

from upgrade_lint.check.registry import CheckRegistry
from upgrade_lint.checks import new_registry
from upgrade_lint.cluster.client import ClusterReader, KubeClient
from upgrade_lint.cluster.kubeconfig import load_connection
from upgrade_lint.config import Settings
from upgrade_lint.exceptions import InputValidationError, UpgradeLintError
from upgrade_lint.lint import LintCommand, LintOptions, ValidatedOptions

from .shared import print_error

EXIT_FATAL = 2


def build_client_factory(
    kubeconfig: Path | None, context: str | None, verify_tls: bool
):
    """Return a factory that connects to the cluster named by the kubeconfig."""

    def factory(options: ValidatedOptions) -> ClusterReader:
        connection = load_connection(kubeconfig, context, verify_tls=verify_tls)
        return KubeClient(connection, qps=options.qps, burst=options.burst)

    return factory


def build_options(settings: Settings, **overrides: Any) -> LintOptions:
    """Merge command-line overrides (``None`` means unset) onto settings."""
    values: dict[str, Any] = {
        "output_format": settings.output_format,
        "checks": list(settings.checks),
        "timeout_seconds": settings.timeout_seconds,
        "qps": settings.qps,
        "burst": settings.burst,
        "fail_on_blocking": settings.fail_on_blocking,
        "fail_on_advisory": settings.fail_on_advisory,
    }
    for key, value in overrides.items():
        if value is None:
            continue
        if key == "checks" and not value:
            continue
        values[key] = value
    return LintOptions(**values)


def run_lint(
    settings: Settings,
    logger: Any,
    options: LintOptions,
    kubeconfig: Path | None = None,
    context: str | None = None,
    registry: CheckRegistry | None = None,
) -> None:
    """Execute the lint command and exit with its status.

    Args:
        settings: Loaded settings
        logger: Logger instance
        options: Lint options after merging flags onto settings
        kubeconfig: Kubeconfig path override
        context: Kubeconfig context override
        registry: Checks to run (the built-in set by default)

    Raises:
        typer.Exit: Always; code 0 on success, 1 on findings, 2 on errors
    """
    factory = build_client_factory(
        kubeconfig or settings.kubeconfig,
        context or settings.context,
        settings.verify_tls,
    )
    command = LintCommand(
        options,
        registry if registry is not None else new_registry(),
        factory,
        out=sys.stdout,
        err=sys.stderr,
    )

    try:
        outcome = command.run()
    except InputValidationError as e:
        logger.debug("lint_input_rejected", **e.to_dict())
        print_error(e)
        raise typer.Exit(code=EXIT_FATAL) from e
    except UpgradeLintError as e:
        print_error(e)
        raise typer.Exit(code=EXIT_FATAL) from e

    raise typer.Exit(code=outcome.exit_code)
