"""The lint command: validate, detect versions, pick a mode, run, report."""

import sys
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TextIO

from packaging.version import Version
from rich.console import Console

from ..check.aggregate import Summary, exit_code_for, flatten_results
from ..check.base import CheckExecution
from ..check.conditions import ANNOTATION_REQUESTER
from ..check.context import RunContext
from ..check.executor import Executor
from ..check.mode import Mode, resolve_mode
from ..check.registry import CheckRegistry
from ..check.result import Impact
from ..check.target import Target
from ..cluster.client import ClusterReader
from ..cluster.detect import detect_openshift_version, detect_platform_version
from ..cluster.resources import NAMESPACE
from ..exceptions import (
    ClusterError,
    DowngradeNotSupportedError,
    RunAbortedError,
    RunTimeoutError,
    VersionDetectionError,
)
from ..output import OutputFormat, Report, VersionInfo, render
from ..output.table import print_version_info
from ..utils.logging import get_logger
from ..utils.version import major_minor_label
from .options import LintOptions, ValidatedOptions

logger = get_logger(__name__)

ClientFactory = Callable[[ValidatedOptions], ClusterReader]


@dataclass
class LintOutcome:
    """What a lint run produced.

    Attributes:
        mode: How the run was resolved
        verdict: Most severe impact found (none for a no-op run)
        summary: Condition counts
        executions: Executions in listing order
        exit_code: Process exit code under the fail-on policy
    """

    mode: Mode
    verdict: Impact = Impact.NONE
    summary: Summary = field(default_factory=Summary)
    executions: list[CheckExecution] = field(default_factory=list)
    exit_code: int = 0


class LintCommand:
    """Orchestrates one lint invocation.

    Options are validated before the cluster client is constructed, so input
    errors never touch the cluster.
    """

    def __init__(
        self,
        options: LintOptions,
        registry: CheckRegistry,
        client_factory: ClientFactory,
        out: TextIO | None = None,
        err: TextIO | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the command.

        Args:
            options: Raw options
            registry: Checks available to this invocation
            client_factory: Builds the cluster client from validated options
            out: Report stream (stdout by default)
            err: Progress and warning stream (stderr by default)
            clock: Monotonic clock for the run deadline
        """
        self.options = options
        self.registry = registry
        self.client_factory = client_factory
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.clock = clock
        self._err_console = Console(file=self.err, highlight=False, soft_wrap=True)

    def run(self) -> LintOutcome:
        """Run the command.

        Returns:
            The outcome, including the exit code

        Raises:
            InputValidationError: Options are invalid (no cluster access happened)
            VersionDetectionError: Installed version cannot be determined
            DowngradeNotSupportedError: Target is older than the installed version
            RunAbortedError: A check failed or the run timed out
            ClusterError: Cluster access failed outside of a check
        """
        validated = self.options.validate()
        client = self.client_factory(validated)
        try:
            return self._run(validated, client)
        finally:
            close = getattr(client, "close", None)
            if callable(close):
                close()

    def _run(self, opts: ValidatedOptions, client: ClusterReader) -> LintOutcome:
        ctx = RunContext.with_timeout(opts.timeout_seconds, clock=self.clock)
        logger.info(
            "lint_started",
            target_version=opts.target_version_raw,
            selectors=opts.selectors.raw,
            output=opts.output_format.value,
            timeout_seconds=opts.timeout_seconds,
        )

        current = detect_platform_version(ctx, client)
        openshift = self._detect_openshift(ctx, client)

        target = opts.target_version or current
        mode = resolve_mode(current, target)
        versions = VersionInfo(
            current=str(current),
            target=opts.target_version_raw or str(current),
            openshift=str(openshift) if openshift else None,
        )
        logger.info("lint_mode_resolved", mode=mode.value, current=str(current))

        if mode is Mode.NOOP:
            self._report_noop(opts, current, versions)
            return LintOutcome(mode=mode)

        if mode is Mode.REJECTED_DOWNGRADE:
            raise DowngradeNotSupportedError(
                f"target version {versions.target} is older than current version "
                f"{current} (downgrades not supported)",
                current_version=str(current),
                target_version=versions.target or "",
            )

        return self._run_upgrade(ctx, opts, client, current, target, versions)

    def _detect_openshift(
        self, ctx: RunContext, client: ClusterReader
    ) -> Version | None:
        try:
            return detect_openshift_version(ctx, client)
        except (VersionDetectionError, ClusterError) as e:
            logger.info("openshift_version_unavailable", error=e.message)
            self._err_console.print(
                f"Warning: failed to detect OpenShift version: {e.message}",
                markup=False,
            )
            return None

    def _report_noop(
        self, opts: ValidatedOptions, current: Version, versions: VersionInfo
    ) -> None:
        message = (
            f"Current and target versions are the same ({major_minor_label(current)}), "
            "no checks will be executed."
        )
        if opts.output_format is OutputFormat.TABLE:
            console = Console(file=self.out, highlight=False, soft_wrap=True)
            console.print()
            print_version_info(console, versions)
            console.print()
            console.print(message, markup=False)
        else:
            self._err_console.print(message, markup=False)
            render(self.out, Report(executions=[], versions=versions), opts.output_format)
        logger.info("lint_completed", mode=Mode.NOOP.value, checks=0)

    def _run_upgrade(
        self,
        ctx: RunContext,
        opts: ValidatedOptions,
        client: ClusterReader,
        current: Version,
        target: Version,
        versions: VersionInfo,
    ) -> LintOutcome:
        self._err_console.print(
            f"Assessing upgrade readiness: {current} → {versions.target}",
            markup=False,
        )

        check_target = Target(
            client=client,
            current_version=current,
            target_version=target,
            console=self._err_console,
            debug=opts.debug,
        )

        started = time.monotonic()
        try:
            results_by_group = Executor(self.registry).execute(
                ctx, check_target, opts.selectors
            )
        except RunTimeoutError as e:
            logger.info("lint_timed_out", timeout_seconds=opts.timeout_seconds)
            timeout_error = RunTimeoutError(
                f"check execution timed out after {opts.timeout_seconds:g}s",
                timeout=opts.timeout_seconds,
                suggestion="Increase --timeout or narrow --checks",
            )
            timeout_error.completed = e.completed
            raise timeout_error from e
        except RunAbortedError as e:
            logger.info("lint_failed", **e.to_dict())
            raise

        executions = flatten_results(results_by_group)
        report = Report(executions=executions, versions=versions, verbose=opts.verbose)
        if opts.verbose and opts.output_format is OutputFormat.TABLE:
            report.namespace_requesters = self._namespace_requesters(
                ctx, client, executions
            )

        render(self.out, report, opts.output_format)

        verdict = report.verdict
        summary = report.summary
        exit_code = exit_code_for(
            verdict,
            fail_on_blocking=opts.fail_on_blocking,
            fail_on_advisory=opts.fail_on_advisory,
        )
        logger.info(
            "lint_completed",
            mode=Mode.UPGRADE.value,
            checks=len(executions),
            verdict=verdict.value,
            failed=summary.failed,
            warnings=summary.warnings,
            exit_code=exit_code,
            duration_seconds=round(time.monotonic() - started, 3),
        )
        return LintOutcome(
            mode=Mode.UPGRADE,
            verdict=verdict,
            summary=summary,
            executions=executions,
            exit_code=exit_code,
        )

    @staticmethod
    def _namespace_requesters(
        ctx: RunContext, client: ClusterReader, executions: Iterable[CheckExecution]
    ) -> dict[str, str]:
        """Requester annotation of each namespace holding impacted objects.

        Best effort: namespaces that cannot be read are left out.
        """
        namespaces = {
            obj.namespace
            for execution in executions
            for obj in execution.result.impacted_objects
            if obj.namespace
        }
        requesters: dict[str, str] = {}
        for namespace in sorted(namespaces):
            try:
                obj = client.get(ctx, NAMESPACE, namespace)
            except (ClusterError, RunTimeoutError):
                continue
            annotations = (obj.get("metadata") or {}).get("annotations") or {}
            requester = annotations.get(ANNOTATION_REQUESTER)
            if requester:
                requesters[namespace] = requester
        return requesters
