"""Sequential check execution with per-group fail-fast."""

from collections.abc import Iterable

from ..exceptions import (
    ApplicabilityError,
    CheckExecutionError,
    CheckValidationError,
    InvalidCheckResultError,
    RunAbortedError,
)
from ..utils.logging import get_logger
from .base import CANONICAL_GROUP_ORDER, CheckExecution, CheckGroup
from .context import RunContext
from .registry import CheckRegistry
from .result import DiagnosticResult
from .selector import SelectorSet
from .target import Target

logger = get_logger(__name__)


class Executor:
    """Runs registered checks against a target.

    Checks run one at a time in registration order. The first failing check of
    a group aborts that group and every later group; results of groups that
    already finished travel on the raised exception as ``completed``.
    """

    def __init__(self, registry: CheckRegistry):
        self.registry = registry

    def execute_group(
        self,
        ctx: RunContext,
        target: Target,
        selectors: SelectorSet,
        group: CheckGroup,
    ) -> list[CheckExecution]:
        """Run the selected, applicable checks of one group.

        Args:
            ctx: Run context carrying the deadline
            target: Versions and cluster access for the checks
            selectors: Which checks were requested
            group: Group to run

        Returns:
            One execution per check that applied, in registration order

        Raises:
            ApplicabilityError: can_apply raised
            CheckValidationError: validate raised
            InvalidCheckResultError: validate returned no or a malformed result
            RunTimeoutError: The run deadline passed
        """
        executions: list[CheckExecution] = []

        for check in self.registry.by_group(group):
            if not selectors.matches(check):
                continue

            ctx.raise_if_done()

            try:
                applies = check.can_apply(ctx, target)
            except RunAbortedError:
                raise
            except Exception as e:
                raise ApplicabilityError(
                    f"check {check.id} applicability evaluation failed: {e}",
                    check_id=check.id,
                    group=group.value,
                ) from e

            if not applies:
                logger.debug("check_skipped", check_id=check.id, group=group.value)
                continue

            logger.debug("check_started", check_id=check.id, group=group.value)
            try:
                result = check.validate(ctx, target)
            except RunAbortedError:
                raise
            except Exception as e:
                raise CheckValidationError(
                    f"check {check.id} failed: {e}",
                    check_id=check.id,
                    group=group.value,
                ) from e

            self._ensure_result(check.id, group, result)

            logger.debug(
                "check_completed",
                check_id=check.id,
                group=group.value,
                impact=result.impact.value if result.impact else None,
                conditions=len(result.conditions),
            )
            executions.append(CheckExecution(check=check, result=result))

        return executions

    @staticmethod
    def _ensure_result(check_id: str, group: CheckGroup, result: object) -> None:
        if not isinstance(result, DiagnosticResult):
            raise InvalidCheckResultError(
                f"check {check_id} returned no diagnostic result",
                check_id=check_id,
                group=group.value,
            )
        try:
            result.ensure_valid()
        except ValueError as e:
            raise InvalidCheckResultError(
                f"invalid result from check {check_id}: {e}",
                check_id=check_id,
                group=group.value,
            ) from e

    def execute(
        self,
        ctx: RunContext,
        target: Target,
        selectors: SelectorSet,
        groups: Iterable[CheckGroup] = CANONICAL_GROUP_ORDER,
    ) -> dict[CheckGroup, list[CheckExecution]]:
        """Run groups in canonical order.

        Args:
            ctx: Run context carrying the deadline
            target: Versions and cluster access for the checks
            selectors: Which checks were requested
            groups: Groups to run; always executed in canonical order

        Returns:
            Executions keyed by group, in canonical order

        Raises:
            RunAbortedError: From the first failing group; ``completed`` holds
                the results of the groups that finished before it
        """
        wanted = set(groups)
        completed: dict[CheckGroup, list[CheckExecution]] = {}

        for group in CANONICAL_GROUP_ORDER:
            if group not in wanted:
                continue
            try:
                completed[group] = self.execute_group(ctx, target, selectors, group)
            except CheckExecutionError as e:
                e.completed = dict(completed)
                logger.info(
                    "check_group_failed",
                    group=group.value,
                    check_id=e.check_id,
                    error=e.message,
                    error_code=e.error_code,
                )
                raise
            except RunAbortedError as e:
                e.completed = dict(completed)
                logger.debug("check_group_interrupted", group=group.value)
                raise

        return completed
