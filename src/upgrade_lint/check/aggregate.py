"""Ordering, counting and verdict computation over check executions.

All functions here are pure; ordering never depends on the order the inputs
arrive in.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .base import CANONICAL_GROUP_ORDER, CheckExecution, CheckGroup, group_priority
from .result import Condition, Impact

# Lower sorts first: blocking findings lead within a kind.
_IMPACT_PRIORITY = {Impact.BLOCKING: 0, Impact.ADVISORY: 1, Impact.NONE: 2}

EXIT_OK = 0
EXIT_FINDINGS = 1


def flatten_results(
    results_by_group: Mapping[CheckGroup, Iterable[CheckExecution]],
) -> list[CheckExecution]:
    """Flatten grouped executions into listing order.

    Groups come in canonical order; within a group executions are sorted by
    kind, then check type, with the check id as the final tiebreaker.
    """
    flattened: list[CheckExecution] = []
    for group in CANONICAL_GROUP_ORDER:
        flattened.extend(
            sorted(
                results_by_group.get(group, ()),
                key=lambda e: (e.result.kind, e.result.name, e.check.id),
            )
        )
    return flattened


@dataclass(frozen=True)
class ResultRow:
    """One display row: a single condition of a single result."""

    execution: CheckExecution
    condition: Condition
    index: int

    @property
    def group(self) -> str:
        return self.execution.result.group

    @property
    def kind(self) -> str:
        return self.execution.result.kind

    @property
    def check_type(self) -> str:
        return self.execution.result.name

    @property
    def impact(self) -> Impact:
        return self.condition.impact

    def sort_key(self) -> tuple[int, str, int, str, str, int]:
        return (
            group_priority(self.group),
            self.kind,
            _IMPACT_PRIORITY[self.impact],
            self.check_type,
            self.execution.check.id,
            self.index,
        )


def collect_rows(executions: Iterable[CheckExecution]) -> list[ResultRow]:
    """One row per condition in display order.

    Sorted by group, kind, impact (blocking, advisory, none), check type,
    check id and finally the condition's position within its result.
    """
    rows = [
        ResultRow(execution=execution, condition=condition, index=i)
        for execution in executions
        for i, condition in enumerate(execution.result.conditions)
    ]
    rows.sort(key=ResultRow.sort_key)
    return rows


def max_impact(impacts: Iterable[Impact]) -> Impact:
    """Most severe impact; none for an empty input."""
    return max(impacts, key=lambda i: i.severity, default=Impact.NONE)


def compute_verdict(executions: Iterable[CheckExecution]) -> Impact:
    """Verdict of a run: the most severe impact over every condition."""
    return max_impact(
        condition.impact
        for execution in executions
        for condition in execution.result.conditions
    )


@dataclass(frozen=True)
class Summary:
    """Condition counts by impact."""

    total: int = 0
    passed: int = 0
    warnings: int = 0
    failed: int = 0


def summarize(executions: Iterable[CheckExecution]) -> Summary:
    """Count conditions: none -> passed, advisory -> warnings, blocking -> failed."""
    counts = dict.fromkeys(Impact, 0)
    for execution in executions:
        for condition in execution.result.conditions:
            counts[condition.impact] += 1
    return Summary(
        total=sum(counts.values()),
        passed=counts[Impact.NONE],
        warnings=counts[Impact.ADVISORY],
        failed=counts[Impact.BLOCKING],
    )


def exit_code_for(
    verdict: Impact,
    fail_on_blocking: bool = True,
    fail_on_advisory: bool = False,
) -> int:
    """Map a verdict to a process exit code under the fail-on policy.

    ``fail_on_advisory`` means "advisory or worse", so it also trips on a
    blocking verdict.
    """
    if verdict is Impact.BLOCKING and (fail_on_blocking or fail_on_advisory):
        return EXIT_FINDINGS
    if verdict is Impact.ADVISORY and fail_on_advisory:
        return EXIT_FINDINGS
    return EXIT_OK
