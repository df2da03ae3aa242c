"""Configurable checks for exercising the engine without a cluster."""

from __future__ import annotations

from collections.abc import Callable

from upgrade_lint.check.base import BaseCheck, CheckGroup
from upgrade_lint.check.conditions import CONDITION_TYPE_COMPATIBLE, new_condition
from upgrade_lint.check.context import RunContext
from upgrade_lint.check.result import (
    ConditionStatus,
    DiagnosticResult,
    Impact,
    ImpactedObject,
)
from upgrade_lint.check.target import Target


class StaticCheck(BaseCheck):
    """A check whose applicability and outcome are fixed at construction.

    Each call to ``validate`` is recorded in ``calls`` (a shared list when
    given) so tests can assert execution order.
    """

    check_type = "static"

    def __init__(
        self,
        check_id: str,
        group: CheckGroup = CheckGroup.COMPONENT,
        *,
        kind: str | None = None,
        check_type: str | None = None,
        status: ConditionStatus = ConditionStatus.TRUE,
        impact: Impact | None = None,
        message: str = "",
        applies: bool = True,
        raises: Exception | None = None,
        apply_raises: Exception | None = None,
        impacted: list[ImpactedObject] | None = None,
        remediation: str | None = None,
        result_factory: Callable[[StaticCheck], object] | None = None,
        calls: list[str] | None = None,
    ):
        self.check_id = check_id
        self.check_name = f"Static :: {check_id}"
        self.group = group
        self.kind = kind or check_id.split(".")[-1]
        if check_type is not None:
            self.check_type = check_type
        self.check_remediation = remediation
        self.status = status
        self.impact = impact
        self.message = message or f"{check_id} ran"
        self.applies = applies
        self.raises = raises
        self.apply_raises = apply_raises
        self.impacted = impacted or []
        self.result_factory = result_factory
        self.calls = calls if calls is not None else []

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        if self.apply_raises is not None:
            raise self.apply_raises
        return self.applies

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        self.calls.append(self.check_id)
        if self.raises is not None:
            raise self.raises
        if self.result_factory is not None:
            return self.result_factory(self)  # type: ignore[return-value]
        result = self.new_result()
        result.set_condition(
            new_condition(
                CONDITION_TYPE_COMPATIBLE,
                self.status,
                reason="Static",
                message=self.message,
                impact=self.impact,
            )
        )
        result.set_impacted_objects(self.impacted)
        return result
