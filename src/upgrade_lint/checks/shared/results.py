"""Condition shortcuts shared by the built-in checks."""

from ...check.conditions import (
    CONDITION_TYPE_AVAILABLE,
    CONDITION_TYPE_COMPATIBLE,
    CONDITION_TYPE_CONFIGURED,
    REASON_RESOURCE_NOT_FOUND,
    REASON_VERSION_COMPATIBLE,
    REASON_VERSION_INCOMPATIBLE,
    new_condition,
)
from ...check.result import ConditionStatus, DiagnosticResult, Impact


def set_compatibility_success(result: DiagnosticResult, message: str) -> None:
    result.set_condition(
        new_condition(
            CONDITION_TYPE_COMPATIBLE,
            ConditionStatus.TRUE,
            reason=REASON_VERSION_COMPATIBLE,
            message=message,
        )
    )


def set_compatibility_failure(
    result: DiagnosticResult,
    message: str,
    *,
    impact: Impact = Impact.BLOCKING,
    remediation: str | None = None,
) -> None:
    result.set_condition(
        new_condition(
            CONDITION_TYPE_COMPATIBLE,
            ConditionStatus.FALSE,
            reason=REASON_VERSION_INCOMPATIBLE,
            message=message,
            impact=impact,
            remediation=remediation,
        )
    )


def set_data_science_cluster_not_found(result: DiagnosticResult) -> None:
    """No DataScienceCluster exists, so component state cannot be read."""
    result.set_condition(
        new_condition(
            CONDITION_TYPE_AVAILABLE,
            ConditionStatus.FALSE,
            reason=REASON_RESOURCE_NOT_FOUND,
            message="No DataScienceCluster found",
            impact=Impact.ADVISORY,
        )
    )


def set_component_not_configured(result: DiagnosticResult, display_name: str) -> None:
    """The component has no entry in the DataScienceCluster."""
    result.set_condition(
        new_condition(
            CONDITION_TYPE_CONFIGURED,
            ConditionStatus.FALSE,
            reason=REASON_RESOURCE_NOT_FOUND,
            message=f"{display_name} component is not configured in DataScienceCluster",
            impact=Impact.NONE,
        )
    )
