"""Standard condition types, reasons and annotation keys, plus a condition factory."""

from .result import Condition, ConditionStatus, Impact

# Condition types
CONDITION_TYPE_COMPATIBLE = "Compatible"
CONDITION_TYPE_AVAILABLE = "Available"
CONDITION_TYPE_READY = "Ready"
CONDITION_TYPE_CONFIGURED = "Configured"
CONDITION_TYPE_VALIDATED = "Validated"

# Reasons
REASON_REQUIREMENTS_MET = "RequirementsMet"
REASON_RESOURCE_NOT_FOUND = "ResourceNotFound"
REASON_RESOURCE_FOUND = "ResourceFound"
REASON_VERSION_COMPATIBLE = "VersionCompatible"
REASON_VERSION_INCOMPATIBLE = "VersionIncompatible"
REASON_WORKLOADS_IMPACTED = "WorkloadsImpacted"
REASON_INSUFFICIENT_DATA = "InsufficientData"
REASON_CONFIGURATION_VALID = "ConfigurationValid"
REASON_CONFIGURATION_INVALID = "ConfigurationInvalid"
REASON_FEATURE_REMOVED = "FeatureRemoved"
REASON_COMPONENT_DISABLED = "ComponentDisabled"

# Management states of components and services
MANAGEMENT_STATE_MANAGED = "Managed"
MANAGEMENT_STATE_UNMANAGED = "Unmanaged"
MANAGEMENT_STATE_REMOVED = "Removed"

# Check types shared by several checks
CHECK_TYPE_REMOVAL = "removal"
CHECK_TYPE_VERSION_REQUIREMENT = "version-requirement"
CHECK_TYPE_IMPACTED_WORKLOADS = "impacted-workloads"

# Annotation keys
ANNOTATION_COMPONENT_MANAGEMENT_STATE = "component.opendatahub.io/management-state"
ANNOTATION_CHECK_TARGET_VERSION = "check.opendatahub.io/target-version"
ANNOTATION_IMPACTED_WORKLOAD_COUNT = "workload.opendatahub.io/impacted-count"
ANNOTATION_OPENSHIFT_VERSION = "platform.opendatahub.io/openshift-version"
# Per impacted object: who asked for the namespace, shown in verbose output
ANNOTATION_REQUESTER = "openshift.io/requester"

_DEFAULT_IMPACT = {
    ConditionStatus.TRUE: Impact.NONE,
    ConditionStatus.FALSE: Impact.BLOCKING,
    ConditionStatus.UNKNOWN: Impact.ADVISORY,
}


def new_condition(
    condition_type: str,
    status: ConditionStatus | str,
    *,
    reason: str,
    message: str = "",
    impact: Impact | None = None,
    remediation: str | None = None,
) -> Condition:
    """Build a condition.

    Args:
        condition_type: Condition type, e.g. CONDITION_TYPE_COMPATIBLE
        status: True/False/Unknown
        reason: CamelCase reason code
        message: Human-readable message
        impact: Explicit impact; derived from status when omitted
            (True -> none, False -> blocking, Unknown -> advisory)
        remediation: Optional remediation hint

    Returns:
        The new condition
    """
    status = ConditionStatus(status)
    return Condition(
        type=condition_type,
        status=status,
        reason=reason,
        message=message,
        impact=impact if impact is not None else _DEFAULT_IMPACT[status],
        remediation=remediation,
    )
