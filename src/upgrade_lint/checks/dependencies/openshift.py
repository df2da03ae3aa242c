"""3.x requires OpenShift 4.19 or later."""

from ...check.base import BaseCheck, CheckGroup
from ...check.conditions import (
    ANNOTATION_OPENSHIFT_VERSION,
    CHECK_TYPE_VERSION_REQUIREMENT,
    CONDITION_TYPE_COMPATIBLE,
    REASON_INSUFFICIENT_DATA,
    new_condition,
)
from ...check.context import RunContext
from ...check.result import ConditionStatus, DiagnosticResult
from ...check.target import Target
from ...cluster.detect import detect_openshift_version
from ...exceptions import ClusterError, VersionDetectionError
from ...utils.version import is_upgrade_from_2x_to_3x, is_version_at_least
from ..shared.results import set_compatibility_failure, set_compatibility_success

MIN_MAJOR = 4
MIN_MINOR = 19


class OpenShiftVersionCheck(BaseCheck):
    group = CheckGroup.DEPENDENCY
    kind = "openshift"
    check_type = CHECK_TYPE_VERSION_REQUIREMENT
    check_id = "dependencies.openshift.version-requirement"
    check_name = "Dependencies :: OpenShift :: Version Requirement (3.x)"
    check_description = (
        "Validates that OpenShift is at least version 4.19 when upgrading to 3.x"
    )
    check_remediation = "Upgrade OpenShift to 4.19 or later before upgrading"

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        return is_upgrade_from_2x_to_3x(target.current_version, target.target_version)

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        result = self.new_result()

        try:
            version = detect_openshift_version(ctx, target.client)
        except (VersionDetectionError, ClusterError) as e:
            result.set_condition(
                new_condition(
                    CONDITION_TYPE_COMPATIBLE,
                    ConditionStatus.FALSE,
                    reason=REASON_INSUFFICIENT_DATA,
                    message=f"Unable to detect OpenShift version: {e.message}. "
                    "3.x requires OpenShift 4.19 or later",
                    remediation=self.check_remediation,
                )
            )
            return result

        result.annotations[ANNOTATION_OPENSHIFT_VERSION] = str(version)

        if is_version_at_least(version, MIN_MAJOR, MIN_MINOR):
            set_compatibility_success(
                result,
                f"OpenShift {version} meets 3.x minimum version requirement (4.19+)",
            )
        else:
            set_compatibility_failure(
                result,
                f"OpenShift {version} does not meet 3.x minimum version requirement "
                "(4.19+). Upgrade OpenShift to 4.19 or later before upgrading",
                remediation=self.check_remediation,
            )
        return result
