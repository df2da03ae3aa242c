"""ModelMesh serving is removed in 3.x."""

from ...check.base import BaseCheck, CheckGroup
from ...check.conditions import (
    CHECK_TYPE_REMOVAL,
    MANAGEMENT_STATE_MANAGED,
    MANAGEMENT_STATE_UNMANAGED,
)
from ...check.context import RunContext
from ...check.result import DiagnosticResult
from ...check.target import Target
from ...utils.version import is_upgrade_from_2x_to_3x
from ..shared.component import ComponentRequest, validate_component
from ..shared.results import set_compatibility_failure, set_compatibility_success


class ModelMeshRemovalCheck(BaseCheck):
    group = CheckGroup.COMPONENT
    kind = "modelmesh"
    check_type = CHECK_TYPE_REMOVAL
    check_id = "components.modelmesh.removal"
    check_name = "Components :: ModelMesh :: Removal (3.x)"
    check_description = (
        "Validates that ModelMesh is disabled before upgrading from 2.x to 3.x "
        "(component will be removed)"
    )
    check_remediation = (
        "Migrate ModelMesh deployments to KServe and set "
        "spec.components.modelmeshserving.managementState to 'Removed'"
    )

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        return is_upgrade_from_2x_to_3x(target.current_version, target.target_version)

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        return validate_component(
            self, "modelmeshserving", "ModelMesh", ctx, target, self._check_state
        )

    def _check_state(self, ctx: RunContext, request: ComponentRequest) -> None:
        state = request.management_state
        if state in (MANAGEMENT_STATE_MANAGED, MANAGEMENT_STATE_UNMANAGED):
            set_compatibility_failure(
                request.result,
                f"ModelMesh is enabled (state: {state}) but will be removed in 3.x",
                remediation=self.check_remediation,
            )
            return
        set_compatibility_success(
            request.result,
            f"ModelMesh is disabled (state: {state}) - ready for 3.x upgrade",
        )
