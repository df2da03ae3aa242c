"""RayClusters managed by CodeFlare lose their controller in 3.x."""

from typing import Any, TextIO

from ...check.base import BaseCheck, CheckGroup
from ...check.conditions import (
    ANNOTATION_IMPACTED_WORKLOAD_COUNT,
    CHECK_TYPE_IMPACTED_WORKLOADS,
)
from ...check.context import RunContext
from ...check.result import DiagnosticResult, Impact, ImpactedObject
from ...check.target import Target
from ...cluster.resources import RAY_CLUSTER
from ...exceptions import ResourceNotFoundError
from ...utils.version import is_upgrade_from_2x_to_3x, major_minor_label
from ..shared.results import set_compatibility_failure, set_compatibility_success

FINALIZER_CODEFLARE_OAUTH = "ray.openshift.ai/oauth-finalizer"


def is_codeflare_managed(obj: dict[str, Any]) -> bool:
    finalizers = (obj.get("metadata") or {}).get("finalizers") or []
    return FINALIZER_CODEFLARE_OAUTH in finalizers


def _describe(obj: ImpactedObject) -> str:
    return f"{obj.namespace}/{obj.name} (CodeFlare-managed)"


class RayImpactedWorkloadsCheck(BaseCheck):
    """Lists CodeFlare-managed RayClusters as impacted objects.

    Also renders its own verbose output: one "namespace/name" line per cluster.
    """

    group = CheckGroup.WORKLOAD
    kind = "ray"
    check_type = CHECK_TYPE_IMPACTED_WORKLOADS
    check_id = "workloads.ray.impacted-workloads"
    check_name = "Workloads :: Ray :: Impacted Workloads (3.x)"
    check_description = (
        "Identifies RayClusters managed by CodeFlare that will be impacted in 3.x"
    )
    check_remediation = (
        "Recreate the listed RayClusters without CodeFlare (KubeRay only) "
        "or back up their workloads before upgrading"
    )

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        return is_upgrade_from_2x_to_3x(target.current_version, target.target_version)

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        result = self.new_result()
        label = major_minor_label(target.target_version) if target.target_version else "3.x"

        try:
            clusters = target.client.list(ctx, RAY_CLUSTER)
        except ResourceNotFoundError:
            # RayCluster CRD not installed
            clusters = []

        impacted = [
            ImpactedObject(
                api_version=RAY_CLUSTER.api_version,
                kind=RAY_CLUSTER.kind,
                namespace=(c.get("metadata") or {}).get("namespace", ""),
                name=(c.get("metadata") or {}).get("name", ""),
            )
            for c in clusters
            if is_codeflare_managed(c)
        ]
        impacted.sort(key=lambda o: (o.namespace, o.name))
        target.progress(f"ray: {len(impacted)} CodeFlare-managed RayCluster(s)")

        result.annotations[ANNOTATION_IMPACTED_WORKLOAD_COUNT] = str(len(impacted))
        result.set_impacted_objects(impacted)

        if impacted:
            names = ", ".join(_describe(o) for o in impacted)
            set_compatibility_failure(
                result,
                f"Found {len(impacted)} CodeFlare-managed RayCluster(s) - will be "
                f"impacted in {label} (CodeFlare not available): {names}",
                impact=Impact.ADVISORY,
                remediation=self.check_remediation,
            )
        else:
            set_compatibility_success(
                result,
                f"No CodeFlare-managed RayClusters found - ready for {label} upgrade",
            )
        return result

    def format_verbose_output(self, out: TextIO, result: DiagnosticResult) -> None:
        for obj in result.impacted_objects:
            out.write(f"    - {_describe(obj)}\n")
