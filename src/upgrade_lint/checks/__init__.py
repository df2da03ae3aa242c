"""Built-in checks."""

from ..check.registry import CheckRegistry
from .components.codeflare import CodeFlareRemovalCheck
from .components.modelmesh import ModelMeshRemovalCheck
from .dependencies.openshift import OpenShiftVersionCheck
from .workloads.ray import RayImpactedWorkloadsCheck


def register_builtin_checks(registry: CheckRegistry) -> CheckRegistry:
    """Register every built-in check, in a stable order."""
    registry.register(OpenShiftVersionCheck())
    registry.register(CodeFlareRemovalCheck())
    registry.register(ModelMeshRemovalCheck())
    registry.register(RayImpactedWorkloadsCheck())
    return registry


def new_registry() -> CheckRegistry:
    """A fresh registry holding the built-in checks."""
    return register_builtin_checks(CheckRegistry())


__all__ = [
    "CodeFlareRemovalCheck",
    "ModelMeshRemovalCheck",
    "OpenShiftVersionCheck",
    "RayImpactedWorkloadsCheck",
    "new_registry",
    "register_builtin_checks",
]
