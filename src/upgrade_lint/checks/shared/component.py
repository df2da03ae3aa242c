"""Validation scaffold for checks about a DataScienceCluster component."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from ...check.base import BaseCheck
from ...check.conditions import (
    ANNOTATION_CHECK_TARGET_VERSION,
    ANNOTATION_COMPONENT_MANAGEMENT_STATE,
)
from ...check.context import RunContext
from ...check.result import DiagnosticResult
from ...check.target import Target
from ...cluster.client import ClusterReader
from ...cluster.resources import DATA_SCIENCE_CLUSTER
from ...exceptions import ResourceNotFoundError
from .results import set_component_not_configured, set_data_science_cluster_not_found


def get_data_science_cluster(
    ctx: RunContext, client: ClusterReader
) -> dict[str, Any] | None:
    """The cluster's DataScienceCluster, or None if there is none.

    Raises:
        ClusterError: On API failures other than "not found"
    """
    try:
        items = client.list(ctx, DATA_SCIENCE_CLUSTER)
    except ResourceNotFoundError:
        return None
    return items[0] if items else None


def management_state(dsc: dict[str, Any], component: str) -> str:
    """``.spec.components.<component>.managementState``, "" when unset."""
    spec = dsc.get("spec") or {}
    components = spec.get("components") or {}
    return (components.get(component) or {}).get("managementState") or ""


@dataclass
class ComponentRequest:
    """What a component validation function gets to work with."""

    result: DiagnosticResult
    dsc: dict[str, Any]
    management_state: str
    client: ClusterReader


ComponentValidateFn = Callable[[RunContext, ComponentRequest], None]


def validate_component(
    check: BaseCheck,
    component: str,
    display_name: str,
    ctx: RunContext,
    target: Target,
    fn: ComponentValidateFn,
    required_states: Iterable[str] | None = None,
) -> DiagnosticResult:
    """Fetch the DataScienceCluster and hand the component's state to ``fn``.

    A missing DataScienceCluster and an unconfigured component become
    conditions instead of errors. The result is annotated with the management
    state and the target version before ``fn`` runs.

    Args:
        check: The calling check; provides group, kind and type
        component: Key under ``.spec.components``
        display_name: Name used in messages
        ctx: Run context
        target: Check target
        fn: Adds conditions to ``request.result``
        required_states: When given, other states are reported as unconfigured

    Returns:
        The populated result
    """
    result = check.new_result()

    dsc = get_data_science_cluster(ctx, target.client)
    if dsc is None:
        set_data_science_cluster_not_found(result)
        return result

    state = management_state(dsc, component)
    allowed = list(required_states) if required_states is not None else None
    if not state or (allowed is not None and state not in allowed):
        set_component_not_configured(result, display_name)
        return result

    result.annotations[ANNOTATION_COMPONENT_MANAGEMENT_STATE] = state
    if target.target_version is not None:
        result.annotations[ANNOTATION_CHECK_TARGET_VERSION] = str(target.target_version)

    fn(
        ctx,
        ComponentRequest(
            result=result, dsc=dsc, management_state=state, client=target.client
        ),
    )
    return result
