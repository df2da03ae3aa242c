"""Default rendering of impacted objects for verbose table output."""

from collections.abc import Iterable, Mapping
from typing import TextIO

from .base import Check, VerboseOutputFormatter
from .result import DiagnosticResult, ImpactedObject


def format_impacted_object(obj: ImpactedObject) -> str:
    """Display string for an object: "name (Kind)", or just the name."""
    if obj.kind:
        return f"{obj.name} ({obj.kind})"
    return obj.name


def group_by_namespace(
    objects: Iterable[ImpactedObject],
) -> list[tuple[str, list[ImpactedObject]]]:
    """Group objects by namespace, sorted; cluster-scoped ("") first."""
    groups: dict[str, list[ImpactedObject]] = {}
    for obj in objects:
        groups.setdefault(obj.namespace, []).append(obj)
    return [(namespace, groups[namespace]) for namespace in sorted(groups)]


class DefaultVerboseFormatter:
    """Namespace-grouped rendering used when a check has no formatter of its own.

    Attributes:
        namespace_requesters: Namespace name -> value of its requester annotation
    """

    def __init__(self, namespace_requesters: Mapping[str, str] | None = None):
        self.namespace_requesters = dict(namespace_requesters or {})

    def format_verbose_output(self, out: TextIO, result: DiagnosticResult) -> None:
        for namespace, objects in group_by_namespace(result.impacted_objects):
            if not namespace:
                for obj in objects:
                    out.write(f"    - {format_impacted_object(obj)}\n")
                continue

            header = namespace
            requester = self.namespace_requesters.get(namespace)
            if requester:
                header = f"{namespace} (requester: {requester})"
            out.write(f"    {header}:\n")
            for obj in objects:
                out.write(f"      - {format_impacted_object(obj)}\n")


def formatter_for(
    check: Check, default: VerboseOutputFormatter
) -> VerboseOutputFormatter:
    """The check's own formatter if it has one, else ``default``."""
    if isinstance(check, VerboseOutputFormatter):
        return check
    return default
