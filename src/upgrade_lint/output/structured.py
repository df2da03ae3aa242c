"""JSON and YAML reports."""

from typing import Any, TextIO

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..check.base import CheckExecution
from ..check.result import ImpactedObject
from .report import Report


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResultEntry(_CamelModel):
    """One condition of one check."""

    check_id: str
    check_name: str
    group: str
    kind: str
    type: str
    status: str = Field(description="True, False or Unknown")
    reason: str
    impact: str | None = None
    message: str = ""
    remediation: str | None = None
    details: dict[str, Any] | None = None


class StructuredReport(_CamelModel):
    """Top-level report envelope; counts are per condition."""

    cluster_version: str | None = None
    target_version: str | None = None
    openshift_version: str | None = None
    verdict: str
    total: int
    passed: int
    warnings: int
    failed: int
    results: list[ResultEntry] = Field(default_factory=list)


def _impacted_object(obj: ImpactedObject) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "apiVersion": obj.api_version,
        "kind": obj.kind,
        "name": obj.name,
    }
    if obj.namespace:
        entry["namespace"] = obj.namespace
    if obj.annotations:
        entry["annotations"] = dict(obj.annotations)
    return entry


def _details(execution: CheckExecution, verbose: bool) -> dict[str, Any] | None:
    result = execution.result
    details: dict[str, Any] = {}
    if result.annotations:
        details["annotations"] = dict(result.annotations)
    if verbose and result.impacted_objects:
        details["impactedObjects"] = [
            _impacted_object(obj) for obj in result.impacted_objects
        ]
    return details or None


def build_structured_report(report: Report) -> StructuredReport:
    """Build the envelope with results in listing order."""
    entries: list[ResultEntry] = []
    for execution in report.executions:
        details = _details(execution, report.verbose)
        for condition in execution.result.conditions:
            entries.append(
                ResultEntry(
                    check_id=execution.check.id,
                    check_name=execution.check.name,
                    group=execution.result.group,
                    kind=execution.result.kind,
                    type=condition.type,
                    status=condition.status.value,
                    reason=condition.reason,
                    impact=condition.impact.value,
                    message=condition.message,
                    remediation=condition.remediation
                    or getattr(execution.check, "remediation", None),
                    details=details,
                )
            )

    summary = report.summary
    return StructuredReport(
        cluster_version=report.versions.current,
        target_version=report.versions.target,
        openshift_version=report.versions.openshift,
        verdict=report.verdict.value,
        total=summary.total,
        passed=summary.passed,
        warnings=summary.warnings,
        failed=summary.failed,
        results=entries,
    )


def report_to_dict(report: Report) -> dict[str, Any]:
    return build_structured_report(report).model_dump(
        by_alias=True, exclude_none=True, mode="json"
    )


def render_json(out: TextIO, report: Report) -> None:
    out.write(
        build_structured_report(report).model_dump_json(
            by_alias=True, exclude_none=True, indent=2
        )
    )
    out.write("\n")


def render_yaml(out: TextIO, report: Report) -> None:
    yaml.safe_dump(
        report_to_dict(report),
        out,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
