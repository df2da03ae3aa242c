"""Diagnostic result model produced by every check."""

import re
from collections.abc import Iterable
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Impact(str, Enum):
    """How a finding affects the upgrade."""

    BLOCKING = "blocking"  # upgrade must not proceed
    ADVISORY = "advisory"  # proceed with caution
    NONE = "none"

    @property
    def severity(self) -> int:
        """Rank used for verdicts: blocking > advisory > none."""
        return _SEVERITY[self]


_SEVERITY = {Impact.NONE: 0, Impact.ADVISORY: 1, Impact.BLOCKING: 2}


class ConditionStatus(str, Enum):
    """Kubernetes-style condition status."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Condition(BaseModel):
    """A single typed finding of a check."""

    model_config = ConfigDict(validate_assignment=True)

    type: str = Field(description="Condition type, e.g. Compatible")
    status: ConditionStatus = Field(description="True, False or Unknown")
    reason: str = Field(description="CamelCase machine-readable reason")
    message: str = Field(default="", description="Human-readable explanation")
    impact: Impact = Field(default=Impact.NONE, description="Upgrade impact")
    remediation: str | None = Field(
        default=None, description="What to do about the finding"
    )
    last_transition_time: datetime = Field(default_factory=_now)


class ImpactedObject(BaseModel):
    """Reference to a cluster object affected by a finding."""

    api_version: str = Field(description="apiVersion of the object")
    kind: str
    namespace: str = Field(default="", description="Empty for cluster-scoped objects")
    name: str
    annotations: dict[str, str] = Field(default_factory=dict)


# Annotation keys must look like "example.io/key".
_DNS_LABEL = r"[a-z0-9]([-a-z0-9]*[a-z0-9])?"
_ANNOTATION_KEY = re.compile(
    rf"^{_DNS_LABEL}(\.{_DNS_LABEL})+/[A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?$"
)


class DiagnosticResult(BaseModel):
    """The result of a single check.

    Attributes:
        group: Check group (dependency, service, component, workload)
        kind: What was checked, e.g. "codeflare" or "openshift"
        name: Check type, e.g. "removal"
        description: What the check validates
        annotations: Extra key/value metadata in "domain/key" form
        conditions: Findings, in the order the check produced them
        impacted_objects: Cluster objects the findings refer to
    """

    group: str
    kind: str
    name: str
    description: str = ""
    annotations: dict[str, str] = Field(default_factory=dict)
    conditions: list[Condition] = Field(default_factory=list)
    impacted_objects: list[ImpactedObject] = Field(default_factory=list)

    def set_condition(self, condition: Condition) -> None:
        """Replace the condition with the same type, or append it."""
        for i, existing in enumerate(self.conditions):
            if existing.type == condition.type:
                self.conditions[i] = condition
                return
        self.conditions.append(condition)

    def set_impacted_objects(self, objects: Iterable[ImpactedObject]) -> None:
        self.impacted_objects = list(objects)

    @property
    def impact(self) -> Impact | None:
        """Highest impact across conditions, None when there are none."""
        if not self.conditions:
            return None
        return max((c.impact for c in self.conditions), key=lambda i: i.severity)

    def ensure_valid(self) -> None:
        """Check structural validity.

        Raises:
            ValueError: Describing the first problem found
        """
        if not self.group:
            raise ValueError("group must not be empty")
        if not self.kind:
            raise ValueError("kind must not be empty")
        if not self.name:
            raise ValueError("name must not be empty")
        for i, condition in enumerate(self.conditions):
            if not condition.type:
                raise ValueError(f"condition with empty type found at index {i}")
            if not isinstance(condition.status, ConditionStatus):
                raise ValueError(
                    f"condition {condition.type!r} has invalid status "
                    f"{condition.status!r}"
                )
            if not condition.reason:
                raise ValueError(f"condition {condition.type!r} has empty reason")
        for key in self.annotations:
            if not _ANNOTATION_KEY.match(key):
                raise ValueError(
                    f"annotation key {key!r} must be in domain/key format"
                )
