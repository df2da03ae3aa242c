"""Check contract: groups, the Check protocol and a convenience base class."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

from .result import DiagnosticResult

if TYPE_CHECKING:
    from .context import RunContext
    from .target import Target


class CheckGroup(str, Enum):
    """Category of a check; groups run in a fixed order."""

    DEPENDENCY = "dependency"
    SERVICE = "service"
    COMPONENT = "component"
    WORKLOAD = "workload"

    @property
    def selector(self) -> str:
        """Plural selector shortcut, e.g. "components"."""
        return _PLURALS[self]

    @property
    def priority(self) -> int:
        return CANONICAL_GROUP_ORDER.index(self)


_PLURALS = {
    CheckGroup.DEPENDENCY: "dependencies",
    CheckGroup.SERVICE: "services",
    CheckGroup.COMPONENT: "components",
    CheckGroup.WORKLOAD: "workloads",
}

CANONICAL_GROUP_ORDER: tuple[CheckGroup, ...] = (
    CheckGroup.DEPENDENCY,
    CheckGroup.SERVICE,
    CheckGroup.COMPONENT,
    CheckGroup.WORKLOAD,
)


def group_priority(group: str) -> int:
    """Sort key for a group name; unknown groups sort last."""
    try:
        return CheckGroup(group).priority
    except ValueError:
        return len(CANONICAL_GROUP_ORDER)


@runtime_checkable
class Check(Protocol):
    """What the engine needs from a check.

    ``can_apply`` and ``validate`` may raise; the executor turns any exception
    into a CheckExecutionError that aborts the group. Findings are reported as
    conditions on the returned result, never as exceptions. A check may also
    expose a ``remediation`` string, used when a condition carries none.
    """

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def group(self) -> CheckGroup: ...

    def can_apply(self, ctx: RunContext, target: Target) -> bool: ...

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult: ...


@runtime_checkable
class VerboseOutputFormatter(Protocol):
    """Optional capability: custom rendering of impacted objects in verbose output."""

    def format_verbose_output(self, out: TextIO, result: DiagnosticResult) -> None: ...


class BaseCheck:
    """Static check metadata plus a result factory.

    Subclasses set the class attributes and implement ``validate``; override
    ``can_apply`` to restrict the check to certain version transitions.

    Example:
        class CodeFlareRemovalCheck(BaseCheck):
            group = CheckGroup.COMPONENT
            kind = "codeflare"
            check_type = "removal"
            check_id = "components.codeflare.removal"
            check_name = "Components :: CodeFlare :: Removal (3.x)"
    """

    group: CheckGroup
    kind: str
    check_type: str
    check_id: str
    check_name: str
    check_description: str = ""
    check_remediation: str | None = None

    @property
    def id(self) -> str:
        return self.check_id

    @property
    def name(self) -> str:
        return self.check_name

    @property
    def description(self) -> str:
        return self.check_description

    @property
    def remediation(self) -> str | None:
        return self.check_remediation

    def new_result(self) -> DiagnosticResult:
        """Create an empty result carrying this check's group, kind and type."""
        return DiagnosticResult(
            group=self.group.value,
            kind=self.kind,
            name=self.check_type,
            description=self.check_description,
        )

    def can_apply(self, ctx: RunContext, target: Target) -> bool:
        return True

    def validate(self, ctx: RunContext, target: Target) -> DiagnosticResult:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.check_id!r})"


@dataclass
class CheckExecution:
    """A check paired with the result it produced."""

    check: Check
    result: DiagnosticResult
