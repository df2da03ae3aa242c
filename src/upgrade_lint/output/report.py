"""Everything a renderer needs about a finished run."""

from dataclasses import dataclass, field

from ..check.aggregate import Summary, compute_verdict, summarize
from ..check.base import CheckExecution
from ..check.result import Impact


@dataclass(frozen=True)
class VersionInfo:
    """Versions shown in the report header."""

    current: str | None = None
    target: str | None = None
    openshift: str | None = None


@dataclass
class Report:
    """A finished run, ready to render.

    Attributes:
        executions: Executions in listing order (see flatten_results)
        versions: Installed, target and OpenShift versions
        verbose: Include impacted objects
        namespace_requesters: Namespace -> requester, for verbose table output
    """

    executions: list[CheckExecution]
    versions: VersionInfo = field(default_factory=VersionInfo)
    verbose: bool = False
    namespace_requesters: dict[str, str] = field(default_factory=dict)

    @property
    def verdict(self) -> Impact:
        return compute_verdict(self.executions)

    @property
    def summary(self) -> Summary:
        return summarize(self.executions)
