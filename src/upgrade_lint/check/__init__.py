"""Check engine: contract, registry, selection, execution and aggregation."""

from .aggregate import (
    ResultRow,
    Summary,
    collect_rows,
    compute_verdict,
    exit_code_for,
    flatten_results,
    max_impact,
    summarize,
)
from .base import (
    CANONICAL_GROUP_ORDER,
    BaseCheck,
    Check,
    CheckExecution,
    CheckGroup,
    VerboseOutputFormatter,
)
from .conditions import new_condition
from .context import RunContext
from .executor import Executor
from .mode import Mode, resolve_mode
from .registry import CheckRegistry
from .result import (
    Condition,
    ConditionStatus,
    DiagnosticResult,
    Impact,
    ImpactedObject,
)
from .selector import SelectorSet
from .target import Target
from .verbose import DefaultVerboseFormatter, formatter_for

__all__ = [
    "CANONICAL_GROUP_ORDER",
    "BaseCheck",
    "Check",
    "CheckExecution",
    "CheckGroup",
    "CheckRegistry",
    "Condition",
    "ConditionStatus",
    "DefaultVerboseFormatter",
    "DiagnosticResult",
    "Executor",
    "Impact",
    "ImpactedObject",
    "Mode",
    "ResultRow",
    "RunContext",
    "SelectorSet",
    "Summary",
    "Target",
    "VerboseOutputFormatter",
    "collect_rows",
    "compute_verdict",
    "exit_code_for",
    "flatten_results",
    "formatter_for",
    "max_impact",
    "new_condition",
    "resolve_mode",
    "summarize",
]
