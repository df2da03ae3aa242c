"""Per-invocation check registry."""

from collections.abc import Iterator

from .base import Check, CheckGroup
from .selector import SelectorSet


class CheckRegistry:
    """Ordered collection of checks.

    Registration order is the execution order within a group. Each lint
    invocation builds its own registry; duplicate ids are not detected.
    """

    def __init__(self) -> None:
        self._checks: list[Check] = []

    def register(self, check: Check) -> None:
        self._checks.append(check)

    def all(self) -> list[Check]:
        return list(self._checks)

    def by_group(self, group: CheckGroup) -> list[Check]:
        return [c for c in self._checks if c.group == group]

    def get(self, check_id: str) -> Check | None:
        """Return the first check registered with this id, or None."""
        for check in self._checks:
            if check.id == check_id:
                return check
        return None

    def select(
        self, selectors: SelectorSet, group: CheckGroup | None = None
    ) -> list[Check]:
        """Checks matching any selector, optionally limited to one group."""
        return [
            c
            for c in self._checks
            if (group is None or c.group == group) and selectors.matches(c)
        ]

    def __len__(self) -> int:
        return len(self._checks)

    def __iter__(self) -> Iterator[Check]:
        return iter(self._checks)
