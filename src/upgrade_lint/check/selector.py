"""Check selection by wildcard, group shortcut, or glob over check ids.

Globs use ``fnmatch`` syntax, matched case-sensitively against the whole id:

    *        any run of characters
    ?        any single character
    [abc]    character class; "[!abc]" or "[^abc]" negates, "[a-z]" is a range
    \\c      matches c literally (outside a class)

Unlike ``fnmatch`` itself, malformed patterns (an unterminated or empty class,
a reversed range, a trailing backslash) are errors, raised when the selector is
parsed so a typo aborts the run before any cluster access.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ..error_codes import ErrorCode
from ..exceptions import InvalidSelectorError
from .base import CANONICAL_GROUP_ORDER, Check, CheckGroup

WILDCARD = "*"

_GROUP_SHORTCUTS: dict[str, CheckGroup] = {}
for _group in CANONICAL_GROUP_ORDER:
    _GROUP_SHORTCUTS[_group.value] = _group
    _GROUP_SHORTCUTS[_group.selector] = _group


class GlobSyntaxError(ValueError):
    """Malformed glob pattern."""


def _check_ranges(body: str) -> None:
    i = 0
    while i < len(body):
        if i + 2 < len(body) and body[i + 1] == "-":
            if body[i + 2] < body[i]:
                raise GlobSyntaxError(f"invalid range {body[i]}-{body[i + 2]}")
            i += 3
        else:
            i += 1


def normalize_glob(pattern: str) -> str:
    """Validate a selector glob and return the equivalent ``fnmatch`` pattern.

    Raises:
        GlobSyntaxError: If the pattern is malformed
    """
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "\\":
            if i + 1 >= n:
                raise GlobSyntaxError("dangling escape")
            literal = pattern[i + 1]
            out.append(f"[{literal}]" if literal in "*?[" else literal)
            i += 2
        elif ch == "[":
            j = i + 1
            negate = j < n and pattern[j] in "!^"
            if negate:
                j += 1
            end = pattern.find("]", j)
            if end == -1:
                raise GlobSyntaxError("unterminated character class")
            body = pattern[j:end]
            if not body:
                raise GlobSyntaxError("empty character class")
            _check_ranges(body)
            out.append("[" + ("!" if negate else "") + body + "]")
            i = end + 1
        else:
            out.append(ch)
            i += 1
    return "".join(out)


@dataclass(frozen=True)
class Selector:
    """One parsed selector."""

    raw: str
    group: CheckGroup | None = None
    glob: str | None = None

    def matches(self, check: Check) -> bool:
        if self.raw == WILDCARD:
            return True
        if self.group is not None:
            return check.group == self.group
        return self.glob is not None and fnmatch.fnmatchcase(check.id, self.glob)


def parse_selector(value: str) -> Selector:
    """Parse a single selector.

    Raises:
        InvalidSelectorError: If the selector is empty or not a valid glob
    """
    if not value:
        raise InvalidSelectorError(
            "check selector must not be empty",
            selector=value,
            error_code=ErrorCode.INP_SELECTOR_EMPTY.value,
            suggestion="Use '*' to select all checks",
        )
    if value == WILDCARD:
        return Selector(raw=value)
    group = _GROUP_SHORTCUTS.get(value)
    if group is not None:
        return Selector(raw=value, group=group)
    try:
        glob = normalize_glob(value)
    except GlobSyntaxError as e:
        raise InvalidSelectorError(
            f"invalid check selector {value!r}: {e}",
            selector=value,
            suggestion="Use '*', a group name such as 'components', "
            "or a glob such as 'components.*'",
        ) from e
    return Selector(raw=value, glob=glob)


class SelectorSet:
    """A non-empty set of selectors; a check is selected if any selector matches."""

    def __init__(self, selectors: Iterable[Selector]):
        self._selectors = tuple(selectors)
        if not self._selectors:
            raise InvalidSelectorError(
                "at least one check selector is required",
                error_code=ErrorCode.INP_SELECTOR_EMPTY.value,
                suggestion="Use '*' to select all checks",
            )

    @classmethod
    def parse(cls, values: Iterable[str]) -> SelectorSet:
        """Parse and validate every selector eagerly.

        Raises:
            InvalidSelectorError: On an empty set, an empty selector, or a
                malformed pattern
        """
        return cls(parse_selector(value) for value in values)

    @classmethod
    def all(cls) -> SelectorSet:
        return cls([Selector(raw=WILDCARD)])

    def matches(self, check: Check) -> bool:
        return any(selector.matches(check) for selector in self._selectors)

    @property
    def raw(self) -> list[str]:
        return [selector.raw for selector in self._selectors]

    def __iter__(self) -> Iterator[Selector]:
        return iter(self._selectors)

    def __len__(self) -> int:
        return len(self._selectors)

    def __repr__(self) -> str:
        return f"SelectorSet({self.raw!r})"
