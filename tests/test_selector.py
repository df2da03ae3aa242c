"""Tests for check selectors."""

import fnmatch

import pytest

from upgrade_lint.check.base import CheckGroup
from upgrade_lint.check.selector import (
    GlobSyntaxError,
    SelectorSet,
    normalize_glob,
    parse_selector,
)
from upgrade_lint.error_codes import ErrorCode
from upgrade_lint.exceptions import InputValidationError, InvalidSelectorError
from tests.fixtures import StaticCheck


@pytest.fixture
def checks():
    return [
        StaticCheck("dependencies.openshift.version-requirement", CheckGroup.DEPENDENCY),
        StaticCheck("components.codeflare.removal", CheckGroup.COMPONENT),
        StaticCheck("components.modelmesh.removal", CheckGroup.COMPONENT),
        StaticCheck("workloads.ray.impacted-workloads", CheckGroup.WORKLOAD),
    ]


def _selected(selectors: SelectorSet, checks) -> list[str]:
    return [c.id for c in checks if selectors.matches(c)]


class TestSelectorMatching:
    """Test how selectors pick checks."""

    def test_wildcard_selects_everything(self, checks) -> None:
        assert len(_selected(SelectorSet.parse(["*"]), checks)) == 4

    @pytest.mark.parametrize("shortcut", ["component", "components"])
    def test_group_shortcut_singular_and_plural(self, checks, shortcut) -> None:
        assert _selected(SelectorSet.parse([shortcut]), checks) == [
            "components.codeflare.removal",
            "components.modelmesh.removal",
        ]

    @pytest.mark.parametrize("shortcut", ["service", "services"])
    def test_service_group_shortcut(self, checks, shortcut) -> None:
        checks.append(StaticCheck("services.mesh.removal", CheckGroup.SERVICE))
        assert _selected(SelectorSet.parse([shortcut]), checks) == [
            "services.mesh.removal"
        ]

    def test_exact_id(self, checks) -> None:
        assert _selected(SelectorSet.parse(["components.codeflare.removal"]), checks) == [
            "components.codeflare.removal"
        ]

    def test_glob_pattern(self, checks) -> None:
        assert _selected(SelectorSet.parse(["*.removal"]), checks) == [
            "components.codeflare.removal",
            "components.modelmesh.removal",
        ]

    def test_union_of_selectors(self, checks) -> None:
        selectors = SelectorSet.parse(["dependencies", "workloads.ray.*"])
        assert _selected(selectors, checks) == [
            "dependencies.openshift.version-requirement",
            "workloads.ray.impacted-workloads",
        ]

    def test_no_match_is_not_an_error(self, checks) -> None:
        assert _selected(SelectorSet.parse(["services.*"]), checks) == []

    def test_glob_is_anchored(self, checks) -> None:
        assert _selected(SelectorSet.parse(["codeflare"]), checks) == []

    def test_character_class(self, checks) -> None:
        selectors = SelectorSet.parse(["components.[cm]*.removal"])
        assert len(_selected(selectors, checks)) == 2

    def test_negated_class(self, checks) -> None:
        selectors = SelectorSet.parse(["components.[^c]*.removal"])
        assert _selected(selectors, checks) == ["components.modelmesh.removal"]


class TestSelectorValidation:
    """Test that malformed selectors are rejected up front."""

    @pytest.mark.parametrize("pattern", ["[", "components.[abc", "[z-a]", "foo\\"])
    def test_malformed_glob_rejected(self, pattern) -> None:
        with pytest.raises(InvalidSelectorError) as exc_info:
            SelectorSet.parse([pattern])
        assert exc_info.value.selector == pattern
        assert exc_info.value.error_code == ErrorCode.INP_SELECTOR_INVALID.value

    def test_empty_selector_rejected(self) -> None:
        with pytest.raises(InvalidSelectorError) as exc_info:
            SelectorSet.parse([""])
        assert exc_info.value.error_code == ErrorCode.INP_SELECTOR_EMPTY.value

    def test_empty_set_rejected(self) -> None:
        with pytest.raises(InvalidSelectorError):
            SelectorSet.parse([])

    def test_is_input_validation_error(self) -> None:
        with pytest.raises(InputValidationError):
            parse_selector("[")

    def test_group_shortcut_parsed(self) -> None:
        assert parse_selector("workloads").group is CheckGroup.WORKLOAD

    def test_raw_preserved(self) -> None:
        assert SelectorSet.parse(["*", "components"]).raw == ["*", "components"]


class TestNormalizeGlob:
    """Test translation of selector globs to fnmatch patterns."""

    def _match(self, pattern: str, check_id: str) -> bool:
        return fnmatch.fnmatchcase(check_id, normalize_glob(pattern))

    def test_plain_pattern_unchanged(self) -> None:
        assert normalize_glob("components.*.removal") == "components.*.removal"

    def test_question_mark(self) -> None:
        assert self._match("a?c", "abc")
        assert not self._match("a?c", "ac")

    def test_escape(self) -> None:
        assert self._match("a\\*", "a*")
        assert not self._match("a\\*", "ab")

    def test_dots_are_literal(self) -> None:
        assert not self._match("a.b", "axb")

    def test_case_sensitive(self) -> None:
        assert not self._match("Components.*", "components.codeflare.removal")

    def test_range(self) -> None:
        assert self._match("[a-c]", "b")
        assert not self._match("[a-c]", "d")

    @pytest.mark.parametrize("pattern", ["[^a]", "[!a]"])
    def test_negation_forms(self, pattern) -> None:
        assert normalize_glob(pattern) == "[!a]"
        assert self._match(pattern, "b")
        assert not self._match(pattern, "a")

    @pytest.mark.parametrize(
        ("pattern", "message"),
        [
            ("[ab", "unterminated"),
            ("[]", "empty"),
            ("[!]", "empty"),
            ("[z-a]", "invalid range"),
            ("ab\\", "dangling escape"),
        ],
    )
    def test_malformed(self, pattern, message) -> None:
        with pytest.raises(GlobSyntaxError, match=message):
            normalize_glob(pattern)
