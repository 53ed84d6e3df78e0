"""Tests for Matcher selection, parameter binding and depth validation."""

from __future__ import annotations

import pytest

from simplehttpmock import (
    EMPTY_PARAMETERS,
    MAX_DEPTH,
    Action,
    ExactMatcher,
    FieldMatcher,
    Matcher,
    MatcherError,
    NestedMatcher,
    RegexMatcher,
    SinglePredicate,
    matcher_from_predicate,
)
from simplehttpmock.testing import DictInput


def exact(key: str, value: str) -> SinglePredicate[dict[str, str]]:
    return SinglePredicate(DictInput(key), ExactMatcher(value))


def capture(key: str, pattern: str) -> SinglePredicate[dict[str, str]]:
    return SinglePredicate(DictInput(key), RegexMatcher(pattern))


class TestEvaluate:
    def test_first_match_wins(self) -> None:
        m = Matcher(
            matcher_list=(
                FieldMatcher(exact("x", "a"), Action("first")),
                FieldMatcher(exact("x", "a"), Action("second")),
            ),
        )
        assert m.evaluate({"x": "a"}) == "first"

    def test_no_match_returns_none(self) -> None:
        m = Matcher(matcher_list=(FieldMatcher(exact("x", "a"), Action("hit")),))
        assert m.evaluate({"x": "b"}) is None

    def test_on_no_match_fallback(self) -> None:
        m = Matcher(
            matcher_list=(FieldMatcher(exact("x", "a"), Action("hit")),),
            on_no_match=Action("default"),
        )
        assert m.evaluate({"x": "b"}) == "default"

    def test_empty_matcher(self) -> None:
        m: Matcher[dict[str, str], str] = Matcher(matcher_list=())
        assert m.evaluate({"x": "a"}) is None


class TestSelect:
    def test_selection_carries_parameters(self) -> None:
        m = matcher_from_predicate(capture("path", r"^/users/(?P<id>\d+)$"), "user")
        selection = m.select({"path": "/users/3"})
        assert selection is not None
        assert selection.action == "user"
        assert selection.parameters["Id"] == "3"

    def test_fallback_binds_nothing(self) -> None:
        m = matcher_from_predicate(capture("path", r"^/users/(?P<id>\d+)$"), "user", "missing")
        selection = m.select({"path": "/other"})
        assert selection is not None
        assert selection.action == "missing"
        assert selection.parameters is EMPTY_PARAMETERS

    def test_nested_parameters_merge_with_outer(self) -> None:
        inner = Matcher(
            matcher_list=(
                FieldMatcher(capture("b", r"(?P<Shared>\w+)-(?P<inner>\d)"), Action("deep")),
            ),
        )
        outer = Matcher(
            matcher_list=(
                FieldMatcher(capture("a", r"(?P<shared>\w+)/(?P<outer>\d)"), NestedMatcher(inner)),
            ),
        )
        selection = outer.select({"a": "one/1", "b": "two-2"})
        assert selection is not None
        assert selection.action == "deep"
        assert selection.parameters["SHARED"] == "two"
        assert selection.parameters["outer"] == "1"
        assert selection.parameters["inner"] == "2"

    def test_nested_failure_falls_through(self) -> None:
        inner = Matcher(matcher_list=(FieldMatcher(exact("y", "b"), Action("nested_hit")),))
        outer = Matcher(
            matcher_list=(
                FieldMatcher(capture("x", r"(?P<lost>a)"), NestedMatcher(inner)),
                FieldMatcher(exact("x", "a"), Action("fallthrough")),
            ),
        )
        selection = outer.select({"x": "a", "y": "nope"})
        assert selection is not None
        assert selection.action == "fallthrough"
        assert "lost" not in selection.parameters


class TestDepthValidation:
    def _chain(self) -> Matcher[dict[str, str], str]:
        current: Matcher[dict[str, str], str] = Matcher(
            matcher_list=(FieldMatcher(exact("x", "a"), Action("deep")),),
        )
        while current.depth() < MAX_DEPTH:
            current = Matcher(matcher_list=(FieldMatcher(exact("x", "a"), NestedMatcher(current)),))
        return current

    def test_at_max_depth_passes(self) -> None:
        current = self._chain()
        assert current.depth() == MAX_DEPTH
        assert current.evaluate({"x": "a"}) == "deep"

    def test_exceeds_max_depth_raises_at_construction(self) -> None:
        current = self._chain()
        with pytest.raises(MatcherError, match="exceeds"):
            Matcher(matcher_list=(FieldMatcher(exact("x", "a"), NestedMatcher(current)),))
