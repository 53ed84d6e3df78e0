"""Matcher — Top-level matcher with first-match-wins semantics.

- Field matchers evaluated in order (first-match-wins)
- OnMatch is exclusive: Action XOR NestedMatcher
- A nested matcher that selects nothing falls through to the next field matcher
- on_no_match is the Matcher-level fallback

``select`` also reports the parameters bound by the predicates on the
winning path, which is what the HTTP dispatcher hands to a responder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from simplehttpmock._params import EMPTY_PARAMETERS, Parameters
from simplehttpmock._predicate import Predicate, predicate_depth

MAX_DEPTH = 32


class MatcherError(Exception):
    """Errors from matcher construction and validation."""


@dataclass(frozen=True, slots=True)
class Action[A]:
    """Return this value when matched."""

    value: A


@dataclass(frozen=True, slots=True)
class NestedMatcher[Ctx, A]:
    """Continue evaluation into a nested matcher."""

    matcher: Matcher[Ctx, A]


type OnMatch[Ctx, A] = Action[A] | NestedMatcher[Ctx, A]


@dataclass(frozen=True, slots=True)
class FieldMatcher[Ctx, A]:
    """Pairs a predicate with an OnMatch outcome."""

    predicate: Predicate[Ctx]
    on_match: OnMatch[Ctx, A]


@dataclass(frozen=True, slots=True)
class Selection[A]:
    """The action chosen by a Matcher and the parameters bound on the way."""

    action: A
    parameters: Parameters = field(default_factory=lambda: EMPTY_PARAMETERS)


@dataclass(frozen=True, slots=True)
class Matcher[Ctx, A]:
    """An ordered list of field matchers; the first one whose predicate
    matches (and whose nested matcher, if any, selects something) wins.

    ``on_no_match`` is consulted only when every field matcher misses.
    Trees deeper than MAX_DEPTH are rejected with MatcherError when the
    Matcher is built, never during evaluation.
    """

    matcher_list: tuple[FieldMatcher[Ctx, A], ...]
    on_no_match: OnMatch[Ctx, A] | None = None

    def __post_init__(self) -> None:
        self.validate()

    def evaluate(self, ctx: Any) -> A | None:
        """The winning action, or None."""
        selection = self.select(ctx)
        return None if selection is None else selection.action

    def select(self, ctx: Any) -> Selection[A] | None:
        """The winning action together with the parameters bound on its path.

        An outer predicate's bindings are merged with the nested matcher's,
        nested last. The on_no_match fallback binds nothing.
        """
        for fm in self.matcher_list:
            result = fm.predicate.evaluate(ctx)
            if not result:
                continue
            selection = _select_on_match(fm.on_match, ctx, result.parameters)
            if selection is not None:
                return selection
        if self.on_no_match is None:
            return None
        return _select_on_match(self.on_no_match, ctx, EMPTY_PARAMETERS)

    def validate(self) -> None:
        """Raise MatcherError if the tree is deeper than MAX_DEPTH."""
        if (d := self.depth()) > MAX_DEPTH:
            msg = f"matcher depth {d} exceeds maximum allowed depth {MAX_DEPTH}"
            raise MatcherError(msg)

    def depth(self) -> int:
        """Levels in this tree, counting the matcher itself as one."""
        deepest = 0
        for fm in self.matcher_list:
            deepest = max(deepest, predicate_depth(fm.predicate), _on_match_depth(fm.on_match))
        if self.on_no_match is not None:
            deepest = max(deepest, _on_match_depth(self.on_no_match))
        return 1 + deepest


def matcher_from_predicate[Ctx, A](
    predicate: Predicate[Ctx],
    action: A,
    on_no_match: A | None = None,
) -> Matcher[Ctx, A]:
    """Single-rule Matcher: *action* when *predicate* matches, else *on_no_match*."""
    return Matcher(
        matcher_list=(FieldMatcher(predicate, Action(action)),),
        on_no_match=None if on_no_match is None else Action(on_no_match),
    )


def _select_on_match[A](
    on_match: OnMatch[Any, A], ctx: Any, bound: Parameters
) -> Selection[A] | None:
    match on_match:
        case Action(value=v):
            return Selection(v, bound)
        case NestedMatcher(matcher=m):
            inner = m.select(ctx)
            if inner is None:
                return None
            return Selection(inner.action, bound.merged(inner.parameters))
    return None  # pragma: no cover


def _on_match_depth(on_match: OnMatch[Any, Any]) -> int:
    """Calculate depth contribution of an OnMatch."""
    match on_match:
        case Action():
            return 0
        case NestedMatcher(matcher=m):
            return m.depth()
    return 0  # pragma: no cover
