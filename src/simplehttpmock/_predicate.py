"""Predicate composition — Boolean logic over data extraction + matching.

SinglePredicate combines a DataInput (extract) with an InputMatcher (match).
And, Or, Not compose predicates with short-circuit evaluation.
FuncPredicate adapts an arbitrary matching function.

Every predicate evaluates to a MatchResult, so compound predicates can
carry the parameters bound by their children up to the dispatcher while
still reading as plain Boolean logic (``if p.evaluate(ctx): ...``).

The Predicate union type is pattern-matchable via match/case.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from simplehttpmock._params import EMPTY_PARAMETERS
from simplehttpmock._result import MATCH, NO_MATCH, MatchResult

if TYPE_CHECKING:
    from simplehttpmock._types import DataInput, InputMatcher, MatchingFunc


@dataclass(frozen=True, slots=True)
class SinglePredicate[Ctx]:
    """A single predicate: extract data, then match.

    Enforces the None -> false invariant: if the DataInput returns None,
    the predicate does not match and the matcher is never consulted.
    """

    input: DataInput[Ctx]
    matcher: InputMatcher

    def evaluate(self, ctx: Any) -> MatchResult:
        value = self.input.get(ctx)
        if value is None:
            return NO_MATCH
        return MatchResult.coerce(self.matcher.matches(value))


@dataclass(frozen=True, slots=True)
class And[Ctx]:
    """All predicates must match (logical AND).

    Short-circuits on the first non-match. On success the children's
    parameters are merged in order, so a later child wins a key collision.
    Empty And matches (vacuous truth).
    """

    predicates: tuple[Predicate[Ctx], ...]

    def evaluate(self, ctx: Any) -> MatchResult:
        parameters = EMPTY_PARAMETERS
        for p in self.predicates:
            result = p.evaluate(ctx)
            if not result:
                return NO_MATCH
            parameters = parameters.merged(result.parameters)
        return MatchResult.create(True, parameters)


@dataclass(frozen=True, slots=True)
class Or[Ctx]:
    """Any predicate must match (logical OR).

    Returns the first matching child's result unchanged. Empty Or does
    not match.
    """

    predicates: tuple[Predicate[Ctx], ...]

    def evaluate(self, ctx: Any) -> MatchResult:
        for p in self.predicates:
            result = p.evaluate(ctx)
            if result:
                return result
        return NO_MATCH


@dataclass(frozen=True, slots=True)
class Not[Ctx]:
    """Inverts the inner predicate. Bindings of the inner predicate are dropped."""

    predicate: Predicate[Ctx]

    def evaluate(self, ctx: Any) -> MatchResult:
        return NO_MATCH if self.predicate.evaluate(ctx) else MATCH


@dataclass(frozen=True, slots=True)
class FuncPredicate[Ctx]:
    """Wraps a matching function that returns a bool or a MatchResult.

    >>> FuncPredicate(lambda req: req["user"] == "alice").evaluate({"user": "alice"})
    MatchResult(is_match=True, parameters=Parameters({}))
    """

    func: MatchingFunc[Ctx]

    def evaluate(self, ctx: Any) -> MatchResult:
        return MatchResult.coerce(self.func(ctx))


type Predicate[Ctx] = (
    SinglePredicate[Ctx] | And[Ctx] | Or[Ctx] | Not[Ctx] | FuncPredicate[Ctx]
)


def and_predicate[Ctx](
    predicates: list[Predicate[Ctx]], catch_all: Predicate[Ctx]
) -> Predicate[Ctx]:
    """Compose predicates with AND semantics, optimizing for common cases.

    - Empty -> catch_all (no conditions = match everything)
    - Single -> unwrapped (no wrapping overhead)
    - Multiple -> And(predicates)
    """
    if not predicates:
        return catch_all
    if len(predicates) == 1:
        return predicates[0]
    return And(tuple(predicates))


def or_predicate[Ctx](
    predicates: list[Predicate[Ctx]], catch_all: Predicate[Ctx]
) -> Predicate[Ctx]:
    """Compose predicates with OR semantics. Symmetric with and_predicate."""
    if not predicates:
        return catch_all
    if len(predicates) == 1:
        return predicates[0]
    return Or(tuple(predicates))


def predicate_depth(p: Predicate[Any]) -> int:
    """Calculate the nesting depth of a predicate tree."""
    match p:
        case SinglePredicate() | FuncPredicate():
            return 1
        case And(predicates=ps) | Or(predicates=ps):
            return 1 + max((predicate_depth(sub) for sub in ps), default=0)
        case Not(predicate=inner):
            return 1 + predicate_depth(inner)
        case _:  # pragma: no cover
            return 0
