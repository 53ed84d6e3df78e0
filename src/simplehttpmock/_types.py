"""Core protocols and type aliases for simplehttpmock.

- MatchingData is the type-erased value a DataInput extracts
- DataInput is the domain-specific extraction port
- InputMatcher is the domain-agnostic matching port
- MatchingFunc is any callable that judges a whole context
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from simplehttpmock._result import MatchResult

# None means "data not available" and triggers the None -> false invariant.
MatchingData = str | int | bool | bytes | None

Ctx = TypeVar("Ctx", contravariant=True)


@runtime_checkable
class DataInput(Protocol[Ctx]):
    """Extract a value from a domain-specific context.

    Implementations are domain-specific (HTTP, dict-shaped test contexts)
    but return the domain-agnostic MatchingData type.

    Returning None causes the predicate to evaluate to a non-match.
    """

    def get(self, ctx: Ctx, /) -> MatchingData: ...


@runtime_checkable
class InputMatcher(Protocol):
    """Match against a type-erased value.

    A plain ``bool`` is enough for matchers that bind nothing. Matchers
    that extract parameters (regex groups, path templates) return a
    MatchResult instead; callers widen both via ``MatchResult.coerce``.
    """

    def matches(self, value: MatchingData, /) -> bool | MatchResult: ...


# A user-supplied predicate over a whole context.
type MatchingFunc[T] = Callable[[T], bool | MatchResult]
