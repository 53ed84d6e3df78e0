"""MatchResult — the answer to "can this handler serve this request?".

A MatchResult carries the decision of a matching predicate together with
the parameters the predicate bound while deciding. It is truthy exactly
when the predicate matched, so dispatch code that only cares about the
decision writes ``if result:`` and never touches ``parameters``.

Producers that only have a yes/no answer may return a plain ``bool``.
Every call site that accepts a predicate's output passes it through
``MatchResult.coerce``, which widens a bool into a parameterless result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from simplehttpmock._params import EMPTY_PARAMETERS, Parameters, as_parameters

if TYPE_CHECKING:
    from simplehttpmock._params import ParameterItems


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Immutable match decision plus case-insensitive bound parameters.

    Prefer the ``create`` / ``from_bool`` constructors. Direct construction
    normalizes ``parameters`` the same way, so ``parameters`` is never None.

    >>> result = MatchResult.create(True, [("Id", 7)])
    >>> bool(result), result.parameters["id"]
    (True, 7)
    """

    is_match: bool
    parameters: Parameters = field(default_factory=lambda: EMPTY_PARAMETERS)

    def __post_init__(self) -> None:
        object.__setattr__(self, "is_match", bool(self.is_match))
        object.__setattr__(self, "parameters", as_parameters(self.parameters))

    def __bool__(self) -> bool:
        return self.is_match

    @classmethod
    def create(
        cls, is_match: bool, parameters: ParameterItems | None = None
    ) -> MatchResult:
        """Build a result from a decision and optional ``(key, value)`` pairs.

        Keys collide case-insensitively and the last pair wins. ``None`` or
        empty *parameters* yield the shared empty mapping.

        Raises:
            TypeError: If a parameter key is not a string.
        """
        return cls(is_match, as_parameters(parameters))

    @classmethod
    def from_bool(cls, value: bool) -> MatchResult:
        """Widen a plain decision into a result with no parameters."""
        return MATCH if value else NO_MATCH

    @classmethod
    def coerce(cls, value: bool | MatchResult) -> MatchResult:
        """Accept either a bool or a MatchResult from a matching predicate.

        Raises:
            TypeError: If *value* is neither.
        """
        if isinstance(value, MatchResult):
            return value
        if isinstance(value, bool):
            return MATCH if value else NO_MATCH
        msg = f"matching function must return bool or MatchResult, got {type(value).__name__}"
        raise TypeError(msg)


MATCH = MatchResult(True)
NO_MATCH = MatchResult(False)
