"""Test utilities for simplehttpmock.

Provides a convenience DataInput for dict-shaped contexts. It is not a
domain adapter: it exists to keep predicate tests and examples short.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from simplehttpmock._types import MatchingData


@dataclass(frozen=True, slots=True)
class DictInput:
    """Extract a value by key from a dict context.

    >>> from simplehttpmock import SinglePredicate, ExactMatcher
    >>> from simplehttpmock.testing import DictInput
    >>> p = SinglePredicate(DictInput("name"), ExactMatcher("alice"))
    >>> bool(p.evaluate({"name": "alice"}))
    True
    """

    key: str

    def get(self, ctx: dict[str, Any], /) -> MatchingData:
        return ctx.get(self.key)
