"""String matchers implementing the InputMatcher protocol.

Non-string input (including None, a missing header or query value) never
matches. With ``ignore_case`` both sides are compared casefolded; the
configured side is folded once, at construction.

RegexMatcher compiles with ``google-re2``, so matching is linear-time and
patterns needing backtracking (backreferences, lookaround) are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import re2

from simplehttpmock._matcher import MatcherError
from simplehttpmock._result import NO_MATCH, MatchResult

if TYPE_CHECKING:
    from simplehttpmock._types import MatchingData


def _fold(s: str, ignore_case: bool) -> str:
    return s.casefold() if ignore_case else s


@dataclass(frozen=True, slots=True)
class ExactMatcher:
    value: str
    ignore_case: bool = False
    _needle: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_needle", _fold(self.value, self.ignore_case))

    def matches(self, value: MatchingData, /) -> bool:
        return isinstance(value, str) and _fold(value, self.ignore_case) == self._needle


@dataclass(frozen=True, slots=True)
class PrefixMatcher:
    """Matches values starting with ``prefix``. An empty prefix matches any string."""

    prefix: str
    ignore_case: bool = False
    _needle: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_needle", _fold(self.prefix, self.ignore_case))

    def matches(self, value: MatchingData, /) -> bool:
        return isinstance(value, str) and _fold(value, self.ignore_case).startswith(self._needle)


@dataclass(frozen=True, slots=True)
class SuffixMatcher:
    suffix: str
    ignore_case: bool = False
    _needle: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_needle", _fold(self.suffix, self.ignore_case))

    def matches(self, value: MatchingData, /) -> bool:
        return isinstance(value, str) and _fold(value, self.ignore_case).endswith(self._needle)


@dataclass(frozen=True, slots=True)
class ContainsMatcher:
    substring: str
    ignore_case: bool = False
    _needle: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_needle", _fold(self.substring, self.ignore_case))

    def matches(self, value: MatchingData, /) -> bool:
        return isinstance(value, str) and self._needle in _fold(value, self.ignore_case)


@dataclass(frozen=True, slots=True)
class RegexMatcher:
    """Regular expression match that binds named groups.

    The pattern is compiled at construction time via ``google-re2``. Uses
    search (not fullmatch), so anchor the pattern to match the whole value.

    On a match, every named group that participated becomes a parameter
    of the returned MatchResult::

        RegexMatcher(r"^/orders/(?P<order_id>\\d+)$").matches("/orders/12")
        # -> MatchResult(is_match=True, parameters=Parameters({'order_id': '12'}))

    Raises:
        MatcherError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    _compiled: re2.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            compiled = re2.compile(self.pattern)
        except re2.error as e:
            msg = f'invalid regex pattern "{self.pattern}": {e}'
            raise MatcherError(msg) from e
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, value: MatchingData, /) -> MatchResult:
        if not isinstance(value, str):
            return NO_MATCH
        m = self._compiled.search(value)
        if m is None:
            return NO_MATCH
        groups = {name: v for name, v in m.groupdict().items() if v is not None}
        return MatchResult.create(True, groups)
