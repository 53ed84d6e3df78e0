"""Route compiler — RouteSpec -> Predicate[HttpRequest].

Translates declarative route conditions (method, path template or path
regex, headers, query parameters) into predicate trees whose evaluation
binds the path parameters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from simplehttpmock._matcher import MatcherError
from simplehttpmock._predicate import Predicate, SinglePredicate, and_predicate
from simplehttpmock._string_matchers import ExactMatcher, PrefixMatcher, RegexMatcher
from simplehttpmock.http._inputs import HeaderInput, MethodInput, PathInput, QueryParamInput
from simplehttpmock.http._template import PathTemplateMatcher

if TYPE_CHECKING:
    from simplehttpmock.http._request import HttpRequest


def catch_all() -> Predicate[HttpRequest]:
    """A predicate that matches any HTTP request."""
    return SinglePredicate(PathInput(), PrefixMatcher(""))


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """Conditions a request must meet to be served by a route.

    All conditions are ANDed together. ``path`` is a template such as
    ``/users/{id:int}``; ``path_regex`` is an RE2 pattern whose named groups
    become parameters. At most one of the two may be set. Methods compare
    case-insensitively; header and query values compare exactly.
    """

    path: str | None = None
    path_regex: str | None = None
    method: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.path is not None and self.path_regex is not None:
            msg = "route may set 'path' or 'path_regex', not both"
            raise MatcherError(msg)

    def to_predicate(self) -> Predicate[HttpRequest]:
        """Convert this route to a predicate tree."""
        predicates: list[Predicate[HttpRequest]] = []

        if self.method is not None:
            predicates.append(
                SinglePredicate(MethodInput(), ExactMatcher(self.method, ignore_case=True))
            )

        if self.path is not None:
            predicates.append(SinglePredicate(PathInput(), PathTemplateMatcher(self.path)))
        elif self.path_regex is not None:
            predicates.append(SinglePredicate(PathInput(), RegexMatcher(self.path_regex)))

        for name, value in self.headers.items():
            predicates.append(SinglePredicate(HeaderInput(name), ExactMatcher(value)))

        for name, value in self.query_params.items():
            predicates.append(SinglePredicate(QueryParamInput(name), ExactMatcher(value)))

        return and_predicate(predicates, catch_all())
