"""Request fields that predicates can match on.

Every input reads one value off an HttpRequest. A header or query
parameter the request lacks reads as None, which no string matcher
accepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from simplehttpmock._types import MatchingData
    from simplehttpmock.http._request import HttpRequest


@dataclass(frozen=True, slots=True)
class MethodInput:
    def get(self, ctx: HttpRequest, /) -> MatchingData:
        return ctx.method


@dataclass(frozen=True, slots=True)
class PathInput:
    """The path component, query string removed."""

    def get(self, ctx: HttpRequest, /) -> MatchingData:
        return ctx.path


@dataclass(frozen=True, slots=True)
class HeaderInput:
    name: str

    def get(self, ctx: HttpRequest, /) -> MatchingData:
        return ctx.header(self.name)


@dataclass(frozen=True, slots=True)
class QueryParamInput:
    name: str

    def get(self, ctx: HttpRequest, /) -> MatchingData:
        return ctx.query_param(self.name)


@dataclass(frozen=True, slots=True)
class BodyInput:
    """The body decoded as text. Undecodable bodies read as None."""

    encoding: str = "utf-8"

    def get(self, ctx: HttpRequest, /) -> MatchingData:
        try:
            return ctx.text(self.encoding)
        except UnicodeDecodeError:
            return None
