"""The request a mock is asked to serve."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import parse_qsl

from simplehttpmock._params import Parameters, as_parameters


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """An incoming request as seen by handler predicates.

    ``raw_path`` is the request target as sent, query string included.
    ``path`` and ``query_params`` are split out of it once, at construction.
    Header lookups ignore case; query parameter names do not. A query key
    given twice keeps its last value.
    """

    method: str = "GET"
    raw_path: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    _path: str = field(init=False, repr=False)
    _query: dict[str, str] = field(init=False, repr=False)
    _header_index: Parameters = field(init=False, repr=False)

    def __post_init__(self) -> None:
        path, _, query = self.raw_path.partition("?")
        object.__setattr__(self, "_path", path or "/")
        object.__setattr__(self, "_query", dict(parse_qsl(query, keep_blank_values=True)))
        object.__setattr__(self, "_header_index", as_parameters(self.headers))

    @property
    def path(self) -> str:
        return self._path

    @property
    def query_params(self) -> dict[str, str]:
        return self._query

    def header(self, name: str) -> str | None:
        return self._header_index.get(name)

    def query_param(self, name: str) -> str | None:
        return self._query.get(name)

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding)
