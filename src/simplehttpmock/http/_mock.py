"""HttpMock — in-process request dispatch over registered handlers.

Handlers are tried in registration order (first-match-wins). Each handler
pairs a predicate with a responder; the predicate's MatchResult decides
whether the handler serves the request, and its parameters are passed to
the responder.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from simplehttpmock._matcher import Action, FieldMatcher, Matcher
from simplehttpmock._predicate import FuncPredicate
from simplehttpmock.http._routes import RouteSpec

if TYPE_CHECKING:
    from simplehttpmock._config import MockConfig
    from simplehttpmock._matcher import Selection
    from simplehttpmock._params import Parameters
    from simplehttpmock._predicate import Predicate
    from simplehttpmock._result import MatchResult
    from simplehttpmock._types import MatchingFunc
    from simplehttpmock.http._request import HttpRequest

logger = logging.getLogger("simplehttpmock.dispatch")


@dataclass(frozen=True, slots=True)
class MockResponse:
    """A canned HTTP response. Header names are stored casefolded."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _normalize_headers(self.headers))

    @staticmethod
    def text(
        text: str,
        *,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
        encoding: str = "utf-8",
    ) -> MockResponse:
        merged = {"content-type": f"text/plain; charset={encoding}"}
        merged.update(_normalize_headers(headers))
        return MockResponse(status=status, headers=merged, body=text.encode(encoding))

    @staticmethod
    def json(
        obj: Any,
        *,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> MockResponse:
        body = json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        merged = {"content-type": "application/json; charset=utf-8"}
        merged.update(_normalize_headers(headers))
        return MockResponse(status=status, headers=merged, body=body)

    def header(self, name: str) -> str | None:
        """Get a header value by name (case-insensitive)."""
        return self.headers.get(name.casefold())


type Responder = Callable[[HttpRequest, Parameters], MockResponse]


@dataclass(slots=True)
class RequestHandler:
    """A predicate plus the responder that serves requests it matches.

    Every request the handler serves is appended to ``calls``.
    """

    predicate: Predicate[HttpRequest]
    responder: Responder
    name: str | None = None
    calls: list[HttpRequest] = field(default_factory=list)

    def match(self, request: HttpRequest) -> MatchResult:
        return self.predicate.evaluate(request)

    def serve(self, request: HttpRequest, parameters: Parameters) -> MockResponse:
        self.calls.append(request)
        return self.responder(request, parameters)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def called(self) -> bool:
        return bool(self.calls)


class HttpMock:
    """Dispatches requests to the first registered handler that matches.

    Usage::

        mock = HttpMock()
        mock.route("GET", "/users/{id:int}", lambda req, params: MockResponse.json({"id": params["id"]}))
        mock.handle(HttpRequest("GET", "/users/7")).body  # b'{"id":7}'

    Requests no handler matches get ``default_status`` and are recorded
    in ``unmatched``.
    """

    def __init__(self, default_status: int = 404) -> None:
        self.default_status = default_status
        self.unmatched: list[HttpRequest] = []
        self._handlers: list[RequestHandler] = []
        self._matcher: Matcher[HttpRequest, RequestHandler] = Matcher(matcher_list=())

    @property
    def handlers(self) -> tuple[RequestHandler, ...]:
        return tuple(self._handlers)

    def add(
        self,
        predicate: Predicate[HttpRequest] | MatchingFunc[HttpRequest],
        responder: Responder | MockResponse,
        name: str | None = None,
    ) -> RequestHandler:
        """Register a handler.

        *predicate* is a Predicate or a plain function returning ``bool`` or
        MatchResult. *responder* is a function of ``(request, parameters)``
        or a fixed MockResponse.
        """
        if not hasattr(predicate, "evaluate"):
            predicate = FuncPredicate(predicate)
        if isinstance(responder, MockResponse):
            responder = _static(responder)
        handler = RequestHandler(predicate=predicate, responder=responder, name=name)
        handlers = [*self._handlers, handler]
        # Raises MatcherError on an over-deep predicate; nothing is registered then.
        self._matcher = Matcher(
            matcher_list=tuple(FieldMatcher(h.predicate, Action(h)) for h in handlers)
        )
        self._handlers = handlers
        return handler

    def route(
        self,
        method: str | None,
        path: str,
        responder: Responder | MockResponse,
        *,
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, str] | None = None,
        name: str | None = None,
    ) -> RequestHandler:
        """Register a handler for a method and path template."""
        spec = RouteSpec(
            path=path,
            method=method,
            headers=dict(headers or {}),
            query_params=dict(query or {}),
        )
        return self.add(spec.to_predicate(), responder, name=name)

    def load(self, config: MockConfig) -> list[RequestHandler]:
        """Register every route of a parsed mock config, in order.

        The config's ``default_status`` replaces this mock's only when the
        config sets one.
        """
        if config.default_status is not None:
            self.default_status = config.default_status
        return [
            self.add(route.spec.to_predicate(), route.response, name=route.name)
            for route in config.routes
        ]

    def handler(self, name: str) -> RequestHandler:
        """Look up a handler by name.

        Raises:
            KeyError: If no handler has that name.
        """
        for h in self._handlers:
            if h.name == name:
                return h
        raise KeyError(name)

    def select(self, request: HttpRequest) -> Selection[RequestHandler] | None:
        """Return the handler that would serve *request*, without serving it."""
        return self._matcher.select(request)

    def handle(self, request: HttpRequest) -> MockResponse:
        """Serve *request* with the first matching handler."""
        selection = self.select(request)
        if selection is None:
            logger.debug("no handler for %s %s", request.method, request.raw_path)
            self.unmatched.append(request)
            return MockResponse(status=self.default_status)

        handler = selection.action
        logger.debug(
            "%s %s -> %s %s",
            request.method,
            request.raw_path,
            handler.name or "<unnamed>",
            selection.parameters,
        )
        return handler.serve(request, selection.parameters)

    def reset(self) -> None:
        """Forget recorded calls, keeping the registered handlers."""
        self.unmatched.clear()
        for h in self._handlers:
            h.calls.clear()


def _static(response: MockResponse) -> Responder:
    def respond(_request: HttpRequest, _parameters: Parameters) -> MockResponse:
        return response

    return respond


def _normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    if not headers:
        return {}
    return {k.casefold(): v for k, v in headers.items()}
