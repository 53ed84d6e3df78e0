"""simplehttpmock.http — HTTP mocking domain.

Provides the HttpRequest context, DataInput implementations, path
templates, route compilation and the HttpMock dispatcher.
"""

from simplehttpmock.http._inputs import (
    BodyInput,
    HeaderInput,
    MethodInput,
    PathInput,
    QueryParamInput,
)
from simplehttpmock.http._mock import HttpMock, MockResponse, RequestHandler, Responder
from simplehttpmock.http._request import HttpRequest
from simplehttpmock.http._routes import RouteSpec, catch_all
from simplehttpmock.http._template import CONVERTERS, PathTemplateMatcher, parse_template

__all__ = [
    # Context
    "HttpRequest",
    # DataInputs
    "PathInput",
    "MethodInput",
    "HeaderInput",
    "QueryParamInput",
    "BodyInput",
    # Path templates
    "CONVERTERS",
    "PathTemplateMatcher",
    "parse_template",
    # Routes
    "RouteSpec",
    "catch_all",
    # Dispatch
    "HttpMock",
    "MockResponse",
    "RequestHandler",
    "Responder",
]
