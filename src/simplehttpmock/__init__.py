"""simplehttpmock — in-process HTTP mocking built on match results.

All public types are exported from this module for flat imports:

    from simplehttpmock import MatchResult, HttpMock, HttpRequest, MockResponse
"""

__version__ = "0.1.0"

from simplehttpmock._config import (
    ConfigParseError,
    MockConfig,
    RouteConfig,
    load_mock_config,
    parse_mock_config,
)
from simplehttpmock._matcher import (
    MAX_DEPTH,
    Action,
    FieldMatcher,
    Matcher,
    MatcherError,
    NestedMatcher,
    OnMatch,
    Selection,
    matcher_from_predicate,
)
from simplehttpmock._params import EMPTY_PARAMETERS, Parameters, as_parameters
from simplehttpmock._predicate import (
    And,
    FuncPredicate,
    Not,
    Or,
    Predicate,
    SinglePredicate,
    and_predicate,
    or_predicate,
    predicate_depth,
)
from simplehttpmock._result import MATCH, NO_MATCH, MatchResult
from simplehttpmock._string_matchers import (
    ContainsMatcher,
    ExactMatcher,
    PrefixMatcher,
    RegexMatcher,
    SuffixMatcher,
)
from simplehttpmock._types import DataInput, InputMatcher, MatchingData, MatchingFunc
from simplehttpmock.http import (
    HttpMock,
    HttpRequest,
    MockResponse,
    PathTemplateMatcher,
    RequestHandler,
    RouteSpec,
)

__all__ = [
    # Match results
    "MatchResult",
    "MATCH",
    "NO_MATCH",
    "Parameters",
    "EMPTY_PARAMETERS",
    "as_parameters",
    # Protocols
    "DataInput",
    "InputMatcher",
    "MatchingData",
    "MatchingFunc",
    # Predicates
    "SinglePredicate",
    "And",
    "Or",
    "Not",
    "FuncPredicate",
    "Predicate",
    "and_predicate",
    "or_predicate",
    "predicate_depth",
    # Matcher
    "Action",
    "NestedMatcher",
    "OnMatch",
    "FieldMatcher",
    "Matcher",
    "MatcherError",
    "Selection",
    "matcher_from_predicate",
    "MAX_DEPTH",
    # Concrete matchers
    "ExactMatcher",
    "PrefixMatcher",
    "SuffixMatcher",
    "ContainsMatcher",
    "RegexMatcher",
    "PathTemplateMatcher",
    # HTTP
    "HttpRequest",
    "HttpMock",
    "MockResponse",
    "RequestHandler",
    "RouteSpec",
    # Config
    "MockConfig",
    "RouteConfig",
    "ConfigParseError",
    "parse_mock_config",
    "load_mock_config",
]
