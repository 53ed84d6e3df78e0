"""Path templates — ``/users/{id:int}`` style path matching with bindings.

A template is parsed into segments and compiled to a single anchored RE2
pattern. Matching returns a MatchResult whose parameters hold the
converted segment values, keyed by parameter name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import re2

from simplehttpmock._matcher import MatcherError
from simplehttpmock._result import NO_MATCH, MatchResult

if TYPE_CHECKING:
    from simplehttpmock._types import MatchingData


# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a path template.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


def parse_template(template: str) -> list[PathSegment]:
    """Parse a path template into segments.

    Raises:
        MatcherError: On an unknown converter, an invalid parameter name,
            a name repeated in any casing, or a ``path`` parameter that is
            not last.
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()
    parts = [part for part in template.strip("/").split("/") if part]
    for i, part in enumerate(parts):
        if not (part.startswith("{") and part.endswith("}")):
            segments.append(PathSegment(value=part))
            continue

        inner = part[1:-1]
        param_name, _, param_type = inner.partition(":")
        param_type = param_type or "str"
        if not param_name.isidentifier():
            msg = f"invalid parameter name {param_name!r} in template {template!r}"
            raise MatcherError(msg)
        if param_type not in CONVERTERS:
            msg = f"unknown converter {param_type!r} in template {template!r}"
            raise MatcherError(msg)
        if param_name.casefold() in seen:
            msg = f"duplicate parameter {param_name!r} in template {template!r}"
            raise MatcherError(msg)
        if param_type == "path" and i != len(parts) - 1:
            msg = f"'path' parameter must be the last segment in template {template!r}"
            raise MatcherError(msg)
        seen.add(param_name.casefold())
        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_name=param_name,
                param_type=param_type,
            )
        )
    return segments


def convert_param(value: str, param_type: str) -> Any:
    """Convert a captured segment to the converter's target type.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)


@dataclass(frozen=True, slots=True)
class PathTemplateMatcher:
    """Match a request path against a template and bind its parameters.

    >>> PathTemplateMatcher("/users/{id:int}").matches("/users/42").parameters["ID"]
    42
    """

    template: str
    _segments: tuple[PathSegment, ...] = field(init=False, repr=False)
    _compiled: re2.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        segments = tuple(parse_template(self.template))
        pattern = "".join(
            f"/(?P<{seg.param_name}>{CONVERTERS[seg.param_type][0]})"
            if seg.is_param
            else "/" + re2.escape(seg.value)
            for seg in segments
        )
        object.__setattr__(self, "_segments", segments)
        object.__setattr__(self, "_compiled", re2.compile(f"^{pattern or '/'}$"))

    def matches(self, value: MatchingData, /) -> MatchResult:
        if not isinstance(value, str):
            return NO_MATCH
        m = self._compiled.search(value)
        if m is None:
            return NO_MATCH
        bound: list[tuple[str, Any]] = []
        for seg in self._segments:
            if not seg.is_param or seg.param_name is None:
                continue
            try:
                converted = convert_param(m.group(seg.param_name), seg.param_type)
            except ValueError:
                return NO_MATCH
            bound.append((seg.param_name, converted))
        return MatchResult.create(True, bound)
