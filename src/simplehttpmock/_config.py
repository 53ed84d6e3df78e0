"""Config types for declarative mock definitions.

The same dict shape loads from YAML or JSON:

    default_status: 404
    routes:
      - name: get-user
        method: GET
        path: /users/{id:int}
        headers: {Accept: application/json}
        query: {verbose: "1"}
        response:
          status: 200
          headers: {Content-Type: application/json}
          json: {id: 1}

Config-driven construction path:
  YAML file → load_mock_config() → MockConfig → HttpMock.load()
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from simplehttpmock._matcher import MatcherError
from simplehttpmock.http._mock import MockResponse
from simplehttpmock.http._routes import RouteSpec

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """A route's match conditions and the response it serves."""

    spec: RouteSpec
    response: MockResponse
    name: str | None = None


@dataclass(frozen=True, slots=True)
class MockConfig:
    """A parsed mock definition: ordered routes plus the no-match status.

    ``default_status`` is None when the source did not set one.
    """

    routes: tuple[RouteConfig, ...]
    default_status: int | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

_ROUTE_FIELDS = frozenset({"name", "method", "path", "path_regex", "headers", "query", "response"})
_RESPONSE_FIELDS = frozenset({"status", "headers", "body", "json"})


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


def load_mock_config(path: str | Path) -> MockConfig:
    """Read a YAML (or JSON) mock definition from *path*.

    Raises:
        ConfigParseError: If the file is not valid YAML or not a valid config.
        OSError: If the file cannot be read.
    """
    with Path(path).open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"invalid YAML in {path}: {e}"
            raise ConfigParseError(msg) from e
    return parse_mock_config(data)


def parse_mock_config(data: dict[str, Any]) -> MockConfig:
    """Parse a dict into a MockConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_routes = data.get("routes")
    if raw_routes is None:
        msg = "missing required field 'routes'"
        raise ConfigParseError(msg)
    if not isinstance(raw_routes, list):
        msg = f"'routes' must be a list, got {type(raw_routes).__name__}"
        raise ConfigParseError(msg)

    default_status = None
    if "default_status" in data:
        default_status = _parse_status(data["default_status"], "default_status")
    routes = tuple(_parse_route(r, i) for i, r in enumerate(raw_routes))
    return MockConfig(routes=routes, default_status=default_status)


def _parse_route(data: Any, index: int) -> RouteConfig:
    """Parse a single route dict."""
    where = f"routes[{index}]"
    if not isinstance(data, dict):
        msg = f"{where} must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = set(data) - _ROUTE_FIELDS
    if unknown:
        msg = f"{where} has unknown fields: {sorted(unknown)}"
        raise ConfigParseError(msg)

    name = _optional_str(data, "name", where)
    method = _optional_str(data, "method", where)
    path = _optional_str(data, "path", where)
    path_regex = _optional_str(data, "path_regex", where)
    if path is not None and path_regex is not None:
        msg = f"{where}: exactly one of 'path' or 'path_regex' may be set, got both"
        raise ConfigParseError(msg)

    if "response" not in data:
        msg = f"{where} missing required field 'response'"
        raise ConfigParseError(msg)

    spec = RouteSpec(
        path=path,
        path_regex=path_regex,
        method=method,
        headers=_string_map(data.get("headers", {}), f"{where}.headers"),
        query_params=_string_map(data.get("query", {}), f"{where}.query"),
    )
    try:
        spec.to_predicate()
    except MatcherError as e:
        msg = f"{where}: {e}"
        raise ConfigParseError(msg) from e

    response = _parse_response(data["response"], f"{where}.response")
    return RouteConfig(spec=spec, response=response, name=name)


def _parse_response(data: Any, where: str) -> MockResponse:
    """Parse a response dict. ``body`` and ``json`` are mutually exclusive."""
    if not isinstance(data, dict):
        msg = f"{where} must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = set(data) - _RESPONSE_FIELDS
    if unknown:
        msg = f"{where} has unknown fields: {sorted(unknown)}"
        raise ConfigParseError(msg)
    if "body" in data and "json" in data:
        msg = f"{where}: exactly one of 'body' or 'json' may be set, got both"
        raise ConfigParseError(msg)

    status = _parse_status(data.get("status", 200), f"{where}.status")
    headers = _string_map(data.get("headers", {}), f"{where}.headers")

    if "json" in data:
        return MockResponse.json(data["json"], status=status, headers=headers)

    body = data.get("body")
    if body is None:
        return MockResponse(status=status, headers=headers)
    if not isinstance(body, str):
        msg = f"{where}.body must be a string, got {type(body).__name__}"
        raise ConfigParseError(msg)
    return MockResponse(status=status, headers=headers, body=body.encode("utf-8"))


def _parse_status(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{where} must be an integer, got {type(value).__name__}"
        raise ConfigParseError(msg)
    if not 100 <= value <= 599:
        msg = f"{where} must be between 100 and 599, got {value}"
        raise ConfigParseError(msg)
    return value


def _optional_str(data: dict[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"{where}.{key} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


def _string_map(data: Any, where: str) -> dict[str, str]:
    """Parse a name → value mapping. Scalar values are stringified."""
    if not isinstance(data, dict):
        msg = f"{where} must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)
    result: dict[str, str] = {}
    for k, v in data.items():
        if isinstance(v, dict | list) or v is None:
            msg = f"{where}.{k} must be a scalar value, got {type(v).__name__}"
            raise ConfigParseError(msg)
        result[str(k)] = str(v)
    return result
