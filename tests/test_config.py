"""Tests for mock config parsing (simplehttpmock._config)."""

import json
from pathlib import Path

import pytest

from simplehttpmock import (
    ConfigParseError,
    HttpMock,
    HttpRequest,
    load_mock_config,
    parse_mock_config,
)


def route(**overrides):  # noqa: ANN003, ANN201
    data = {"name": "r", "method": "GET", "path": "/x", "response": {"status": 200}}
    data.update(overrides)
    return data


class TestParseMockConfig:
    def test_minimal(self) -> None:
        config = parse_mock_config({"routes": [route()]})
        assert config.default_status is None
        assert len(config.routes) == 1
        r = config.routes[0]
        assert r.name == "r"
        assert r.spec.method == "GET"
        assert r.spec.path == "/x"
        assert r.response.status == 200
        assert r.response.body == b""

    def test_full_route(self) -> None:
        config = parse_mock_config(
            {
                "default_status": 501,
                "routes": [
                    route(
                        headers={"Accept": "application/json", "X-Version": 2},
                        query={"page": 1},
                        response={
                            "status": 201,
                            "headers": {"Content-Type": "text/plain"},
                            "body": "created",
                        },
                    )
                ],
            }
        )
        r = config.routes[0]
        assert config.default_status == 501
        assert r.spec.headers == {"Accept": "application/json", "X-Version": "2"}
        assert r.spec.query_params == {"page": "1"}
        assert r.response.body == b"created"
        assert r.response.header("content-type") == "text/plain"

    def test_json_response(self) -> None:
        config = parse_mock_config({"routes": [route(response={"json": {"a": [1, 2]}})]})
        resp = config.routes[0].response
        assert json.loads(resp.body) == {"a": [1, 2]}
        assert resp.header("content-type").startswith("application/json")

    def test_path_regex(self) -> None:
        config = parse_mock_config({"routes": [route(path=None, path_regex=r"^/(?P<id>\d+)$")]})
        assert config.routes[0].spec.path_regex == r"^/(?P<id>\d+)$"

    def test_routes_keep_order(self) -> None:
        config = parse_mock_config({"routes": [route(name="a"), route(name="b")]})
        assert [r.name for r in config.routes] == ["a", "b"]

    def test_loads_into_mock(self) -> None:
        config = parse_mock_config({"default_status": 410, "routes": [route(path="/users/{id:int}")]})
        mock = HttpMock()
        mock.load(config)
        assert mock.handle(HttpRequest("GET", "/users/1")).status == 200
        assert mock.handle(HttpRequest("GET", "/users/x")).status == 410


class TestParseErrors:
    @pytest.mark.parametrize(
        ("data", "message"),
        [
            ([], "expected dict"),
            ({}, "missing required field 'routes'"),
            ({"routes": {}}, "'routes' must be a list"),
            ({"routes": ["x"]}, r"routes\[0\] must be a dict"),
            ({"routes": [route(extra=1)]}, "unknown fields"),
            ({"routes": [{"path": "/x"}]}, "missing required field 'response'"),
            ({"routes": [route(method=1)]}, "method must be a string"),
            ({"routes": [route(path_regex="^/x$")]}, "'path' or 'path_regex'"),
            ({"routes": [route(path="/{id:uuid}")]}, "unknown converter"),
            ({"routes": [route(path=None, path_regex="[bad")]}, "invalid regex"),
            ({"routes": [route(headers=["a"])]}, "headers must be a dict"),
            ({"routes": [route(query={"q": None})]}, "must be a scalar"),
            ({"routes": [route(response={"body": "a", "json": {}})]}, "'body' or 'json'"),
            ({"routes": [route(response={"body": 3})]}, "body must be a string"),
            ({"routes": [route(response={"status": "200"})]}, "must be an integer"),
            ({"routes": [route(response={"status": True})]}, "must be an integer"),
            ({"routes": [route(response={"status": 700})]}, "between 100 and 599"),
            ({"routes": [], "default_status": 99}, "default_status"),
        ],
    )
    def test_rejected(self, data, message: str) -> None:  # noqa: ANN001
        with pytest.raises(ConfigParseError, match=message):
            parse_mock_config(data)


class TestLoadMockConfig:
    def test_reads_yaml(self, mock_yaml: Path) -> None:
        config = load_mock_config(mock_yaml)
        assert [r.name for r in config.routes] == ["get-user", "health"]
        assert config.routes[1].spec.method is None

    def test_reads_json(self, tmp_path: Path) -> None:
        path = tmp_path / "mocks.json"
        path.write_text(json.dumps({"routes": [route()]}))
        assert len(load_mock_config(path).routes) == 1

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("routes: [unclosed\n")
        with pytest.raises(ConfigParseError, match="invalid YAML"):
            load_mock_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            load_mock_config(tmp_path / "nope.yaml")
