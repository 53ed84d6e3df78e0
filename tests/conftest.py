"""Fixture loader for dispatch scenarios.

Loads YAML documents from tests/fixtures/ — each holds a mock config plus
request/expectation cases — and converts them for parametrized testing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
import yaml

from simplehttpmock import HttpRequest, MockConfig, parse_mock_config

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class DispatchCase:
    """A single request against a fixture's mock config."""

    fixture_name: str
    case_name: str
    config: MockConfig
    request: HttpRequest
    expect_status: int
    expect_route: str | None
    expect_params: dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return f"{self.fixture_name}/{self.case_name}"


def load_dispatch_fixtures() -> list[DispatchCase]:
    """Load every case from every YAML file in the fixture directory."""
    cases: list[DispatchCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        cases.extend(_load_file(yaml_file))
    return cases


def _load_file(path: Path) -> list[DispatchCase]:
    """Load a fixture file (may contain multiple documents)."""
    cases: list[DispatchCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            config = parse_mock_config(doc["mock"])
            for case in doc["cases"]:
                expect = case["expect"]
                cases.append(
                    DispatchCase(
                        fixture_name=doc["name"],
                        case_name=case["name"],
                        config=config,
                        request=_parse_request(case["request"]),
                        expect_status=expect["status"],
                        expect_route=expect.get("route"),
                        expect_params=expect.get("params") or {},
                    )
                )
    return cases


def _parse_request(spec: dict[str, Any]) -> HttpRequest:
    headers = {str(k): str(v) for k, v in spec.get("headers", {}).items()}
    return HttpRequest(
        method=str(spec.get("method", "GET")),
        raw_path=str(spec.get("path", "/")),
        headers=headers,
    )


@pytest.fixture
def mock_yaml(tmp_path: Path) -> Path:
    """A small valid mock definition on disk."""
    path = tmp_path / "mocks.yaml"
    path.write_text(
        "routes:\n"
        "  - name: get-user\n"
        "    method: GET\n"
        "    path: /users/{id:int}\n"
        "    response:\n"
        "      status: 200\n"
        "      json: {ok: true}\n"
        "  - name: health\n"
        "    path: /health\n"
        "    response: {status: 204}\n"
    )
    return path


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    """Parametrize any test that asks for ``dispatch_case``."""
    if "dispatch_case" in metafunc.fixturenames:
        cases = load_dispatch_fixtures()
        metafunc.parametrize("dispatch_case", cases, ids=[c.id for c in cases])
