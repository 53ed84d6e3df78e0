"""Fixture-driven dispatch scenarios (tests/fixtures/*.yaml)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from simplehttpmock import HttpMock

if TYPE_CHECKING:
    from conftest import DispatchCase


def test_dispatch(dispatch_case: DispatchCase) -> None:
    case = dispatch_case
    mock = HttpMock()
    mock.load(case.config)

    selection = mock.select(case.request)
    response = mock.handle(case.request)

    assert response.status == case.expect_status
    if case.expect_route is None:
        assert selection is None
        assert mock.unmatched == [case.request]
        return

    assert selection is not None
    assert selection.action.name == case.expect_route
    assert selection.parameters == case.expect_params
    assert mock.handler(case.expect_route).call_count == 1
