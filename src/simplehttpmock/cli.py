"""simplehttpmock command line.

Usage:
    simplehttpmock check mocks.yaml
    simplehttpmock match mocks.yaml GET /users/7 -H "Accept: application/json"
"""

from __future__ import annotations

import logging
import sys

import click

from simplehttpmock._config import ConfigParseError, load_mock_config
from simplehttpmock.http import HttpMock, HttpRequest


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Inspect and exercise mock definitions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("config", type=click.Path(exists=True, dir_okay=False))
def check(config: str) -> None:
    """Validate CONFIG and list its routes."""
    try:
        mock_config = load_mock_config(config)
    except ConfigParseError as e:
        click.echo(f"{config}: {e}", err=True)
        sys.exit(1)

    for i, route in enumerate(mock_config.routes):
        spec = route.spec
        click.echo(
            f"  [{i}] {route.name or '-'}: {spec.method or '*'} "
            f"{spec.path or spec.path_regex or '*'} -> {route.response.status}"
        )
    click.echo(f"{config}: {len(mock_config.routes)} routes OK")


@main.command()
@click.argument("config", type=click.Path(exists=True, dir_okay=False))
@click.argument("method")
@click.argument("path")
@click.option("--header", "-H", "headers", multiple=True, help='Request header, "Name: value"')
def match(config: str, method: str, path: str, headers: tuple[str, ...]) -> None:
    """Dispatch METHOD PATH against CONFIG and show the selected route."""
    try:
        mock_config = load_mock_config(config)
    except ConfigParseError as e:
        click.echo(f"{config}: {e}", err=True)
        sys.exit(1)

    parsed: dict[str, str] = {}
    for raw in headers:
        name, sep, value = raw.partition(":")
        if not sep:
            click.echo(f"invalid header {raw!r}, expected 'Name: value'", err=True)
            sys.exit(2)
        parsed[name.strip()] = value.strip()

    mock = HttpMock()
    mock.load(mock_config)
    request = HttpRequest(method=method, raw_path=path, headers=parsed)
    selection = mock.select(request)
    response = mock.handle(request)
    if selection is None:
        click.echo(f"no route matched {method} {path} -> {response.status}")
        sys.exit(1)

    click.echo(f"route: {selection.action.name or '-'}")
    for key, value in selection.parameters.items():
        click.echo(f"  {key} = {value!r}")
    click.echo(f"status: {response.status}")
