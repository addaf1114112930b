"""Command: list registered converters."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from castors.commands._base import CastorsCommand

if TYPE_CHECKING:
    from castors.commands._context import AppContext


@click.command(
    "list",
    cls=CastorsCommand,
    examples="""\
  castors list
  castors --json list""",
)
@click.pass_obj
def list_converters(app: AppContext) -> None:
    """List the converters in the current registry."""
    from castors.domain.types import type_name
    from castors.output.console import render_registry
    from castors.output.result import CommandResult

    registry = app.castors.registry
    if not app.settings.json_output:
        click.echo(render_registry(registry), nl=False)
        return

    rows = [
        {
            "source": type_name(pair.source),
            "target": type_name(pair.target),
            "converter": type(converter).__qualname__,
            "catch_all": converter.catch_all,
        }
        for pair, converter in registry.items()
    ]
    app.emit(CommandResult(ok=True, op="list", data={"count": len(rows), "converters": rows}))
