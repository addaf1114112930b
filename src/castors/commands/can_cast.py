"""Command: check whether one type can be cast to another."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from castors.commands._base import CastorsCommand
from castors.commands._types import TYPE_SPEC

if TYPE_CHECKING:
    from castors.commands._context import AppContext


@click.command(
    "can-cast",
    cls=CastorsCommand,
    examples="""\
  castors can-cast str int
  castors can-cast int primitive:long
  castors --json can-cast decimal.Decimal str""",
)
@click.argument("from_type", type=TYPE_SPEC)
@click.argument("to_type", type=TYPE_SPEC)
@click.pass_obj
def can_cast(app: AppContext, from_type: Any, to_type: Any) -> None:
    """Report whether FROM_TYPE can be cast to TO_TYPE."""
    from castors.domain.types import type_name
    from castors.output.result import CommandResult

    castors = app.castors
    converter = castors.find(from_type, to_type)
    result = CommandResult(
        ok=True,
        op="can_cast",
        data={
            "from": type_name(from_type),
            "to": type_name(to_type),
            "can_cast": castors.can_cast(from_type, to_type),
            "converter": type(converter).__qualname__ if converter else None,
        },
    )
    if app.settings.json_output:
        app.emit(result)
    else:
        click.echo("true" if result.data["can_cast"] else "false")
