"""Command: convert a command-line value to a target type."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from castors.commands._base import CastorsCommand
from castors.commands._types import TYPE_SPEC

if TYPE_CHECKING:
    from castors.commands._context import AppContext


@click.command(
    cls=CastorsCommand,
    examples="""\
  castors cast 42 --to int
  castors cast 7f --to int -d 16
  castors cast "a;b;c" --to list -d ";"
  castors cast 31/01/2024 --to date -d %d/%m/%Y
  castors cast 300 --to primitive:byte""",
)
@click.argument("value")
@click.option("--to", "to_type", type=TYPE_SPEC, required=True, help="Target type.")
@click.option(
    "--from", "from_type", type=TYPE_SPEC, default="str", show_default=True, help="Source type."
)
@click.option(
    "-d", "--directive", "directives", multiple=True, help="Converter directive (repeatable)."
)
@click.pass_obj
def cast(
    app: AppContext,
    value: str,
    to_type: Any,
    from_type: Any,
    directives: tuple[str, ...],
) -> None:
    """Cast VALUE to another type."""
    from castors.domain.errors import CastorsError
    from castors.domain.types import type_name
    from castors.output.result import CommandResult

    try:
        converted = app.castors.cast(value, from_type, to_type, *directives)
    except CastorsError as exc:
        app.emit(CommandResult.failure("cast", exc))
        return

    app.emit(
        CommandResult(
            ok=True,
            op="cast",
            data={
                "value": app.castors.cast_to_string(converted),
                "repr": repr(converted),
                "type": type_name(type(converted)),
            },
        )
    )
