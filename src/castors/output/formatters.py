"""Text/JSON rendering of CommandResult."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from castors.output.result import CommandResult


def _render_value(value: Any) -> str:
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def _field_lines(fields: Mapping[str, Any]) -> Iterator[str]:
    for key, value in fields.items():
        yield f"  {key}: {_render_value(value)}"


def format_result(result: CommandResult, *, json_output: bool = False) -> str:
    """Render *result* as pretty JSON, or as a status line plus indented fields.

    Success reads ``OK: <op>`` followed by the data fields. Failure reads
    ``ERROR: <op> [<code>] - <message>`` followed by the error detail.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    if result.ok:
        head = f"OK: {result.op}"
        fields: Mapping[str, Any] = result.data
    elif result.error is None:
        head = f"ERROR: {result.op} - Unknown error"
        fields = {}
    else:
        head = f"ERROR: {result.op} [{result.error.code}] - {result.error.message}"
        fields = result.error.detail
    return "\n".join([head, *_field_lines(fields)])
