"""Rich rendering of the converter table.

Consoles render into a StringIO buffer so commands can hand plain text to
``click.echo``. In non-TTY environments (tests, pipes) Rich disables color.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from castors.registry.store import ConverterRegistry

CASTORS_THEME = Theme(
    {
        "castors.source": "bold cyan",
        "castors.target": "bold green",
        "castors.class": "dim",
        "castors.catch_all": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    return Console(
        file=StringIO(),
        theme=CASTORS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def render_registry(registry: ConverterRegistry, *, no_color: bool = False) -> str:
    """Render one row per registered type pair."""
    from castors.domain.types import type_name

    table = Table(title=f"{len(registry)} converters")
    table.add_column("Source", style="castors.source")
    table.add_column("Target", style="castors.target")
    table.add_column("Converter", style="castors.class")

    for pair, converter in registry.items():
        name = type(converter).__qualname__
        if converter.catch_all:
            name = f"[castors.catch_all]{name} (catch-all)[/]"
        table.add_row(type_name(pair.source), type_name(pair.target), name)

    console = create_console(no_color=no_color)
    console.print(table)
    return get_output(console)
