"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Castors construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from castors.output.formatters import format_result

if TYPE_CHECKING:
    from castors.config.settings import CastorsSettings
    from castors.output.result import CommandResult
    from castors.registry.dispatcher import Castors


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The Castors instance is built on first use so ``--help`` and
    ``--version`` never trigger a registry rebuild.
    """

    def __init__(self, settings: CastorsSettings) -> None:
        self.settings = settings
        self._castors: Castors | None = None

        from castors.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def castors(self) -> Castors:
        if self._castors is None:
            from castors.registry.dispatcher import Castors

            self._castors = Castors.from_settings(self.settings)
        return self._castors

    def emit(self, result: CommandResult) -> None:
        """Print *result*; failures go to stderr and exit with code 1."""
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
            return
        click.echo(output, err=True)
        raise SystemExit(1)
