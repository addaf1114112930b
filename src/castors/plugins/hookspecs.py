"""Pluggy hook specifications for converter plugins."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from castors.converters.base import Converter

hookspec = pluggy.HookspecMarker("castors")
hookimpl = pluggy.HookimplMarker("castors")


class CastorsHookSpec:
    """Hook specifications for the castors plugin system."""

    @hookspec
    def register_converters(self) -> list[type[Converter]] | None:
        """Return converter classes to add to every registry rebuild."""
