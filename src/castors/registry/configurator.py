"""Wire a settings object's configuration methods into converters.

A configuration method is a public method of the settings object with
exactly one parameter annotated with a :class:`Converter` subclass. For a
given converter the exact class wins, then the closest class in the
converter's MRO. Converters without a matching method but with their own
``configure(settings)`` hook get that called instead.
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Callable
from typing import Any

from castors.converters.base import Configurable, Converter

logger = logging.getLogger(__name__)

ConfigMethod = Callable[[Converter], Any]


class Configurator:
    """Configuration methods indexed by the converter type they accept."""

    def __init__(self, settings: Any) -> None:
        self._settings = settings
        self._methods = self._index(settings)

    @property
    def settings(self) -> Any:
        return self._settings

    @property
    def accepted_types(self) -> list[type[Converter]]:
        return list(self._methods)

    def method_for(self, converter: Converter) -> ConfigMethod | None:
        """Return the single method that configures *converter*, if any."""
        for cls in type(converter).__mro__:
            method = self._methods.get(cls)
            if method is not None:
                return method
        return None

    def configure(self, converter: Converter) -> bool:
        """Configure *converter* at most once. Returns whether anything ran.

        Exceptions from the configuration call propagate to the loader,
        which excludes the converter.
        """
        method = self.method_for(converter)
        if method is not None:
            method(converter)
            return True
        if isinstance(converter, Configurable):
            converter.configure(self._settings)
            return True
        return False

    @staticmethod
    def _index(settings: Any) -> dict[type, ConfigMethod]:
        methods: dict[type, ConfigMethod] = {}
        if settings is None:
            return methods
        for name, method in inspect.getmembers(settings, inspect.ismethod):
            if name.startswith("_"):
                continue
            accepted = _accepted_converter_type(method)
            if accepted is None or accepted in methods:
                continue
            methods[accepted] = method
        return methods


def _accepted_converter_type(method: Callable[..., Any]) -> type | None:
    """The converter type *method* takes as its only parameter, or None."""
    try:
        params = list(inspect.signature(method).parameters.values())
    except (TypeError, ValueError):
        return None
    if len(params) != 1:
        return None
    param = params[0]
    if param.kind not in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
        return None

    annotation = param.annotation
    if isinstance(annotation, str):
        try:
            annotation = typing.get_type_hints(method).get(param.name)
        except Exception:
            logger.debug("Unresolvable annotation on %s", method.__qualname__, exc_info=True)
            return None
    if isinstance(annotation, type) and issubclass(annotation, Converter):
        return annotation
    return None
