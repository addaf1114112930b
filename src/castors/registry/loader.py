"""Registry rebuild: discover candidates, instantiate, configure, register.

Discovery sources, in order:

1. Anchors: every converter class defined inside the package of each
   anchor type (see :func:`anchor_package`), in definition order.
2. Plugins: classes contributed through the ``register_converters`` hook.
3. Fallback, only when 1 and 2 found nothing: the class names listed in
   the bundled ``default-castors.txt`` resource.

INVARIANT: A failing candidate is logged and excluded; the rebuild goes on.
INVARIANT: The first converter registered for a type pair wins.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import sys
from collections.abc import Iterable, Sequence
from importlib import resources
from typing import TYPE_CHECKING, Any

from castors.converters.base import Converter, registered_converters
from castors.domain.errors import ConverterLoadFailed
from castors.registry.configurator import Configurator
from castors.registry.store import ConverterRegistry, RegistryBuilder

if TYPE_CHECKING:
    from castors.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

FALLBACK_PACKAGE = "castors.converters"
FALLBACK_RESOURCE = "default-castors.txt"


def anchor_package(anchor: Any) -> str:
    """Dotted package that *anchor* marks for discovery.

    The anchor's module with its last component removed, or the module
    itself when it is a package or a top-level module.
    """
    module_name: str = getattr(anchor, "__module__", None) or ""
    module = sys.modules.get(module_name)
    if module is not None and hasattr(module, "__path__"):
        return module_name
    return module_name.rpartition(".")[0] or module_name


def _in_package(module_name: str, package: str) -> bool:
    return module_name == package or module_name.startswith(package + ".")


def scan_anchors(
    anchors: Iterable[Any],
    table: Sequence[type] | None = None,
) -> list[type]:
    """Return registered classes living under the anchors' packages.

    Order follows the anchors, then definition order within each anchor;
    a class reachable from several anchors appears once.
    """
    known = registered_converters() if table is None else list(table)
    found: list[type] = []
    for anchor in anchors:
        if anchor is None:
            continue
        package = anchor_package(anchor)
        if not package:
            continue
        for cls in known:
            if cls not in found and _in_package(cls.__module__, package):
                found.append(cls)
    return found


def read_fallback_names() -> list[str]:
    """Fully-qualified class names from the bundled fallback resource."""
    text = resources.files(FALLBACK_PACKAGE).joinpath(FALLBACK_RESOURCE).read_text("utf-8")
    names: list[str] = []
    for line in text.splitlines():
        name = line.strip()
        if name and not name.startswith("#"):
            names.append(name)
    return names


def resolve_class(qualified_name: str) -> type | None:
    """Import ``package.module.Class``; None if it cannot be resolved."""
    module_name, _, attr = qualified_name.rpartition(".")
    if not module_name:
        return None
    try:
        obj = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError):
        logger.debug("Skipping unresolvable fallback converter %s", qualified_name)
        return None
    return obj if inspect.isclass(obj) else None


class ConverterLoader:
    """Builds a complete :class:`ConverterRegistry` from the current configuration."""

    def __init__(
        self,
        anchors: Sequence[Any],
        settings: Any,
        plugins: PluginManager | None = None,
    ) -> None:
        self._anchors = list(anchors)
        self._configurator = Configurator(settings)
        self._plugins = plugins

    def discover(self) -> list[type]:
        """Candidate classes in discovery order, with the fallback applied."""
        candidates = scan_anchors(self._anchors)
        if self._plugins is not None:
            for cls in self._plugins.collect_converters():
                if cls not in candidates:
                    candidates.append(cls)

        if not candidates:
            logger.warning("No converter found, loading the default converter list")
            for name in read_fallback_names():
                cls = resolve_class(name)
                if cls is not None and cls not in candidates:
                    candidates.append(cls)
        return candidates

    def load(self) -> ConverterRegistry:
        """Run a full rebuild pass and return the finished snapshot."""
        builder = RegistryBuilder()
        for klass in self.discover():
            if inspect.isabstract(klass) or not issubclass(klass, Converter):
                continue
            try:
                self._fill(builder, klass)
            except ConverterLoadFailed as exc:
                logger.warning("%s", exc)
        registry = builder.build()
        logger.debug("Using %s converters for Castors", len(registry))
        return registry

    def _fill(self, builder: RegistryBuilder, klass: type[Converter]) -> None:
        try:
            key = klass.declared_pair()
            converter = klass()
        except Exception as exc:
            raise ConverterLoadFailed(klass, str(exc)) from exc

        if key in builder:
            logger.debug("Dropping duplicate converter %s for %s", klass.__name__, key.describe())
            return

        try:
            self._configurator.configure(converter)
        except Exception as exc:
            raise ConverterLoadFailed(klass, f"configuration failed: {exc}") from exc
        builder.add(converter)
