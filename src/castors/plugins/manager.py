"""Converter plugins: discovery through pluggy and collection for rebuilds.

Two discovery sources:

- the ``castors.converters`` entry-point group of installed distributions;
- single-file modules in a local directory, whose converter classes are
  contributed as-is and whose hookimpl classes are registered as plugins.

Plugins only contribute classes. The loader decides what gets instantiated
and registered, so a plugin can never corrupt a published registry.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType

import pluggy

from castors.converters.base import Converter
from castors.plugins.hookspecs import CastorsHookSpec, hookimpl

PROJECT_NAME = "castors"
LOCAL_MODULE_PREFIX = "castors_local_plugin_"

logger = logging.getLogger(__name__)


def has_hook_impls(cls: type) -> bool:
    """Whether *cls* defines a public method marked with ``@hookimpl``."""
    marker = f"{PROJECT_NAME}_impl"
    return any(
        not name.startswith("_") and getattr(member, marker, None)
        for name, member in inspect.getmembers(cls, callable)
    )


def load_local_module(path: Path, module_name: str) -> ModuleType | None:
    """Execute the file at *path* as module *module_name*; None on any failure."""
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        logger.warning("Could not create module spec for %s", path)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        logger.warning("Failed to load local plugin %s", path, exc_info=True)
        return None
    return module


class ModuleConverters:
    """Plugin exposing the converter classes defined in one local module."""

    def __init__(self, module: ModuleType) -> None:
        self._module = module

    @hookimpl
    def register_converters(self) -> list[type[Converter]]:
        own = self._module.__name__
        return [
            obj
            for _, obj in inspect.getmembers(self._module, inspect.isclass)
            if obj.__module__ == own and issubclass(obj, Converter)
        ]


class PluginManager:
    """Owns a pluggy manager for the ``castors`` project."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(CastorsHookSpec)
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        """Whether :meth:`discover_and_load` has run."""
        return self._loaded

    def discover_and_load(
        self,
        *,
        group: str | None = None,
        local_dir: Path | None = None,
    ) -> list[str]:
        """Load plugins from the entry-point *group* and from *local_dir*.

        Either source may be omitted. Returns the names of all registered
        plugins afterwards.
        """
        if group:
            try:
                self._pm.load_setuptools_entrypoints(group)
            except Exception:
                logger.warning("Failed to load entry points for %s", group, exc_info=True)
            self._instantiate_plugin_classes()
        if local_dir is not None and local_dir.is_dir():
            for path in sorted(local_dir.glob("*.py")):
                if not path.name.startswith("_"):
                    self._register_local_file(path)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        name = name or type(plugin).__name__
        self._pm.register(plugin, name=name)
        logger.debug("Registered plugin: %s", name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._name_of(p) for p in self._pm.get_plugins()]

    def collect_converters(self) -> list[type[Converter]]:
        """Converter classes from every plugin, first contribution first.

        Plugins are asked one at a time; a plugin that raises loses only
        its own contribution, and entries that are not converter classes
        are dropped with a warning.
        """
        collected: list[type[Converter]] = []
        for plugin in self._pm.get_plugins():
            hook = getattr(plugin, "register_converters", None)
            if hook is None:
                continue
            name = self._name_of(plugin)
            try:
                contributed = hook() or ()
            except Exception:
                logger.warning("Failed to collect converters from plugin %s", name, exc_info=True)
                continue
            for cls in contributed:
                if not (inspect.isclass(cls) and issubclass(cls, Converter)):
                    logger.warning("Plugin %s returned non-converter %r", name, cls)
                elif cls not in collected:
                    collected.append(cls)
        return collected

    def _name_of(self, plugin: object) -> str:
        return self._pm.get_name(plugin) or type(plugin).__name__

    def _register_local_file(self, path: Path) -> None:
        module_name = f"{LOCAL_MODULE_PREFIX}{path.stem}"
        module = load_local_module(path, module_name)
        if module is None:
            return

        self.register_plugin(ModuleConverters(module), name=module_name)
        hook_classes = [
            obj
            for _, obj in inspect.getmembers(module, inspect.isclass)
            if obj.__module__ == module_name and has_hook_impls(obj)
        ]
        for cls in hook_classes:
            try:
                instance = cls()
            except Exception:
                logger.warning(
                    "Failed to instantiate plugin class %s from %s",
                    cls.__name__,
                    path,
                    exc_info=True,
                )
                continue
            self.register_plugin(instance, name=f"{module_name}.{cls.__name__}")

    def _instantiate_plugin_classes(self) -> None:
        """Swap plugin classes registered by entry points for instances.

        Hooks called on a class object would leave ``self`` unbound.
        """
        classes = [
            p for p in self._pm.get_plugins() if inspect.isclass(p) and has_hook_impls(p)
        ]
        for cls in classes:
            name = self._name_of(cls)
            self._pm.unregister(cls)
            try:
                instance = cls()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)
