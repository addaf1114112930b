"""Castors — the conversion entry point.

Usage::

    Castors.me().cast(obj, from_type, to_type)

Configuration mutators (:meth:`Castors.set_settings`,
:meth:`Castors.set_anchors`, :meth:`Castors.add_anchors`,
:meth:`Castors.reset_anchors`) rebuild the registry synchronously under a
lock. The new :class:`ConverterRegistry` is assembled off to the side and
published with a single reference assignment, so the read operations
(``cast``, ``find``, ``can_cast``, ``cast_to_string``) take no lock and
always see one complete snapshot.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, ClassVar

from castors.converters.base import Converter
from castors.converters.builtins import ObjectToObject
from castors.converters.setting import DefaultCastorSetting
from castors.domain.errors import CastorsError, ConversionFailed, ConversionNotFound, Unsupported
from castors.domain.extractor import DefaultTypeExtractor, TypeExtractor
from castors.domain.types import ZERO_VALUES, PrimitiveKind, is_assignable, type_name
from castors.registry.loader import ConverterLoader
from castors.registry.store import ConverterRegistry

if TYPE_CHECKING:
    from castors.config.settings import CastorsSettings
    from castors.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

DEFAULT_ANCHORS: tuple[type, ...] = (ObjectToObject,)


class Castors:
    """Registry of converters plus the dispatch rules that pick one."""

    _shared: ClassVar[Castors | None] = None
    _shared_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        settings: Any = None,
        *,
        anchors: Iterable[Any] | None = None,
        extractor: TypeExtractor | None = None,
        plugins: PluginManager | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._extractor: TypeExtractor = extractor or DefaultTypeExtractor()
        self._settings: Any = settings if settings is not None else DefaultCastorSetting()
        self._plugins = plugins
        self._anchors: list[Any] = []
        self._registry = ConverterRegistry()
        if anchors is None:
            self.reset_anchors()
        else:
            self.set_anchors(list(anchors))

    # ------------------------------------------------------------------
    # Instances
    # ------------------------------------------------------------------

    @classmethod
    def me(cls) -> Castors:
        """The shared default instance, created on first use."""
        if cls._shared is None:
            with cls._shared_lock:
                if cls._shared is None:
                    cls._shared = cls()
        return cls._shared

    @classmethod
    def create(cls) -> Castors:
        """A new independent instance with default configuration."""
        return cls()

    @classmethod
    def from_settings(cls, settings: CastorsSettings) -> Castors:
        """Build an independent instance from :class:`CastorsSettings`.

        Anchors, converter options and plugin discovery all come from
        *settings*; plugins are discovered once, here.
        """
        from castors.plugins.manager import PluginManager

        config = settings.to_config()
        plugins: PluginManager | None = None
        if config.plugins.entry_points or config.plugins.local_dir is not None:
            plugins = PluginManager()
            plugins.discover_and_load(
                group=config.plugins.group if config.plugins.entry_points else None,
                local_dir=config.plugins.local_dir,
            )
        anchors = [*DEFAULT_ANCHORS, *config.anchors] if config.anchors else None
        return cls(DefaultCastorSetting(config), anchors=anchors, plugins=plugins)

    # ------------------------------------------------------------------
    # Configuration mutators
    # ------------------------------------------------------------------

    @property
    def settings(self) -> Any:
        return self._settings

    @property
    def anchors(self) -> list[Any]:
        return list(self._anchors)

    @property
    def extractor(self) -> TypeExtractor:
        return self._extractor

    @property
    def registry(self) -> ConverterRegistry:
        """The currently published registry snapshot."""
        return self._registry

    def set_settings(self, settings: Any) -> Castors:
        """Replace the settings object and rebuild. ``None`` is ignored.

        Every public method of *settings* with exactly one parameter
        annotated with a converter type configures converters of that type.
        """
        if settings is not None:
            with self._lock:
                self._publish(self._anchors, settings)
        return self

    def set_anchors(self, anchors: list[Any] | None) -> Castors:
        """Replace the discovery anchors and rebuild. ``None`` is ignored."""
        if anchors is not None:
            with self._lock:
                self._publish(anchors, self._settings)
        return self

    def add_anchors(self, *anchors: Any) -> Castors:
        with self._lock:
            self._publish(
                [*self._anchors, *(a for a in anchors if a is not None)], self._settings
            )
        return self

    def reset_anchors(self) -> Castors:
        """Restore the default anchor (the bundled converters) and rebuild."""
        with self._lock:
            self._publish(DEFAULT_ANCHORS, self._settings)
        return self

    def set_extractor(self, extractor: TypeExtractor) -> Castors:
        """Swap the type extractor. Does not rebuild the registry."""
        with self._lock:
            self._extractor = extractor
        return self

    def reload(self) -> Castors:
        """Rebuild the registry from the current anchors, settings and plugins."""
        with self._lock:
            self._publish(self._anchors, self._settings)
        return self

    def _publish(self, anchors: Iterable[Any], settings: Any) -> None:
        """Load a registry for *anchors* and *settings*, then commit all three.

        Nothing is committed when the load raises.
        """
        anchors = list(anchors) or list(DEFAULT_ANCHORS)
        registry = ConverterLoader(anchors, settings, self._plugins).load()
        self._anchors = anchors
        self._settings = settings
        self._registry = registry

    def __len__(self) -> int:
        return len(self._registry)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def cast(self, value: Any, from_type: Any, to_type: Any, *directives: str) -> Any:
        """Convert *value*, declared as *from_type*, into *to_type*.

        Args:
            value: The source value.
            from_type: The source type (usually ``type(value)``).
            to_type: The target type: a class, a parameterised alias or a
                :class:`PrimitiveKind`.
            directives: Extra string arguments for the converter, such
                as a date format or a separator.

        Raises:
            ConversionNotFound: No converter applies to the type pair.
            ConversionFailed: The converter failed, or returned a value
                the primitive target kind cannot hold.
            Unsupported: *value* is None and *to_type* is a primitive
                kind without a zero value.
        """
        if value is None:
            if isinstance(to_type, PrimitiveKind):
                if to_type not in ZERO_VALUES:
                    raise Unsupported(to_type)
                return ZERO_VALUES[to_type]
            return None

        if from_type is None or to_type is None or from_type == to_type:
            return value
        if type_name(from_type) == type_name(to_type):
            return value
        if is_assignable(to_type, from_type):
            return value

        extractor = self._extractor
        registry = self._registry
        if extractor.is_directly_convertible(from_type, to_type):
            return value

        converter = self._find(registry, extractor, from_type, to_type)
        if converter is None:
            raise ConversionNotFound(from_type, to_type, len(registry))

        try:
            result = converter.convert(value, to_type, *directives)
        except CastorsError:
            raise
        except Exception as exc:
            raise ConversionFailed.wrap(exc, from_type, to_type, value) from exc
        if isinstance(to_type, PrimitiveKind) and not to_type.holds(result):
            raise ConversionFailed(
                from_type, to_type, value, f"{result!r} does not fit {type_name(to_type)}"
            )
        return result

    def cast_to(self, value: Any, to_type: Any) -> Any:
        """Convert *value* using its own runtime type as the source type."""
        return self.cast(value, None if value is None else type(value), to_type)

    def find(self, from_type: Any, to_type: Any) -> Converter | None:
        """The converter that :meth:`cast` would use, or None."""
        return self._find(self._registry, self._extractor, from_type, to_type)

    def can_cast(self, from_type: Any, to_type: Any) -> bool:
        """Whether a value of *from_type* can be cast to *to_type*.

        True for natively convertible pairs and for pairs served by a
        dedicated converter; the catch-all converter does not count.
        """
        if self._extractor.is_directly_convertible(from_type, to_type):
            return True
        converter = self.find(from_type, to_type)
        return converter is not None and not converter.catch_all

    def cast_to_string(self, value: Any) -> str | None:
        """Best-effort string form of *value*; never raises a conversion error."""
        try:
            return self.cast_to(value, str)
        except CastorsError:
            logger.debug("Falling back to str() for %s", type_name(type(value)), exc_info=True)
            return str(value)

    @staticmethod
    def _find(
        registry: ConverterRegistry,
        extractor: TypeExtractor,
        from_type: Any,
        to_type: Any,
    ) -> Converter | None:
        target_candidates = extractor.rank(to_type)
        for source in extractor.rank(from_type):
            for target in target_candidates:
                converter = registry.lookup(source, target)
                if converter is not None:
                    return converter
        return None

    def __repr__(self) -> str:
        return f"<Castors converters={len(self._registry)} anchors={len(self._anchors)}>"
