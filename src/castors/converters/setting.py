"""Default settings object wired into converters at every rebuild.

Each public method taking exactly one converter-typed parameter is a
configuration method for converters of that type (or of its subclasses).
Replace it with any object following the same convention via
:meth:`Castors.set_settings`.
"""

from __future__ import annotations

from castors.config.models import CastorsConfig
from castors.converters.builtins import DatetimeParser, StringSplitter, StringToBoolean


class DefaultCastorSetting:
    """Applies a :class:`CastorsConfig` to the bundled converters."""

    def __init__(self, config: CastorsConfig | None = None) -> None:
        self.config = config or CastorsConfig()

    def setup_boolean(self, converter: StringToBoolean) -> None:
        converter.true_words = frozenset(w.lower() for w in self.config.boolean.true_words)
        converter.false_words = frozenset(w.lower() for w in self.config.boolean.false_words)

    def setup_datetime(self, converter: DatetimeParser) -> None:
        """Covers both text-to-datetime and text-to-date."""
        converter.formats = tuple(self.config.datetime.formats)

    def setup_separator(self, converter: StringSplitter) -> None:
        """Covers text-to-list, text-to-tuple and text-to-set."""
        converter.separator = self.config.sequence.separator
