"""castors — hierarchy-aware value conversion through a registry of converters.

Typical use::

    import castors

    castors.me().cast("42", str, int)
    castors.me().cast_to("2024-01-31", datetime.date)
"""

from __future__ import annotations

from castors.converters.base import Converter
from castors.domain.errors import (
    CastorsError,
    ConversionFailed,
    ConversionNotFound,
    ConverterLoadFailed,
    Unsupported,
)
from castors.domain.extractor import DefaultTypeExtractor, TypeExtractor
from castors.domain.types import PrimitiveKind
from castors.registry.dispatcher import Castors

__version__ = "0.3.0"


def me() -> Castors:
    """Return the shared process-wide :class:`Castors` instance."""
    return Castors.me()


def create() -> Castors:
    """Return a new independent :class:`Castors` instance."""
    return Castors.create()


__all__ = [
    "Castors",
    "CastorsError",
    "ConversionFailed",
    "ConversionNotFound",
    "Converter",
    "ConverterLoadFailed",
    "DefaultTypeExtractor",
    "PrimitiveKind",
    "TypeExtractor",
    "Unsupported",
    "__version__",
    "create",
    "me",
]
