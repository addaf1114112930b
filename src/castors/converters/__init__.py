"""Converter capability and bundled converters.

Importing this package defines (and so self-registers) every bundled
converter.
"""

from castors.converters import builtins
from castors.converters.base import CONVERTER_TABLE, Configurable, Converter

__all__ = ["CONVERTER_TABLE", "Configurable", "Converter", "builtins"]
