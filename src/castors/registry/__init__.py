"""Registry layer — loading, configuration injection, storage and dispatch.

May import from domain, converters and plugins; never from commands or output.
"""

from castors.registry.configurator import Configurator
from castors.registry.dispatcher import DEFAULT_ANCHORS, Castors
from castors.registry.loader import ConverterLoader
from castors.registry.store import ConverterRegistry

__all__ = ["DEFAULT_ANCHORS", "Castors", "Configurator", "ConverterLoader", "ConverterRegistry"]
