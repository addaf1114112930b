"""Converter capability and the process-wide self-registration table.

Every subclass of :class:`Converter` is appended to
:data:`CONVERTER_TABLE` when its class statement executes, so importing a
module is all it takes to make its converters discoverable. The loader
filters the table by anchor package; abstract subclasses are recorded
here and skipped there.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Protocol, runtime_checkable

from castors.domain.types import TypePair

# Populated by Converter.__init_subclass__ in class-definition order.
CONVERTER_TABLE: list[type[Converter]] = []
_table_lock = threading.Lock()


class Converter(ABC):
    """Converts values of ``source_type`` into ``target_type``.

    Subclasses declare the pair as class attributes and implement
    :meth:`convert`. Instances are shared singletons used concurrently,
    so they must hold no per-call state.

    Usage::

        class StringToInteger(Converter):
            source_type = str
            target_type = int

            def convert(self, value, target_type, *directives):
                return int(value)
    """

    source_type: ClassVar[Any] = None
    target_type: ClassVar[Any] = None
    # Only the generic object-to-object fallback sets this.
    catch_all: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        with _table_lock:
            CONVERTER_TABLE.append(cls)

    @classmethod
    def declared_pair(cls) -> TypePair:
        """Return the declared (source, target) registry key.

        Raises:
            TypeError: If either side of the pair is not declared.
        """
        if cls.source_type is None or cls.target_type is None:
            msg = f"{cls.__qualname__} must declare source_type and target_type"
            raise TypeError(msg)
        return TypePair(cls.source_type, cls.target_type)

    @property
    def pair(self) -> TypePair:
        return self.declared_pair()

    @abstractmethod
    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        """Convert *value* to *target_type*.

        *target_type* is the type the caller asked for, which may be more
        specific than the declared ``target_type`` (a subclass, a
        primitive kind or a parameterised alias).
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.pair.describe()}>"


@runtime_checkable
class Configurable(Protocol):
    """Optional capability: a converter that configures itself from settings."""

    def configure(self, settings: Any) -> None: ...


def registered_converters() -> list[type[Converter]]:
    """Snapshot of every converter class defined so far."""
    with _table_lock:
        return list(CONVERTER_TABLE)
