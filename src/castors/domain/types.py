"""Type vocabulary shared by converters, the extractor and the registry.

Python has no primitive types, so the primitive kinds a caller may ask for
(``int``, ``long``, ``char`` ...) are modelled by :class:`PrimitiveKind`.
Each kind boxes to an ordinary Python runtime type.
"""

from __future__ import annotations

import types
import typing
from enum import StrEnum
from typing import Any, NamedTuple


class PrimitiveKind(StrEnum):
    """Primitive target kinds with canonical zero values."""

    INT = "int"
    LONG = "long"
    BYTE = "byte"
    SHORT = "short"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    CHAR = "char"
    VOID = "void"

    @property
    def boxed(self) -> type:
        """The Python runtime type values of this kind are represented by."""
        return _BOXED[self]

    @property
    def bounds(self) -> tuple[int, int] | None:
        """Inclusive integer range for the fixed-width integral kinds."""
        return _INTEGRAL_BOUNDS.get(self)

    def holds(self, value: Any) -> bool:
        """False for a value of the boxed type that this kind cannot represent.

        A ``char`` is a one-character string and a fixed-width kind is an
        int within :attr:`bounds`. Values of other types are not judged.
        """
        if self is PrimitiveKind.CHAR and isinstance(value, str):
            return len(value) == 1
        bounds = self.bounds
        if bounds and isinstance(value, int):
            return bounds[0] <= value <= bounds[1]
        return True


_BOXED: dict[PrimitiveKind, type] = {
    PrimitiveKind.INT: int,
    PrimitiveKind.LONG: int,
    PrimitiveKind.BYTE: int,
    PrimitiveKind.SHORT: int,
    PrimitiveKind.FLOAT: float,
    PrimitiveKind.DOUBLE: float,
    PrimitiveKind.BOOLEAN: bool,
    PrimitiveKind.CHAR: str,
    PrimitiveKind.VOID: types.NoneType,
}

_INTEGRAL_BOUNDS: dict[PrimitiveKind, tuple[int, int]] = {
    PrimitiveKind.BYTE: (-(2**7), 2**7 - 1),
    PrimitiveKind.SHORT: (-(2**15), 2**15 - 1),
    PrimitiveKind.INT: (-(2**31), 2**31 - 1),
    PrimitiveKind.LONG: (-(2**63), 2**63 - 1),
}

# VOID is deliberately absent: it has no value to default to.
ZERO_VALUES: dict[PrimitiveKind, Any] = {
    PrimitiveKind.INT: 0,
    PrimitiveKind.LONG: 0,
    PrimitiveKind.BYTE: 0,
    PrimitiveKind.SHORT: 0,
    PrimitiveKind.FLOAT: 0.0,
    PrimitiveKind.DOUBLE: 0.0,
    PrimitiveKind.BOOLEAN: False,
    PrimitiveKind.CHAR: " ",
}


class TypePair(NamedTuple):
    """Registry key: the declared (source, target) types of a converter."""

    source: Any
    target: Any

    def describe(self) -> str:
        return f"{type_name(self.source)} -> {type_name(self.target)}"


def type_name(tp: Any) -> str:
    """Stable textual identifier for *tp*.

    ``module.qualname`` for classes, ``primitive:<kind>`` for primitive
    kinds and ``repr()`` for anything else (parameterised aliases).
    """
    if tp is None:
        return "None"
    if isinstance(tp, PrimitiveKind):
        return f"primitive:{tp.value}"
    if isinstance(tp, type):
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


def runtime_type(tp: Any) -> Any:
    """Resolve *tp* to something usable with ``isinstance`` and calls.

    Primitive kinds box to their Python type; parameterised aliases
    resolve to their origin class.
    """
    if isinstance(tp, PrimitiveKind):
        return tp.boxed
    origin = typing.get_origin(tp)
    if isinstance(origin, type):
        return origin
    return tp


def is_assignable(to_type: Any, from_type: Any) -> bool:
    """Whether a value of *from_type* already is a *to_type*."""
    if to_type == from_type:
        return True
    if isinstance(to_type, type) and isinstance(from_type, type):
        try:
            return issubclass(from_type, to_type)
        except TypeError:
            return False
    return False
