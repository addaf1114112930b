"""Type extraction: ranking compatible types and judging native convertibility.

The registry never inspects a type hierarchy itself. It asks a
:class:`TypeExtractor` for the ordered list of types a value may be
treated as, and whether Python already converts between two types without
any registered converter.
"""

from __future__ import annotations

import numbers
import typing
from abc import ABC, abstractmethod
from collections import abc
from typing import Any

from castors.domain.types import PrimitiveKind

# Probed in this order after a class's own MRO; most specific first.
RANKED_ABCS: tuple[type, ...] = (
    numbers.Integral,
    numbers.Rational,
    numbers.Real,
    numbers.Complex,
    numbers.Number,
    abc.Mapping,
    abc.Set,
    abc.Sequence,
    abc.Collection,
    abc.Iterable,
)

# PEP 484 numeric tower: int is acceptable where float is, float where complex is.
NUMERIC_PROMOTIONS: dict[type, tuple[type, ...]] = {
    int: (float, complex),
    float: (complex,),
}

_K = PrimitiveKind

PRIMITIVE_WIDENING: dict[PrimitiveKind, frozenset[PrimitiveKind]] = {
    _K.BYTE: frozenset({_K.SHORT, _K.INT, _K.LONG, _K.FLOAT, _K.DOUBLE}),
    _K.SHORT: frozenset({_K.INT, _K.LONG, _K.FLOAT, _K.DOUBLE}),
    _K.INT: frozenset({_K.LONG, _K.FLOAT, _K.DOUBLE}),
    _K.LONG: frozenset({_K.FLOAT, _K.DOUBLE}),
    _K.FLOAT: frozenset({_K.DOUBLE}),
}


class TypeExtractor(ABC):
    """Strategy for type ranking and native convertibility."""

    @abstractmethod
    def rank(self, tp: Any) -> list[Any]:
        """Return the types *tp* is compatible with, most specific first."""

    @abstractmethod
    def is_directly_convertible(self, from_type: Any, to_type: Any) -> bool:
        """Whether Python converts *from_type* to *to_type* without a converter."""


class DefaultTypeExtractor(TypeExtractor):
    """MRO-based extractor aware of ``numbers`` and ``collections.abc``.

    Ranking of a class is its MRO (without ``object``), then every ABC in
    :data:`RANKED_ABCS` it virtually subclasses, then ``object``. A
    primitive kind ranks ahead of its boxed class. A parameterised alias
    such as ``list[int]`` ranks ahead of its origin.
    """

    def rank(self, tp: Any) -> list[Any]:
        if isinstance(tp, PrimitiveKind):
            return [tp, *self.rank(tp.boxed)]
        if not isinstance(tp, type):
            origin = typing.get_origin(tp)
            if isinstance(origin, type):
                return [tp, *self.rank(origin)]
            return [tp, object]

        ranked = [t for t in tp.__mro__ if t is not object]
        for candidate in RANKED_ABCS:
            if candidate in ranked:
                continue
            if issubclass(tp, candidate):
                ranked.append(candidate)
        ranked.append(object)
        return ranked

    def is_directly_convertible(self, from_type: Any, to_type: Any) -> bool:
        if from_type == to_type:
            return True

        if isinstance(from_type, PrimitiveKind) and isinstance(to_type, PrimitiveKind):
            return to_type in PRIMITIVE_WIDENING.get(from_type, frozenset())

        if isinstance(to_type, PrimitiveKind):
            # Boxing: a str is not a char, and a Python int may not fit a
            # fixed-width kind, so both go through a converter.
            if to_type in (PrimitiveKind.CHAR, PrimitiveKind.VOID) or to_type.bounds:
                return False
            return isinstance(from_type, type) and issubclass(from_type, to_type.boxed)

        if isinstance(from_type, PrimitiveKind):
            from_type = from_type.boxed

        if not isinstance(from_type, type) or not isinstance(to_type, type):
            return False
        if issubclass(from_type, to_type):
            return True
        return any(
            issubclass(from_type, narrow) and to_type in wider
            for narrow, wider in NUMERIC_PROMOTIONS.items()
        )
