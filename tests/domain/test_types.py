"""Tests for the type vocabulary: primitive kinds, identifiers, assignability."""

from __future__ import annotations

import datetime
from collections import abc

import pytest

from castors.domain.types import (
    ZERO_VALUES,
    PrimitiveKind,
    TypePair,
    is_assignable,
    runtime_type,
    type_name,
)


class TestPrimitiveKind:
    @pytest.mark.parametrize(
        ("kind", "boxed"),
        [
            (PrimitiveKind.INT, int),
            (PrimitiveKind.LONG, int),
            (PrimitiveKind.BYTE, int),
            (PrimitiveKind.SHORT, int),
            (PrimitiveKind.FLOAT, float),
            (PrimitiveKind.DOUBLE, float),
            (PrimitiveKind.BOOLEAN, bool),
            (PrimitiveKind.CHAR, str),
        ],
    )
    def test_boxed_type(self, kind: PrimitiveKind, boxed: type) -> None:
        assert kind.boxed is boxed

    def test_byte_bounds(self) -> None:
        assert PrimitiveKind.BYTE.bounds == (-128, 127)

    def test_float_has_no_bounds(self) -> None:
        assert PrimitiveKind.FLOAT.bounds is None

    @pytest.mark.parametrize(
        ("kind", "value", "fits"),
        [
            (PrimitiveKind.CHAR, "a", True),
            (PrimitiveKind.CHAR, "ab", False),
            (PrimitiveKind.CHAR, "", False),
            (PrimitiveKind.BYTE, 127, True),
            (PrimitiveKind.BYTE, 128, False),
            (PrimitiveKind.LONG, 2**63, False),
            (PrimitiveKind.DOUBLE, 1e300, True),
            (PrimitiveKind.SHORT, "not judged", True),
        ],
    )
    def test_holds(self, kind: PrimitiveKind, value: object, fits: bool) -> None:
        assert kind.holds(value) is fits

    def test_zero_table_covers_all_but_void(self) -> None:
        assert set(ZERO_VALUES) == set(PrimitiveKind) - {PrimitiveKind.VOID}
        assert ZERO_VALUES[PrimitiveKind.CHAR] == " "
        assert ZERO_VALUES[PrimitiveKind.BOOLEAN] is False


class TestTypeName:
    def test_builtin(self) -> None:
        assert type_name(int) == "int"

    def test_qualified(self) -> None:
        assert type_name(datetime.date) == "datetime.date"

    def test_primitive_is_prefixed(self) -> None:
        assert type_name(PrimitiveKind.INT) == "primitive:int"
        assert type_name(PrimitiveKind.INT) != type_name(int)

    def test_alias_uses_repr(self) -> None:
        assert type_name(list[int]) == "list[int]"


class TestRuntimeType:
    def test_primitive_boxes(self) -> None:
        assert runtime_type(PrimitiveKind.SHORT) is int

    def test_alias_resolves_origin(self) -> None:
        assert runtime_type(dict[str, int]) is dict

    def test_class_unchanged(self) -> None:
        assert runtime_type(str) is str


class TestIsAssignable:
    def test_subclass(self) -> None:
        assert is_assignable(int, bool)

    def test_abc(self) -> None:
        assert is_assignable(abc.Sequence, list)

    def test_unrelated(self) -> None:
        assert not is_assignable(int, str)

    def test_primitive_only_to_itself(self) -> None:
        assert is_assignable(PrimitiveKind.INT, PrimitiveKind.INT)
        assert not is_assignable(PrimitiveKind.INT, int)


def test_type_pair_describe() -> None:
    assert TypePair(str, PrimitiveKind.CHAR).describe() == "str -> primitive:char"
