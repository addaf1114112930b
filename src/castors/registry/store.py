"""Immutable registry snapshot keyed by declared type pair.

A snapshot is built completely by the loader and then published; it is
never mutated afterwards, so readers need no lock.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from castors.converters.base import Converter
from castors.domain.types import TypePair


class RegistryBuilder:
    """Mutable staging area used during a single rebuild."""

    def __init__(self) -> None:
        self._entries: dict[TypePair, Converter] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, converter: Converter) -> bool:
        """Register *converter* unless its pair is taken. First one wins."""
        key = converter.pair
        if key in self._entries:
            return False
        self._entries[key] = converter
        return True

    def build(self) -> ConverterRegistry:
        return ConverterRegistry(self._entries)


class ConverterRegistry(Mapping[TypePair, Converter]):
    """Read-only mapping of :class:`TypePair` to a converter instance."""

    def __init__(self, entries: Mapping[TypePair, Converter] | None = None) -> None:
        self._entries: Mapping[TypePair, Converter] = MappingProxyType(dict(entries or {}))

    def __getitem__(self, key: TypePair) -> Converter:
        return self._entries[key]

    def __iter__(self) -> Iterator[TypePair]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, source: Any, target: Any) -> Converter | None:
        return self._entries.get(TypePair(source, target))

    def __repr__(self) -> str:
        return f"<ConverterRegistry size={len(self)}>"
