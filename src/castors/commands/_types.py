"""Click parameter type that turns a type name into a type object.

Accepted forms:
- builtin names: ``int``, ``str``, ``list``, ``date``, ``datetime`` ...
- primitive kinds: ``primitive:int``, ``primitive:char`` ...
- import strings: ``decimal.Decimal``, ``pkg.module:Class``
"""

from __future__ import annotations

import builtins
import datetime
from typing import Any

import click
from pydantic import ImportString, TypeAdapter, ValidationError

from castors.domain.types import PrimitiveKind

PRIMITIVE_PREFIX = "primitive:"

_NAMED_TYPES: dict[str, Any] = {
    "date": datetime.date,
    "datetime": datetime.datetime,
}
_import_adapter: TypeAdapter[Any] = TypeAdapter(ImportString[Any])


class TypeSpec(click.ParamType):
    name = "type"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip()

        if text.startswith(PRIMITIVE_PREFIX):
            kind = text.removeprefix(PRIMITIVE_PREFIX)
            try:
                return PrimitiveKind(kind)
            except ValueError:
                choices = ", ".join(k.value for k in PrimitiveKind)
                self.fail(f"unknown primitive kind {kind!r} (choose from {choices})", param, ctx)

        if text in _NAMED_TYPES:
            return _NAMED_TYPES[text]
        builtin = getattr(builtins, text, None)
        if isinstance(builtin, type):
            return builtin

        try:
            resolved = _import_adapter.validate_python(text)
        except ValidationError:
            self.fail(f"cannot import type {text!r}", param, ctx)
        if not isinstance(resolved, type):
            self.fail(f"{text!r} is not a type", param, ctx)
        return resolved


TYPE_SPEC = TypeSpec()
