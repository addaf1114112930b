"""Shared pytest fixtures and test helpers for castors tests."""

from __future__ import annotations

import itertools
import logging
import re
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from castors.converters.base import Converter
from castors.registry.dispatcher import Castors

_counter = itertools.count()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def castors() -> Castors:
    """A fresh instance with the bundled converters and default settings."""
    return Castors.create()


@pytest.fixture
def namespace(request: pytest.FixtureRequest) -> str:
    """Unique dotted package name for converters defined by one test.

    Anchoring on a class from this namespace discovers exactly the
    converters the test defined, nothing else from the process-wide table.
    """
    slug = re.sub(r"\W", "_", request.node.name)
    return f"castors_test_{next(_counter)}_{slug}"


@pytest.fixture
def make_anchor(namespace: str) -> Callable[[], type]:
    """Build a marker type living in the test's namespace."""

    def factory() -> type:
        return type("Anchor", (), {"__module__": f"{namespace}.converters"})

    return factory


@pytest.fixture
def make_converter(namespace: str) -> Callable[..., type[Converter]]:
    """Define (and thereby self-register) a converter class in the test's namespace.

    ``fn(value, target_type, *directives)`` becomes ``convert``; by default
    the converter returns ``(ClassName, value)`` so tests can tell which
    converter ran.
    """

    def factory(
        source: Any,
        target: Any,
        fn: Callable[..., Any] | None = None,
        *,
        name: str | None = None,
        bases: tuple[type, ...] = (Converter,),
        **attrs: Any,
    ) -> type[Converter]:
        cls_name = name or f"Conv{next(_counter)}"

        def convert(self: Converter, value: Any, target_type: Any, *directives: str) -> Any:
            if fn is None:
                return (cls_name, value)
            return fn(value, target_type, *directives)

        namespace_dict: dict[str, Any] = {
            "__module__": f"{namespace}.converters",
            "source_type": source,
            "target_type": target,
            "convert": convert,
            **attrs,
        }
        return type(cls_name, bases, namespace_dict)

    return factory


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run with no castors.toml or CASTORS_* environment in reach."""
    for var in ("CASTORS_CONFIG", "CASTORS_VERBOSE", "CASTORS_JSON_OUTPUT", "CASTORS_ANCHORS"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None]:
    """CLI invocations install a structlog handler on the root logger; undo it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    lib_level = logging.getLogger("castors").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("castors").setLevel(lib_level)
