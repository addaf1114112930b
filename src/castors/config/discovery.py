"""Locate and read ``castors.toml``.

Lookup order: the file named by ``CASTORS_CONFIG`` (when set, nothing
else is tried), then ``castors.toml`` in the start directory or the
nearest ancestor that has one.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path

from castors.config.models import CastorsConfig

CONFIG_FILENAME = "castors.toml"
CONFIG_ENV_VAR = "CASTORS_CONFIG"


def _ancestors(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> CastorsConfig:
    """Validate the TOML file at *path* (or the discovered one) as a :class:`CastorsConfig`.

    No file means all defaults. Unknown keys are ignored; invalid values
    raise :class:`pydantic.ValidationError`.
    """
    path = path or find_config(cwd)
    if path is None:
        return CastorsConfig()
    with path.open("rb") as fh:
        return CastorsConfig.model_validate(tomllib.load(fh))
