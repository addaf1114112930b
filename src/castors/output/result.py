"""CommandResult — what every CLI command hands to the output layer.

Conversion errors are mapped onto the structured ``error`` payload using
the ``code`` and ``detail`` of the :class:`~castors.domain.errors.CastorsError`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from castors.domain.errors import CastorsError


class CommandError(BaseModel):
    """Structured error payload within a CommandResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: CastorsError) -> CommandError:
        return cls(code=exc.code, message=exc.message, detail=exc.detail)


class CommandResult(BaseModel):
    """Outcome of one CLI operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"cast"``).
        data: Operation-specific payload on success.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: CommandError | None = None

    @classmethod
    def failure(cls, op: str, exc: CastorsError) -> CommandResult:
        return cls(ok=False, op=op, error=CommandError.from_exception(exc))
