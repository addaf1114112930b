"""Exception taxonomy for conversion and registry loading.

Dispatch-time failures (``ConversionNotFound``, ``ConversionFailed``)
surface to the caller. ``ConverterLoadFailed`` is raised and caught
inside a rebuild so a single broken converter never aborts it.
``Unsupported`` marks an internal defect.
"""

from __future__ import annotations

from typing import Any

from castors.domain.types import type_name


class CastorsError(Exception):
    """Base class for every error raised by castors."""

    code: str = "CASTORS_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def detail(self) -> dict[str, Any]:
        """Structured diagnostic payload for JSON output."""
        return {}

    def __str__(self) -> str:
        return self.message


class ConversionNotFound(CastorsError):
    """No converter resolves and the types are not natively convertible."""

    code = "CONVERSION_NOT_FOUND"

    def __init__(self, source_type: Any, target_type: Any, registry_size: int) -> None:
        self.source_type = source_type
        self.target_type = target_type
        self.registry_size = registry_size
        super().__init__(
            f"Can not find converter for '{type_name(source_type)}'=>'{type_name(target_type)}'"
            f" in ({registry_size}) because:\nFail to find matched converter"
        )

    @property
    def detail(self) -> dict[str, Any]:
        return {
            "source_type": type_name(self.source_type),
            "target_type": type_name(self.target_type),
            "registry_size": self.registry_size,
        }


class ConversionFailed(CastorsError):
    """A converter was found but the conversion itself failed.

    Converters raise it directly for expected failures; dispatch wraps
    any other exception into it with the original as ``__cause__``.
    """

    code = "CONVERSION_FAILED"

    def __init__(
        self,
        source_type: Any,
        target_type: Any,
        value: Any,
        reason: str,
    ) -> None:
        self.source_type = source_type
        self.target_type = target_type
        self.value_repr = str(value)
        self.reason = reason
        super().__init__(
            f"Fail to cast from <{type_name(source_type)}> to <{type_name(target_type)}>"
            f" for {{{self.value_repr}}} because:\n{reason}"
        )

    @classmethod
    def wrap(
        cls,
        exc: BaseException,
        source_type: Any,
        target_type: Any,
        value: Any,
    ) -> ConversionFailed:
        return cls(source_type, target_type, value, f"{type(exc).__name__}:{exc}")

    @property
    def detail(self) -> dict[str, Any]:
        return {
            "source_type": type_name(self.source_type),
            "target_type": type_name(self.target_type),
            "value": self.value_repr,
            "reason": self.reason,
        }


class ConverterLoadFailed(CastorsError):
    """A converter candidate could not be instantiated or configured."""

    code = "CONVERTER_LOAD_FAILED"

    def __init__(self, candidate: Any, reason: str) -> None:
        self.candidate = candidate
        self.reason = reason
        super().__init__(f"Fail to create converter [{type_name(candidate)}] because: {reason}")

    @property
    def detail(self) -> dict[str, Any]:
        return {"candidate": type_name(self.candidate), "reason": self.reason}


class Unsupported(CastorsError):
    """A primitive kind with no zero value reached the absent-value path."""

    code = "UNSUPPORTED"

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"No zero value defined for {type_name(kind)}")

    @property
    def detail(self) -> dict[str, Any]:
        return {"kind": type_name(self.kind)}
