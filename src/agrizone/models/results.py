"""Typed errors, warnings and the success/failure envelope returned by the core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class CoreError(Exception):
    """Base class for every failure the core can report."""

    code = "error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        return {"type": type(self).__name__, "code": self.code, "message": self.message}


class ValidationError(CoreError, ValueError):
    """Bad input shape: invalid coordinates, radius out of range, empty inputs."""

    code = "validation_error"

    def __init__(self, message: str, *, field: str | None = None, code: str | None = None) -> None:
        super().__init__(message, code=code)
        self.field = field

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["field"] = self.field
        return payload


class NotFoundError(CoreError, LookupError):
    """A referenced zone, farmer, route or stop is absent."""

    code = "not_found"


class TransitionError(CoreError):
    """An illegal route or stop status change."""

    code = "invalid_transition"

    def __init__(
        self,
        message: str,
        *,
        current: str | None = None,
        requested: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message, code=code)
        self.current = current
        self.requested = requested

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload.update({"current": self.current, "requested": self.requested})
        return payload


@dataclass(frozen=True, slots=True)
class GeometryWarning:
    """Non-fatal geometry problem, e.g. a farmer excluded for lacking a location."""

    code: str
    message: str
    farmer_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Discriminated success/failure value returned by every public operation."""

    success: bool
    data: Optional[T] = None
    error: Optional[CoreError] = None
    message: Optional[str] = None
    warnings: tuple[GeometryWarning, ...] = ()

    @classmethod
    def ok(
        cls,
        data: T,
        message: str | None = None,
        warnings: tuple[GeometryWarning, ...] | list[GeometryWarning] = (),
    ) -> "Result[T]":
        return cls(success=True, data=data, message=message, warnings=tuple(warnings))

    @classmethod
    def fail(
        cls,
        error: CoreError,
        warnings: tuple[GeometryWarning, ...] | list[GeometryWarning] = (),
    ) -> "Result[T]":
        return cls(success=False, error=error, message=error.message, warnings=tuple(warnings))

    def unwrap(self) -> T:
        """Return the payload or raise the carried error."""
        if not self.success:
            raise self.error if self.error is not None else CoreError(self.message or "operation failed")
        return self.data
