"""ServiceResult and ServiceError — the contract between services and front-ends.

INVARIANT: every public ScheduleService method returns ServiceResult.
Domain failures never escape a service as exceptions; they become
``ok=False`` results whose ``error.code`` is the domain error's code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from taskcadence.domain.errors import RecurrenceError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: RecurrenceError, **detail: Any) -> ServiceError:
        """Wrap a domain rejection, keeping its message verbatim."""
        return cls(code=exc.code, message=str(exc), detail=detail)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"next_date"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, reference date, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
