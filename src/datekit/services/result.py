"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: Service methods return ServiceResult and never raise a
domain error; every :class:`~datekit.domain.errors.DateKitError` becomes
a ``ServiceError`` whose code is the error's kind (``FORMAT_MISMATCH``,
``ZONE_RESOLUTION``, ...).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from datekit.domain.errors import DateKitError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: DateKitError, **detail: Any) -> ServiceError:
        return cls(
            code=exc.code,
            message=str(exc),
            detail={"error_type": type(exc).__name__, **detail},
        )


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"difference"``).
        data: Operation-specific payload on success. Values are rendered
            as ISO strings, ints or bools so the payload is JSON-ready.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans in verbose mode).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
