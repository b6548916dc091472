"""ServiceResult and ServiceError — the contract between services and callers.

INVARIANT: Every public RelocationService method returns ServiceResult.
Expected failures (bad input, refused operations, I/O errors on a single
document) are reported as ``ok=False`` with a stable error code; only
programming errors propagate as exceptions.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes surfaced to callers.
NO_ACTIVE_DOCUMENT = "NO_ACTIVE_DOCUMENT"
INVALID_DESTINATION = "INVALID_DESTINATION"
NOT_ARCHIVED = "NOT_ARCHIVED"
ALREADY_ARCHIVED = "ALREADY_ARCHIVED"
RELOCATION_FAILED = "RELOCATION_FAILED"
UNKNOWN_RULE = "UNKNOWN_RULE"
ARCHIVE_DISABLED = "ARCHIVE_DISABLED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"relocate"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        """Shorthand for an ``ok=False`` result."""
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
