"""ServiceResult and ServiceError — what every service method returns.

INVARIANT: Service methods never raise for bad input; they return a
failed ServiceResult.  The CLI decides how to print it and which exit
code to use.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    Codes: ``INVALID_RECORD``, ``UNKNOWN_CONTRACT``, ``UNREADABLE_DOCUMENT``.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"validate"``).
        data: Operation-specific payload.  Failed validations keep their
            per-document report here as well.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (clock reading, options in effect).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
