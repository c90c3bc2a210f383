"""Exception hierarchy for the insights core.

Every error carries a machine-readable ``code`` so API clients can branch
on it without parsing English messages.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette import status


class InsightsError(Exception):
    """Base class for all application-level errors."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ConfigurationError(InsightsError):
    """The family configuration cannot be used as-is (e.g. unknown zone)."""

    http_status = status.HTTP_422_UNPROCESSABLE_CONTENT
    code = "INVALID_CONFIGURATION"


class InvalidTimezoneError(ConfigurationError):
    code = "INVALID_TIMEZONE"

    def __init__(self, timezone: str | None):
        super().__init__(
            message=f"Unknown or unsupported IANA timezone: {timezone!r}",
            details={"timezone": timezone},
        )


class FamilyNotFoundError(InsightsError):
    http_status = status.HTTP_404_NOT_FOUND
    code = "FAMILY_NOT_FOUND"

    def __init__(self, family_id: uuid.UUID):
        super().__init__(
            message=f"Family {family_id} not found.",
            details={"family_id": str(family_id)},
        )


class PartialComputationError(InsightsError):
    """One calculator failed for one child.

    Never raised past the orchestrator: it is recorded on that child's
    result and the zero-valued substitute is used instead.
    """

    code = "PARTIAL_COMPUTATION"

    def __init__(self, stage: str, profile_id: uuid.UUID, cause: BaseException):
        self.stage = stage
        self.profile_id = profile_id
        self.cause = cause
        super().__init__(
            message=f"{stage} computation failed: {cause}",
            details={
                "stage": stage,
                "profile_id": str(profile_id),
                "error_type": type(cause).__name__,
            },
        )


async def insights_exception_handler(request: Request, exc: InsightsError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content={"detail": exc.to_dict()},
    )
