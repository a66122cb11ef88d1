"""
Application error types.

Every business-rule violation is raised as an ``AppError``. They subclass
FastAPI's ``HTTPException`` so routes and dependencies can raise them the
same way, and ``main.py`` renders them as::

    {"success": false, "error": {"message": ..., "code": ..., "details": ...}}
"""

from typing import Any, Optional

from fastapi import HTTPException


class AppError(HTTPException):
    """Base error with an HTTP status, a stable code and optional details"""

    status_code = 500
    code = "ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        status_code: Optional[int] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message
        self.details = details
        super().__init__(status_code=self.status_code, detail=message, headers=headers)

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            error["details"] = self.details
        return error


class BadRequestError(AppError):
    status_code = 400
    code = "BAD_REQUEST"


class UnauthorizedError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"


class ValidationError(AppError):
    status_code = 422
    code = "VALIDATION_ERROR"


class RateLimitError(AppError):
    status_code = 429
    code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, retry_after: int):
        super().__init__(
            "Too many requests, please try again later",
            headers={"Retry-After": str(retry_after)},
        )


class SchedulingConflictError(ConflictError):
    """Raised when a booking intersects an existing appointment of the same client"""

    code = "APPOINTMENT_OVERLAP"

    def __init__(self, existing_appointment_id: str, existing_start_time: str):
        self.existing_appointment_id = existing_appointment_id
        self.existing_start_time = existing_start_time
        super().__init__(
            f"This appointment overlaps with an existing appointment at {existing_start_time}",
            details={
                "existing_appointment_id": existing_appointment_id,
                "existing_start_time": existing_start_time,
            },
        )
