# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized error taxonomy for the intake API.
# Every failure is raised as a ProjectApplyException subclass and converted
# to the same JSON shape at the app boundary:
#
#   {"status": "error", "code": "...", "message": "...", "errors": [...]}
#
# `errors` is never empty, so clients can always render field-level feedback.
# =============================================================================

from enum import Enum
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class ProjectApplyException(Exception):
    """
    Base exception for the project application API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "PROJECT_APPLY_ERROR",
        status_code: int = 500,
        errors: list[str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.errors = list(errors) if errors else [message]

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {
            "status": "error",
            "code": self.code,
            "message": self.message,
            "errors": self.errors,
        }


# =============================================================================
# Request Exceptions
# =============================================================================

class MalformedRequestError(ProjectApplyException):
    """Raised when the body cannot be decoded or `meta` is not valid JSON."""

    def __init__(self, message: str, error: str):
        super().__init__(
            message=message,
            code="MALFORMED_REQUEST",
            status_code=400,
            errors=[error],
        )


class MissingFieldError(ProjectApplyException):
    """Raised when a required form field or file part is absent."""

    def __init__(self, field: str, is_file: bool = False):
        super().__init__(
            message=f"missing {field} image" if is_file else "missing required field",
            code="MISSING_FIELD",
            status_code=400,
            errors=[f"{field} {'file' if is_file else 'field'} is required"],
        )
        self.field = field


class ValidationFailedError(ProjectApplyException):
    """Raised when the metadata breaks one or more business rules."""

    def __init__(self, errors: list[str] | tuple[str, ...]):
        super().__init__(
            message="request validation failed",
            code="VALIDATION_FAILED",
            status_code=400,
            errors=list(errors),
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class PayloadTooLargeError(ProjectApplyException):
    """Raised when an uploaded image exceeds its size limit."""

    def __init__(self, field: str, max_mb: int):
        super().__init__(
            message=f"{field} image too large",
            code="PAYLOAD_TOO_LARGE",
            status_code=413,
            errors=[f"{field} image exceeds maximum size of {max_mb}MB"],
        )
        self.field = field
        self.max_mb = max_mb


class UnsupportedMediaTypeError(ProjectApplyException):
    """Raised when an uploaded image has an extension outside the allow-list."""

    def __init__(self, field: str, filename: str):
        super().__init__(
            message="unsupported file type",
            code="UNSUPPORTED_MEDIA_TYPE",
            status_code=415,
            errors=[f"{field} image must be jpg, png, or webp format"],
        )
        self.field = field
        self.filename = filename


# =============================================================================
# Storage Exceptions
# =============================================================================

class StorageStage(str, Enum):
    """Step of a submission write that failed."""
    DIRECTORY = "directory"
    COVER = "cover"
    AVATAR = "avatar"
    METADATA = "metadata"


_STAGE_MESSAGES = {
    StorageStage.DIRECTORY: ("failed to create application directory", "Failed to create application directory"),
    StorageStage.COVER: ("failed to save cover image", "Failed to save cover image"),
    StorageStage.AVATAR: ("failed to save avatar image", "Failed to save avatar image"),
    StorageStage.METADATA: ("failed to save metadata", "Failed to save metadata"),
}


class StorageFailureError(ProjectApplyException):
    """Raised when a directory or file write fails after validation passed."""

    def __init__(self, stage: StorageStage, error: str):
        message, detail = _STAGE_MESSAGES[stage]
        super().__init__(
            message=message,
            code="STORAGE_FAILURE",
            status_code=500,
            errors=[f"{detail}: {error}"],
        )
        self.stage = stage


class StorageInitError(ProjectApplyException):
    """Raised at startup when the storage root cannot be created."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to create storage root {path}: {error}",
            code="STORAGE_INIT_FAILED",
            status_code=500,
        )
        self.path = path


class ApplicationNotFoundError(ProjectApplyException):
    """Raised when a submission id has no complete record on disk."""

    def __init__(self, application_id: str):
        super().__init__(
            message=f"Application not found: {application_id}",
            code="APPLICATION_NOT_FOUND",
            status_code=404,
        )
        self.application_id = application_id


# =============================================================================
# Exception Handlers
# =============================================================================

async def project_apply_exception_handler(
    request: Request,
    exc: ProjectApplyException
) -> JSONResponse:
    """Convert ProjectApplyException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
