# =============================================================================
# app/exceptions.py - Error Taxonomy and Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every error raised by the services carries the HTTP status it maps to:
# - AuthError:            401 (bad credentials, missing/expired/revoked token)
# - FileValidationError:  400 (missing field, bad parent, folder content, ...)
# - AccessError:          404 (never 403 - existence of private files is not leaked)
# - StorageError:         404 on read (blob missing), 500 on write
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class FilesManagerException(Exception):
    """
    Base exception for the Files Manager API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "FILES_MANAGER_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthError(FilesManagerException):
    """Base class for authentication failures. Always a 401."""

    def __init__(self, code: str, suggestion: str | None = None):
        super().__init__(
            message="Unauthorized",
            code=code,
            status_code=401,
            suggestion=suggestion,
        )


class InvalidCredentialsError(AuthError):
    """Raised when the Basic auth header is malformed or doesn't match a user."""

    def __init__(self):
        super().__init__(
            code="INVALID_CREDENTIALS",
            suggestion="Send 'Authorization: Basic base64(email:password)' for a registered user",
        )


class UnauthorizedError(AuthError):
    """Raised when the X-Token is missing, expired, revoked or orphaned."""

    def __init__(self):
        super().__init__(
            code="UNAUTHORIZED",
            suggestion="Obtain a new token from GET /connect and send it as X-Token",
        )


# =============================================================================
# Validation Exceptions
# =============================================================================

class FileValidationError(FilesManagerException):
    """Base class for request validation failures. Always a 400."""

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            details=details,
        )


class MissingFieldError(FileValidationError):
    """Raised when a required request field is absent or empty."""

    def __init__(self, field: str):
        super().__init__(
            message=f"Missing {field}",
            code="MISSING_FIELD",
            details={"field": field},
        )
        self.field = field


class InvalidFileTypeError(FileValidationError):
    """Raised when `type` is not one of folder, file, image."""

    def __init__(self, value: Any):
        # Reported like an absent type: the field has no usable value
        super().__init__(
            message="Missing type",
            code="MISSING_FIELD",
            details={"field": "type", "value": str(value)},
        )


class InvalidDataError(FileValidationError):
    """Raised when `data` is not valid base64."""

    def __init__(self):
        super().__init__(message="Invalid data", code="INVALID_DATA")


class FolderDataError(FileValidationError):
    """Raised when a folder upload carries content."""

    def __init__(self):
        super().__init__(message="Folder cannot have data", code="FOLDER_DATA")


class ParentNotFoundError(FileValidationError):
    """Raised when parentId doesn't reference an existing node."""

    def __init__(self, parent_id: str):
        super().__init__(
            message="Parent not found",
            code="PARENT_NOT_FOUND",
            details={"parent_id": parent_id},
        )


class ParentNotFolderError(FileValidationError):
    """Raised when parentId references a file instead of a folder."""

    def __init__(self, parent_id: str):
        super().__init__(
            message="Parent is not a folder",
            code="PARENT_NOT_FOLDER",
            details={"parent_id": parent_id},
        )


class IsFolderError(FileValidationError):
    """Raised when content is requested for a folder."""

    def __init__(self, file_id: str):
        super().__init__(
            message="A folder doesn't have content",
            code="IS_FOLDER",
            details={"file_id": file_id},
        )


class InvalidSizeError(FileValidationError):
    """Raised when a thumbnail size that is never generated is requested."""

    def __init__(self, size: Any, allowed: list[int]):
        super().__init__(
            message="Invalid size",
            code="INVALID_SIZE",
            details={"size": str(size), "allowed_sizes": allowed},
        )


class UserAlreadyExistsError(FileValidationError):
    """Raised when registering an email that is already taken."""

    def __init__(self):
        super().__init__(message="User already exists", code="USER_EXISTS")


class FileTooLargeError(FilesManagerException):
    """Raised when decoded upload content exceeds the size limit."""

    def __init__(self, size_bytes: int, max_bytes: int):
        super().__init__(
            message=f"File too large: {size_bytes} bytes (max: {max_bytes})",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_bytes} bytes",
            details={"size_bytes": size_bytes, "max_bytes": max_bytes},
        )


# =============================================================================
# Access Exceptions
# =============================================================================

class AccessError(FilesManagerException):
    """
    Base class for access failures.

    Both subclasses render as a plain 404 so a caller can't tell a private
    file apart from a missing one.
    """

    def __init__(self, file_id: str):
        super().__init__(
            message="Not found",
            code="NOT_FOUND",
            status_code=404,
            details={"file_id": file_id},
        )
        self.file_id = file_id


class ForbiddenError(AccessError):
    """The node exists but the caller doesn't own it."""


class NotFoundError(AccessError):
    """The node doesn't exist or its content isn't visible to the caller."""


# =============================================================================
# Storage Exceptions
# =============================================================================

class StorageError(FilesManagerException):
    """Base class for failures of the blob storage collaborator."""


class StorageWriteError(StorageError):
    """Raised when file bytes can't be written."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to write file to storage: {error}",
            code="STORAGE_WRITE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error},
        )


class StorageReadError(StorageError):
    """Raised when the blob behind a storage ref is missing or unreadable."""

    def __init__(self, storage_ref: str):
        super().__init__(
            message="Not found",
            code="NOT_FOUND",
            status_code=404,
        )
        self.storage_ref = storage_ref


# =============================================================================
# Exception Handlers
# =============================================================================

async def files_manager_exception_handler(
    request: Request,
    exc: FilesManagerException
) -> JSONResponse:
    """
    Convert FilesManagerException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    headers = {"WWW-Authenticate": "Basic"} if isinstance(exc, InvalidCredentialsError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request parsing errors (malformed JSON, wrong field types).

    Reported as 400 like every other validation failure. Only the
    structured error list is returned, never the exception text.
    """
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_encoder(exc.errors()),
        }
    )
