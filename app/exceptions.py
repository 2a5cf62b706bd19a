# =============================================================================
# app/exceptions.py - Catalog Exceptions and Handlers
# =============================================================================
# Error taxonomy for the catalog service:
#   - CatalogValidationError: bad input, detected before any side effect
#   - PersistenceError: the relational store rejected the operation
#   - StorageError: object storage rejected an upload/delete
#   - NotFoundError: the target row does not exist
#
# Services raise these; core/actions.py converts them into ActionResult
# values so nothing escapes the public action boundary. The handlers at the
# bottom cover anything raised directly from a route.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class CatalogException(Exception):
    """
    Base exception for the catalog API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CATALOG_ERROR",
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
# Validation Exceptions
# =============================================================================

class CatalogValidationError(CatalogException):
    """Raised when input is rejected before touching the store or storage."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            suggestion=suggestion,
            details=details,
        )


class MissingFieldError(CatalogValidationError):
    """Raised when a required field is empty."""

    def __init__(self, field: str):
        super().__init__(
            message=f"Missing required field: {field}",
            code="MISSING_FIELD",
            suggestion=f"Provide a non-empty value for '{field}'",
            details={"field": field},
        )


class InvalidImageTypeError(CatalogValidationError):
    """Raised when an uploaded file is not an allowed raster image."""

    def __init__(self, content_type: str | None, allowed: list[str]):
        super().__init__(
            message=f"Unsupported file type: {content_type or 'unknown'}",
            code="INVALID_IMAGE_TYPE",
            suggestion="Use a JPG, PNG, WebP or GIF image",
            details={"content_type": content_type, "allowed_types": allowed},
        )


class ImageTooLargeError(CatalogValidationError):
    """Raised when an uploaded image exceeds the size cap."""

    def __init__(self, size_bytes: int, max_mb: int):
        size_mb = size_bytes / (1024 * 1024)
        super().__init__(
            message=f"File too large: {size_mb:.2f}MB (max: {max_mb}MB)",
            code="IMAGE_TOO_LARGE",
            suggestion=f"Upload an image smaller than {max_mb}MB",
            details={"size_bytes": size_bytes, "max_mb": max_mb},
        )


# =============================================================================
# Persistence Exceptions
# =============================================================================

class PersistenceError(CatalogException):
    """Raised when the relational store rejects an operation or is unreachable."""

    def __init__(
        self,
        message: str,
        operation: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code="PERSISTENCE_ERROR",
            status_code=status_code,
            suggestion="Check the submitted references and try again",
            details={"operation": operation, **(details or {})},
        )
        self.operation = operation


class NotFoundError(CatalogException):
    """Raised when an update/delete targets a row that doesn't exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            message=f"{entity.capitalize()} not found: {entity_id}",
            code=f"{entity.upper()}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {entity} id is correct",
            details={f"{entity}_id": entity_id},
        )


# =============================================================================
# Storage Exceptions
# =============================================================================

class StorageError(CatalogException):
    """Raised when object storage rejects an operation or is unreachable."""

    def __init__(self, message: str, code: str = "STORAGE_ERROR", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=code,
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details=details,
        )


class StorageUploadError(StorageError):
    """Raised when an image upload to storage fails."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to upload image to storage: {error}",
            code="STORAGE_UPLOAD_ERROR",
            details={"path": path, "error": error},
        )


class StorageDeleteError(StorageError):
    """Raised when removing objects from storage fails."""

    def __init__(self, paths: list[str], error: str):
        super().__init__(
            message=f"Failed to delete images from storage: {error}",
            code="STORAGE_DELETE_ERROR",
            details={"paths": paths, "error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def catalog_exception_handler(
    request: Request,
    exc: CatalogException
) -> JSONResponse:
    """
    Convert CatalogException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
