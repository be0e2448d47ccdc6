"""Custom exception handlers for consistent error responses.

Provides the wizard error taxonomy, standardized error formatting,
security-safe error messages, and logging for debugging.

Submissions that fail step validation raise pydantic's ValidationError,
which is rendered here as a 422 VALIDATION_ERROR response.
"""

import logging
from typing import Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StepwiseException(Exception):
    """Base exception for wizard service errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(self.message)


class BusinessLogicError(StepwiseException):
    """Exception for business logic violations."""

    def __init__(self, message: str, error_code: str = "BUSINESS_LOGIC_ERROR"):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            error_code=error_code,
        )


class ResourceNotFoundError(StepwiseException):
    """Exception for resources not found."""

    def __init__(self, resource: str, identifier: str, error_code: str = "RESOURCE_NOT_FOUND"):
        super().__init__(
            message=f"{resource} not found: {identifier}",
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=error_code,
        )


class WizardNotFoundError(ResourceNotFoundError):
    """No stored wizard of the given type exists for this id."""

    def __init__(self, wizard_type: str, wizard_id: int | None):
        self.wizard_type = wizard_type
        self.wizard_id = wizard_id
        super().__init__(
            resource="Wizard",
            identifier=f"{wizard_type}/{wizard_id}",
            error_code="WIZARD_NOT_FOUND",
        )


class UnknownStepError(ResourceNotFoundError):
    """The requested step slug is not part of the wizard."""

    def __init__(self, wizard_type: str, step_slug: str):
        self.wizard_type = wizard_type
        self.step_slug = step_slug
        super().__init__(
            resource="Step",
            identifier=f"{wizard_type}/{step_slug}",
            error_code="UNKNOWN_STEP",
        )


class UnknownWizardError(ResourceNotFoundError):
    """No wizard type is registered under this slug."""

    def __init__(self, wizard_type: str):
        self.wizard_type = wizard_type
        super().__init__(
            resource="Wizard type",
            identifier=wizard_type,
            error_code="UNKNOWN_WIZARD",
        )


def create_error_response(
    status_code: int,
    message: str,
    error_code: str = "ERROR",
    details: Union[dict, list, None] = None,
) -> JSONResponse:
    """Create standardized error response.

    Format:
    {
        "error": {
            "code": "ERROR_CODE",
            "message": "Human-readable error message",
            "details": {...}  // Optional additional details
        }
    }
    """
    content = {
        "error": {
            "code": error_code,
            "message": message,
        }
    }

    if details:
        content["error"]["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=content,
    )


async def stepwise_exception_handler(
    request: Request,
    exc: StepwiseException,
) -> JSONResponse:
    """Handle wizard service exceptions."""
    logger.warning(
        f"Wizard exception: {exc.error_code} - {exc.message}",
        extra={
            "error_code": exc.error_code,
            "path": request.url.path,
            "method": request.method,
        },
    )

    return create_error_response(
        status_code=exc.status_code,
        message=exc.message,
        error_code=exc.error_code,
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Unmatched routes and methods keep the JSON error envelope."""
    return create_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        error_code=f"HTTP_{exc.status_code}",
    )


async def validation_exception_handler(
    request: Request,
    exc: Union[RequestValidationError, ValidationError],
) -> JSONResponse:
    """Handle request and step input validation errors."""
    logger.warning(
        f"Validation error on {request.url.path}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "errors": exc.errors(),
        },
    )

    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Validation error",
        error_code="VALIDATION_ERROR",
        details={"errors": errors},
    )


async def database_exception_handler(
    request: Request,
    exc: SQLAlchemyError,
) -> JSONResponse:
    """Constraint violations answer 422, lost connections 503."""
    logger.error(
        f"Database error on {request.method} {request.url.path}: {exc}",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )

    if isinstance(exc, OperationalError):
        return create_error_response(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            message="Wizard storage is temporarily unavailable",
            error_code="DATABASE_UNAVAILABLE",
        )
    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Wizard data could not be stored",
        error_code="INTEGRITY_ERROR",
    )


async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        extra={"path": request.url.path},
        exc_info=exc,
    )

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="An unexpected error occurred",
        error_code="INTERNAL_SERVER_ERROR",
    )


def register_exception_handlers(app):
    app.add_exception_handler(StepwiseException, stepwise_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    for validation_error in (RequestValidationError, ValidationError):
        app.add_exception_handler(validation_error, validation_exception_handler)
    for database_error in (IntegrityError, OperationalError):
        app.add_exception_handler(database_error, database_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
