"""
Centralized error handling utilities for Susbot.

The scanning core never raises during normal operation; these exceptions
belong to the collaborator layer (block explorer, narrative generator,
transport) and to catalogue authoring mistakes detected at import time.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Enum for error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SusbotError(Exception):
    """Base exception class for Susbot-specific errors."""

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize SusbotError.

        Args:
            message: Error message
            severity: Error severity level
            details: Additional error details
        """
        self.message = message
        self.severity = severity
        self.details = details or {}
        super().__init__(message)


class CollaboratorError(SusbotError):
    """Failure of an external collaborator, reported as a summary plus detail lines."""

    def __init__(self, summary: str, reasons: Optional[List[str]] = None, severity: ErrorSeverity = ErrorSeverity.HIGH):
        self.summary = summary
        self.reasons = list(reasons or [])
        super().__init__(summary, severity=severity, details={"reasons": self.reasons})


class EtherscanError(CollaboratorError):
    """Exception for block explorer API errors."""
    pass


class NarrativeError(CollaboratorError):
    """Exception for narrative (language model) generation errors."""

    def __init__(self, summary: str, reasons: Optional[List[str]] = None):
        super().__init__(summary, reasons, severity=ErrorSeverity.LOW)


class CatalogueError(SusbotError):
    """Invalid entry in the built-in rule catalogue."""

    def __init__(self, message: str, check_name: str):
        super().__init__(message, severity=ErrorSeverity.CRITICAL, details={"check": check_name})
        self.check_name = check_name


class ValidationError(SusbotError):
    """Exception for request validation errors."""

    def __init__(self, message: str, field: str, value: Any):
        """
        Initialize ValidationError.

        Args:
            message: Error message
            field: Field that failed validation
            value: Invalid value
        """
        super().__init__(
            message,
            severity=ErrorSeverity.MEDIUM,
            details={"field": field, "value": str(value)}
        )
        self.field = field
        self.value = value


def error_to_http_exception(error: Exception) -> HTTPException:
    """
    Convert an exception to an appropriate HTTPException.

    Args:
        error: The exception to convert

    Returns:
        HTTPException with appropriate status code and details
    """
    # Order matters: subclasses before their bases
    status_code_map = (
        (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
        (EtherscanError, status.HTTP_503_SERVICE_UNAVAILABLE),
        (NarrativeError, status.HTTP_502_BAD_GATEWAY),
        (ValueError, status.HTTP_400_BAD_REQUEST),
        (SusbotError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )

    for error_type, code in status_code_map:
        if isinstance(error, error_type):
            status_code = code
            break
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(error, ValidationError):
        detail = {
            "message": error.message,
            "field": error.field,
            "value": str(error.value),
            "type": "validation_error"
        }
    elif isinstance(error, SusbotError):
        detail = {
            "message": str(error),
            "type": error.__class__.__name__.lower(),
            "severity": error.severity.value
        }
        if error.details:
            detail["details"] = error.details
    else:
        detail = {
            "message": str(error) or "An unexpected error occurred",
            "type": "unknown"
        }

    return HTTPException(status_code=status_code, detail=detail)


async def fastapi_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for FastAPI applications.

    Args:
        request: The request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with appropriate status code and error details
    """
    if isinstance(exc, HTTPException):
        http_exc = exc
    else:
        if isinstance(exc, SusbotError) and exc.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM):
            logger.warning(f"Request to {request.url.path} failed: {exc}")
        else:
            logger.exception(f"Unhandled exception in request to {request.url.path}: {exc}")
        http_exc = error_to_http_exception(exc)

    return JSONResponse(
        status_code=http_exc.status_code,
        content={
            "error": True,
            "detail": http_exc.detail,
            "status_code": http_exc.status_code,
            "path": request.url.path
        }
    )
