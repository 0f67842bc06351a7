"""
Custom error handling for the Ecwid client.

This module defines every exception the library raises and a helper to
render them as plain dictionaries for callers that log or serialise errors.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Standardised error codes.
    """

    # General
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    OPERATION_CANCELLED = "OPERATION_CANCELLED"

    # Remote API
    ECWID_CONNECTION_FAILED = "ECWID_CONNECTION_FAILED"
    ECWID_API_ERROR = "ECWID_API_ERROR"
    INVALID_API_KEY = "INVALID_API_KEY"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"


class ErrorSeverity(Enum):
    """
    Severity levels for errors.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Base exception for every error raised by the library.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_retryable: bool = False,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Standardised error code
            details: Extra information about the error
            status_code: Associated HTTP status code
            severity: Error severity
            is_retryable: Whether the caller may retry the operation
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.severity = severity
        self.is_retryable = is_retryable
        self.timestamp = datetime.now(timezone.utc)
        self.traceback_str = traceback.format_exc()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the exception to a dictionary.

        Returns:
            Dict: Exception representation
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "status_code": self.status_code,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "timestamp": self.timestamp.isoformat(),
            "traceback": self.traceback_str,
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class ValidationException(AppException):
    """
    Raised when caller input is rejected before any network call.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        expected_format: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize the validation exception.

        Args:
            message: Error message
            field: Field that failed validation
            invalid_value: Offending value
            expected_format: Expected format or allowed values
            **kwargs: Extra arguments for AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            status_code=422,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value
        self.expected_format = expected_format

        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
                "expected_format": expected_format,
            }
        )


class ConfigException(AppException):
    """
    Raised when the shop id or a required token is missing.
    """

    def __init__(self, message: str, missing: Optional[list] = None, **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            status_code=500,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        self.missing = missing or []
        self.details.update({"missing": self.missing})


class CancelledException(AppException):
    """
    Raised when a cancellation signal fires while pages are being fetched.

    Pages fetched before the signal are discarded.
    """

    def __init__(self, message: str = "Operation cancelled", pages_fetched: int = 0, **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.OPERATION_CANCELLED,
            status_code=499,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.pages_fetched = pages_fetched
        self.details.update({"pages_fetched": pages_fetched})


class EcwidHttpException(AppException):
    """
    Raised when the Ecwid API answers with an error or cannot be reached.
    """

    def __init__(
        self,
        message: str,
        api_response_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize the Ecwid API exception.

        Args:
            message: Error message (server body when available)
            api_response_code: HTTP status from Ecwid, None on transport errors
            endpoint: Endpoint that failed
            **kwargs: Extra arguments for AppException
        """
        error_code = ErrorCode.ECWID_API_ERROR
        severity = ErrorSeverity.MEDIUM
        is_retryable = False

        if api_response_code is None:
            error_code = ErrorCode.ECWID_CONNECTION_FAILED
            is_retryable = True
        elif api_response_code == 403:
            error_code = ErrorCode.INVALID_API_KEY
        elif api_response_code == 429:
            error_code = ErrorCode.RATE_LIMIT_EXCEEDED
            severity = ErrorSeverity.LOW
            is_retryable = True
        elif api_response_code >= 500:
            severity = ErrorSeverity.HIGH
            is_retryable = True

        super().__init__(
            message=message,
            error_code=error_code,
            status_code=api_response_code or 503,
            severity=severity,
            is_retryable=is_retryable,
            **kwargs,
        )

        self.api_response_code = api_response_code
        self.endpoint = endpoint

        self.details.update({"api_response_code": api_response_code, "endpoint": endpoint})


def create_error_response(exception: Union[AppException, Exception], include_traceback: bool = False) -> Dict[str, Any]:
    """
    Build a standard error payload.

    Args:
        exception: Exception to convert
        include_traceback: Whether to keep the traceback

    Returns:
        Dict: Error payload
    """
    if isinstance(exception, AppException):
        error_dict = exception.to_dict()
    else:
        logger.error(f"Unhandled exception: {type(exception).__name__}: {exception}")
        error_dict = AppException(
            message=f"{type(exception).__name__}: {exception}",
            details={"original_exception": type(exception).__name__},
        ).to_dict()

    if not include_traceback:
        error_dict.pop("traceback", None)

    return {"error": True, **error_dict}
