"""
Symbol Client Error Model

This module provides the error handling framework for the Symbol Python client,
covering statement parsing, alias resolution and the REST transport.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes used by the client."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    NOT_FOUND = 4
    CONFLICT = 6

    # Parsing errors (100-199)
    PARSE_ERROR = 100
    INVALID_JSON = 101
    UNKNOWN_RECEIPT_TYPE = 102
    UNKNOWN_TRANSACTION_TYPE = 103
    INVALID_UNRESOLVED = 104

    # Network errors (200-299)
    NETWORK_ERROR = 200
    CONNECTION_FAILED = 201
    TIMEOUT = 202
    RATE_LIMITED = 203
    SERVICE_UNAVAILABLE = 204
    HTTP_ERROR = 205

    # Resolution errors (300-399)
    RESOLUTION_NOT_FOUND = 300
    RESOLUTION_STATEMENT_NOT_FOUND = 301

    # Precondition errors (400-499)
    PRECONDITION_FAILED = 400
    TRANSACTION_NOT_CONFIRMED = 401
    INVALID_ARGUMENT = 402
    AGGREGATE_INDEX_UNDEFINED = 403


class SymbolError(Exception):
    """
    Base class for all client errors.

    Carries a structured error code, optional details and the causing exception.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a client error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ParseError(SymbolError, ValueError):
    """Malformed or unrecognized DTO shape."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.PARSE_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class NotFoundError(SymbolError, LookupError):
    """Requested entity or resolution does not exist."""

    def __init__(self, message: str = "Not found", code: ErrorCode = ErrorCode.NOT_FOUND,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class PreconditionError(SymbolError):
    """Operation attempted on an object in the wrong state."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.PRECONDITION_FAILED,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class TransportError(SymbolError):
    """Network and HTTP failures reported by the REST transport."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.NETWORK_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None,
                 status: Optional[int] = None):
        super().__init__(message, code, details, cause)
        self.status = status


class TimeoutError(TransportError):
    """Request timeouts."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.TIMEOUT, details, cause)


# REST error bodies carry a string code, e.g. {"code": "ResourceNotFound", "message": "..."}
_REST_CODES = {
    "ResourceNotFound": ErrorCode.NOT_FOUND,
    "InvalidArgument": ErrorCode.INVALID_ARGUMENT,
    "InvalidContent": ErrorCode.INVALID_ARGUMENT,
    "Conflict": ErrorCode.CONFLICT,
    "Internal": ErrorCode.INTERNAL,
}


def error_from_response(status: int, body: Any = None) -> SymbolError:
    """
    Create an appropriate error from a failed REST response.

    Args:
        status: HTTP status code
        body: Decoded response body, if any

    Returns:
        Appropriate error instance
    """
    message = f"HTTP {status}"
    code = ErrorCode.HTTP_ERROR
    details: Dict[str, Any] = {"status": status}

    if isinstance(body, dict):
        if body.get("message"):
            message = str(body["message"])
        rest_code = body.get("code")
        if rest_code is not None:
            details["restCode"] = rest_code
            code = _REST_CODES.get(rest_code, code)
    elif body:
        message = str(body)

    if status == 404 or code == ErrorCode.NOT_FOUND:
        return NotFoundError(message, ErrorCode.NOT_FOUND, details)
    if status == 429:
        return TransportError(message, ErrorCode.RATE_LIMITED, details, status=status)
    if status in (502, 503, 504):
        return TransportError(message, ErrorCode.SERVICE_UNAVAILABLE, details, status=status)
    return TransportError(message, code, details, status=status)


def is_retryable(error: Exception) -> bool:
    """
    Check if an error is worth retrying at the transport level.

    Args:
        error: Exception to check

    Returns:
        True if the error should be retried
    """
    if isinstance(error, TransportError):
        if error.code in (ErrorCode.NETWORK_ERROR, ErrorCode.CONNECTION_FAILED,
                          ErrorCode.TIMEOUT, ErrorCode.SERVICE_UNAVAILABLE,
                          ErrorCode.RATE_LIMITED):
            return True
        return error.status is not None and error.status >= 500
    return False


__all__ = [
    "ErrorCode",
    "SymbolError",
    "ParseError",
    "NotFoundError",
    "PreconditionError",
    "TransportError",
    "TimeoutError",
    "error_from_response",
    "is_retryable",
]
