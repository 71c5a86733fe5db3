"""
Custom Exceptions for clawgate
==============================

Structured error handling allows the HTTP layer and the tools to convert
failures into payloads based on type rather than parsing strings.

Error Codes:
- 1xxx: Client errors (user input, validation)
- 3xxx: Resource errors (gateway unavailable)
- 4xxx: Execution errors (schema composition, timeouts)
- 5xxx: System errors (internal, configuration)
"""

from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Structured error codes for user-friendly messages"""

    # 1xxx: Client Errors
    VALIDATION_ERROR = 1001

    # 3xxx: Resource Errors
    GATEWAY_UNAVAILABLE = 3004

    # 4xxx: Execution Errors
    COMPOSITION_FAILED = 4002
    TIMEOUT = 4003

    # 5xxx: System Errors
    INTERNAL_ERROR = 5001
    CONFIGURATION_ERROR = 5003


class ClawgateError(Exception):
    """Base exception for all clawgate errors"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging"""
        return {
            'error_type': self.__class__.__name__,
            'error_code': int(self.error_code),
            'message': self.message,
            'details': self.details
        }

    def user_message(self) -> str:
        """Get user-friendly error message based on error code"""
        code_messages = {
            ErrorCode.VALIDATION_ERROR: "Invalid input provided",
            ErrorCode.GATEWAY_UNAVAILABLE: "Gateway unavailable",
            ErrorCode.COMPOSITION_FAILED: "Configuration schema could not be built",
            ErrorCode.TIMEOUT: "Request timed out",
            ErrorCode.INTERNAL_ERROR: "Internal server error",
            ErrorCode.CONFIGURATION_ERROR: "Configuration error",
        }
        return f"Error {int(self.error_code)}: {code_messages.get(self.error_code, self.message)}"


class ValidationError(ClawgateError):
    """Raised when input validation fails"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class CompositionError(ClawgateError):
    """Raised when two extensions contribute the same id to the config schema"""

    def __init__(self, extension_id: str, message: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(
            message or f"Duplicate extension id in config schema: {extension_id}",
            ErrorCode.COMPOSITION_FAILED,
            details,
        )
        self.extension_id = extension_id


class CollaboratorError(ClawgateError):
    """Raised when config loading, workspace resolution or plugin discovery fails"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class RemoteCallError(ClawgateError):
    """Raised when a gateway call fails, times out or returns an error frame"""

    def __init__(
        self,
        method: str,
        message: str,
        error_code: ErrorCode = ErrorCode.GATEWAY_UNAVAILABLE,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code, details)
        self.method = method
