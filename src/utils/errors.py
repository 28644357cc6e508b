"""Error handling utilities for HTTP RGB lights.

Provides the exception taxonomy raised by the driver and a structured error
type the CLI uses to report failures with recovery suggestions.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling."""

    CONFIGURATION_MISSING = "configuration_missing"
    CONFIGURATION_ERROR = "configuration_error"
    TRANSPORT = "transport"
    PARSE = "parse"
    UNSUPPORTED = "unsupported"
    DEVICE_NOT_FOUND = "device_not_found"
    INVALID_INPUT = "invalid_input"
    TIMEOUT = "timeout"
    INTERNAL_ERROR = "internal_error"


@dataclass
class ToolError:
    """Structured error response for CLI output."""

    category: ErrorCategory
    message: str
    device_id: str | None = None
    recovery: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to response dict."""
        result: dict[str, Any] = {
            "error": self.message,
            "error_category": self.category.value,
        }
        if self.device_id:
            result["device_id"] = self.device_id
        if self.recovery:
            result["recovery"] = self.recovery
        if self.details:
            result["details"] = self.details
        return result


RECOVERY_SUGGESTIONS = {
    ErrorCategory.CONFIGURATION_MISSING: "Add the missing URL to the light's section in config.yaml.",
    ErrorCategory.CONFIGURATION_ERROR: "Check the shape of the light's section in config.yaml.",
    ErrorCategory.TRANSPORT: "Device may be unreachable. Check network connectivity and try again.",
    ErrorCategory.PARSE: "The device returned an unexpected response. Check the status URL.",
    ErrorCategory.UNSUPPORTED: "This light does not expose that capability.",
    ErrorCategory.DEVICE_NOT_FOUND: "Use 'list' to see configured lights.",
    ErrorCategory.INVALID_INPUT: "Check parameter values and try again.",
    ErrorCategory.TIMEOUT: "Device may be unresponsive. Check network connectivity and try again.",
    ErrorCategory.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}


def get_recovery_suggestion(category: ErrorCategory) -> str:
    """Get recovery suggestion for an error category."""
    return RECOVERY_SUGGESTIONS.get(category, "Please try again.")


class LightError(Exception):
    """Base class for errors raised by light operations."""

    category = ErrorCategory.INTERNAL_ERROR

    def __init__(self, message: str, device_id: str | None = None):
        self.device_id = device_id
        super().__init__(message)


class ConfigurationMissing(LightError):
    """Raised when a URL required by an operation was never configured."""

    category = ErrorCategory.CONFIGURATION_MISSING


class ConfigurationError(LightError):
    """Raised when a configured value has the wrong shape."""

    category = ErrorCategory.CONFIGURATION_ERROR


class TransportError(LightError):
    """Raised when the HTTP request to the device fails."""

    category = ErrorCategory.TRANSPORT

    def __init__(
        self,
        message: str,
        device_id: str | None = None,
        status_code: int | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, device_id)


class ParseError(LightError):
    """Raised when a device response cannot be interpreted."""

    category = ErrorCategory.PARSE

    def __init__(self, message: str, body: str, device_id: str | None = None):
        self.body = body
        super().__init__(message, device_id)


class UnsupportedCapability(LightError):
    """Raised when an operation targets a capability the light lacks."""

    category = ErrorCategory.UNSUPPORTED

    def __init__(self, capability: str, device_id: str | None = None):
        self.capability = capability
        super().__init__(f"No '{capability}' defined in configuration", device_id)


class DeviceNotFoundError(LightError):
    """Raised when a light id is not configured."""

    category = ErrorCategory.DEVICE_NOT_FOUND

    def __init__(self, device_id: str):
        super().__init__(f"Light {device_id} not found", device_id)


def classify_exception(e: Exception, device_id: str | None = None) -> ToolError:
    """Classify an exception into a structured error.

    Args:
        e: The exception to classify
        device_id: Optional device ID for context

    Returns:
        ToolError with appropriate category and recovery suggestion
    """
    details: dict[str, Any] = {}

    if isinstance(e, LightError):
        category = e.category
        message = str(e)
        device_id = e.device_id or device_id
        if isinstance(e, TransportError) and e.status_code is not None:
            details["status_code"] = e.status_code
        elif isinstance(e, ParseError):
            details["body"] = e.body
    elif isinstance(e, asyncio.TimeoutError):
        category = ErrorCategory.TIMEOUT
        message = "Operation timed out"
        if device_id:
            message = f"Light {device_id} operation timed out"
    elif isinstance(e, ValueError):
        category = ErrorCategory.INVALID_INPUT
        message = str(e)
    elif isinstance(e, ConnectionError):
        category = ErrorCategory.TRANSPORT
        message = f"Connection error: {e}"
    else:
        category = ErrorCategory.INTERNAL_ERROR
        message = f"Unexpected error: {e}"

    return ToolError(
        category=category,
        message=message,
        device_id=device_id,
        recovery=get_recovery_suggestion(category),
        details=details,
    )
