"""Structured exception classes for hc."""

import json
from typing import Any, Dict, Optional


class HCError(Exception):
    """Base exception for all hc errors.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict())


class TransportError(HCError):
    """Raised when a request cannot be built, sent or received.

    Wraps the error raised by the underlying HTTP library. The original
    exception is kept on ``original_error`` and chained as ``__cause__``.

    :param message: Description of the transport failure
    :param method: Optional HTTP method of the failed request
    :param url: Optional URL of the failed request
    :param original_error: Optional exception raised by the HTTP library
    """

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """Initialize transport error with message and request context."""
        details: Dict[str, Any] = {}
        if method:
            details["method"] = method
        if url is not None:
            details["url"] = url
        if original_error:
            details["original_error"] = str(original_error)
            details["error_type"] = type(original_error).__name__
        super().__init__(message=message, code="TRANSPORT_ERROR", details=details)
        self.method = method
        self.url = url
        self.original_error = original_error


class TimeoutError(TransportError):
    """Raised when a read or write timeout is exceeded."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """Initialize timeout error with message and request context."""
        super().__init__(
            message, method=method, url=url, original_error=original_error
        )
        self.code = "TIMEOUT_ERROR"


class SerializationError(HCError):
    """Raised when a JSON body cannot be encoded or decoded.

    :param message: Description of the serialization failure
    :param original_error: Optional exception raised by the JSON layer
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        """Initialize serialization error with message and optional cause."""
        details = {}
        if original_error:
            details["original_error"] = str(original_error)
            details["error_type"] = type(original_error).__name__
        super().__init__(message=message, code="SERIALIZATION_ERROR", details=details)
        self.original_error = original_error


class JSONEncodeError(SerializationError):
    """Raised when a value cannot be written as a JSON request body."""


class JSONDecodeError(SerializationError):
    """Raised when a response body is not valid JSON for the target type."""


class ConfigurationError(HCError):
    """Raised for configuration-related errors.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)
