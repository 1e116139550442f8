"""
Centralized exception hierarchy for the Tumblr client.

Every failure path in the client surfaces one of these types, so callers can
handle errors at whatever granularity they need:

- ``ArgumentError``: caller input rejected before any network I/O
- ``InvalidOperationError``: missing OAuth token or a closed client
- ``ApiError``: the platform answered with a non-2xx envelope
- ``TransportError``: the request never produced an HTTP response
- ``DecodingError``: the response could not be mapped onto the typed model
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class TumblrClientError(Exception):
    """
    Base exception for all Tumblr client errors.

    All custom exceptions in the client inherit from this class,
    allowing for broad exception handling when needed.
    """

    def __init__(self, message: str, details: Optional[str] = None):
        """
        Initialize the exception.

        Args:
            message: Primary error message
            details: Additional details or context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ArgumentError(TumblrClientError, ValueError):
    """
    Raised when caller input is rejected before a request is built.

    Examples:
        - Empty blog name
        - Offset below zero or limit outside 1..20
        - Filtered content longer than 250 characters
    """

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        argument: Optional[str] = None
    ):
        """
        Initialize argument error.

        Args:
            message: Primary error message
            details: Additional details about the error
            argument: Name of the offending argument
        """
        super().__init__(message, details)
        self.argument = argument

    def __str__(self) -> str:
        """Return formatted error message with the argument name."""
        if self.argument:
            return f"{super().__str__()} (argument: {self.argument})"
        return super().__str__()


class InvalidOperationError(TumblrClientError):
    """
    Raised when an operation cannot run in the client's current state.

    Examples:
        - Operation requires an OAuth token but none was supplied
        - Client has already been closed
    """
    pass


class ApiErrorDetail(BaseModel):
    """One entry of the ``errors`` array in a failed response envelope."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: Optional[str] = None
    detail: Optional[str] = None
    code: Optional[int] = None


class ApiError(TumblrClientError):
    """
    Raised when the platform returns a non-2xx status.

    Carries the HTTP/meta status, the ``meta.msg`` text and the structured
    ``errors`` list when the platform sends one.
    """

    def __init__(
        self,
        message: str,
        status: int,
        errors: Optional[List[ApiErrorDetail]] = None,
        details: Optional[str] = None,
        url: Optional[str] = None
    ):
        """
        Initialize API error.

        Args:
            message: Status message reported by the platform
            status: HTTP status or ``meta.status`` value
            errors: Structured error entries from the response
            details: Additional details about the error
            url: URL of the failed request
        """
        super().__init__(message, details)
        self.status = status
        self.errors = list(errors or [])
        self.url = url

    def __str__(self) -> str:
        """Return formatted error message with status and error titles."""
        parts = [self.message, f"(HTTP {self.status})"]

        if self.url:
            parts.append(f"URL: {self.url}")

        for error in self.errors:
            parts.append(f"- {error.title or ''} {error.detail or ''}".rstrip())

        if self.details:
            parts.append(f"- {self.details}")

        return " ".join(parts)


class TransportError(TumblrClientError):
    """
    Raised when the transport fails before an HTTP response is available.

    Examples:
        - Connection timeout
        - DNS resolution failure
        - SSL/TLS errors
    """

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        url: Optional[str] = None
    ):
        """
        Initialize transport error.

        Args:
            message: Primary error message
            details: Additional details about the error
            url: URL that caused the error
        """
        super().__init__(message, details)
        self.url = url

    def __str__(self) -> str:
        """Return formatted error message with URL."""
        parts = [self.message]

        if self.url:
            parts.append(f"URL: {self.url}")

        if self.details:
            parts.append(f"- {self.details}")

        return " ".join(parts)


class DecodingError(TumblrClientError, ValueError):
    """
    Raised when a well-formed envelope carries a payload that does not fit
    the expected model.

    Subclasses ``ValueError`` so that pydantic folds converter failures into
    its ``ValidationError`` reporting.

    Examples:
        - Response body is not JSON
        - ``response`` member missing from the envelope
        - A post entry that is not a JSON object
    """
    pass


class ConfigurationError(TumblrClientError):
    """
    Raised when configuration loading or validation fails.

    Examples:
        - Missing consumer key
        - Negative timeout value
        - Unreadable config file
    """
    pass


__all__ = [
    "TumblrClientError",
    "ArgumentError",
    "InvalidOperationError",
    "ApiErrorDetail",
    "ApiError",
    "TransportError",
    "DecodingError",
    "ConfigurationError",
]
