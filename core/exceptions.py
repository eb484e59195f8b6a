"""Custom exception classes for the application.

Defines domain-specific exceptions that can be raised throughout the
application and handled consistently by exception handlers. The diet parser
never raises; these cover the glue around it (uploads, credential, AI
providers and PDF compositing).
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize application exception.

        Args:
            message: Error message.
            status_code: HTTP status code (default: 500).
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any = None):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'ApiCredential').
            identifier: Optional identifier that was not found.
        """
        if identifier is None:
            message = f"{resource} not found"
        else:
            message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class ValidationError(AppException):
    """Exception raised when user input is missing or invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        """Initialize validation error.

        Args:
            message: Validation error message.
            field: Optional field name that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class DatabaseError(AppException):
    """Exception raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class ConfigurationError(AppException):
    """Exception raised when a required setting (e.g. the AI credential) is missing."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        """Initialize configuration error.

        Args:
            message: Configuration error message.
            config_key: Optional configuration key that is missing or invalid.
        """
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, status_code=400, details=details)


class DocumentError(AppException):
    """Exception raised when a PDF or page image cannot be read or spliced."""

    def __init__(self, message: str, index: Optional[int] = None):
        details = {"index": index} if index is not None else {}
        super().__init__(message, status_code=400, details=details)


class ProviderError(AppException):
    """Exception raised when an upstream AI provider call fails.

    The provider's own message is kept verbatim so it can be surfaced to
    the user unchanged.
    """

    def __init__(self, message: str, provider: Optional[str] = None, status_code: int = 502):
        details = {"provider": provider} if provider else {}
        super().__init__(message, status_code=status_code, details=details)


class RateLimitError(ProviderError):
    """Upstream rate limit. Aborts the provider fallback chain immediately."""

    def __init__(self, provider: Optional[str] = None):
        super().__init__(
            "⚠️ ضغط كبير على السيرفر (Rate Limit). يرجى الانتظار دقيقة والمحاولة مجدداً.",
            provider=provider,
            status_code=429,
        )
