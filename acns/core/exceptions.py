"""
Custom Exceptions - Application-specific error classes.

This module defines a hierarchy of exceptions for clean error handling:
- Each exception has a status code and error code
- Used by the API layer for consistent error responses
- No stack traces leaked in production
"""
from typing import Optional


class ACNSException(Exception):
    """
    Base exception for all application errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ConfigurationError(ACNSException):
    """Raised when no Gemini credentials are available."""
    status_code = 503
    error_code = "ai_not_configured"

    def __init__(self, message: str = "AI service is not configured"):
        super().__init__(message)


class ValidationError(ACNSException):
    """Raised when input validation fails."""
    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details=f"field={field}" if field else None)
        self.field = field


class NotFoundError(ACNSException):
    """Raised when a requested content item does not exist."""
    status_code = 404
    error_code = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class UpstreamError(ACNSException):
    """Raised when the Gemini call fails or times out."""
    status_code = 500
    error_code = "upstream_error"

    def __init__(self, message: str = "AI service request failed", details: Optional[str] = None):
        super().__init__(message, details=details)


class AuthenticationError(ACNSException):
    """Raised when an admin-only route is called without a valid token."""
    status_code = 401
    error_code = "unauthorized"

    def __init__(self, message: str = "Access token is required"):
        super().__init__(message)


class RateLimitExceeded(ACNSException):
    """Raised when a client exceeds the rate limit."""
    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(self, retry_after: int = 60):
        super().__init__(
            message="Too many AI requests. Please wait a moment and try again.",
            details=f"retry_after={retry_after}"
        )
        self.retry_after = retry_after
