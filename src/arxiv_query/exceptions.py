"""Custom exceptions for the arXiv query client."""

from typing import Optional, Any, Dict


class ArxivQueryError(Exception):
    """Base exception for all arXiv query related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ArxivQueryError):
    """Raised when there are configuration-related issues."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        details = {}
        if config_key:
            details['config_key'] = config_key
        super().__init__(message, details)


class TransportError(ArxivQueryError):
    """Raised when the HTTP request fails or its deadline expires."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        original_error: Optional[BaseException] = None
    ):
        self.url = url
        self.original_error = original_error
        details = {}
        if url:
            details['url'] = url
        if original_error is not None:
            details['original_error'] = str(original_error)
            details['error_type'] = type(original_error).__name__
        super().__init__(message, details)


class FeedDecodeError(ArxivQueryError):
    """Raised when a response body is not a well-formed arXiv Atom feed."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        self.original_error = original_error
        details = {}
        if original_error is not None:
            details['original_error'] = str(original_error)
            details['error_type'] = type(original_error).__name__
        super().__init__(message, details)


def format_error_for_user(error: Exception) -> str:
    """
    Format an error for user-friendly display.

    Args:
        error: The exception to format

    Returns:
        User-friendly error message
    """
    if isinstance(error, TransportError):
        return f"Network error: {error.message}. Please check your internet connection."

    elif isinstance(error, FeedDecodeError):
        return f"Could not read the arXiv response: {error.message}"

    elif isinstance(error, ConfigurationError):
        key_msg = f" (key: {error.config_key})" if error.config_key else ""
        return f"Configuration error: {error.message}{key_msg}"

    elif isinstance(error, ArxivQueryError):
        return f"Error: {error.message}"

    else:
        return f"Unexpected error: {str(error)}"
