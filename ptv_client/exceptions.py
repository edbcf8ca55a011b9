"""
Custom exceptions for PTV client library.
"""


class PTVClientError(Exception):
    """Base exception for PTV client errors."""
    pass


class ConfigurationError(PTVClientError):
    """Raised when credentials, endpoints or client configuration are invalid."""
    pass


class TransportError(PTVClientError):
    """Raised when a request cannot be completed or its body decoded."""
    pass


class HTTPError(TransportError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code
