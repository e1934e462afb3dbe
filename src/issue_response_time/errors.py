"""Custom exception types for the issue response time report."""


class ResponseTimeError(Exception):
    """Base exception for all recoverable response time report errors."""


class ConfigurationError(ResponseTimeError):
    """Raised when runtime configuration values are missing or invalid."""


class AuthenticationError(ResponseTimeError):
    """Raised when GitHub credentials are unavailable or rejected."""


class TransportError(ResponseTimeError):
    """Raised when a GitHub API request fails, times out, or returns an unusable response."""


class DataShapeError(ResponseTimeError):
    """Raised when an API payload is missing a field the analysis cannot do without."""
