"""Custom exceptions for wine-lens."""


class WineLensError(Exception):
    """Base exception for wine-lens."""

    pass


class AuthenticationError(WineLensError):
    """Raised when an API key is invalid or missing."""

    pass


class RateLimitError(WineLensError):
    """Raised when API rate limit is exceeded."""

    pass


class ImageError(WineLensError):
    """Raised when image cannot be read or is invalid."""

    pass


class SearchError(WineLensError):
    """Raised when the wine search service fails or returns garbage."""

    pass
