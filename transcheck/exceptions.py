"""
Transcheck Exceptions

Exception classes shared across the package.
Kept in a leaf module so config, workspace and web layers can import them
without circular imports.
"""


class TranscheckError(Exception):
    """Base error with optional code and details."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigError(TranscheckError):
    """Raised when the configuration file cannot be read or written."""


class ProjectLoadError(TranscheckError):
    """Raised when a workspace description (angular.json) cannot be loaded."""


class PayloadError(TranscheckError):
    """Raised by the HTTP layer for malformed request bodies."""
