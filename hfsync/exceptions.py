"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class HfsyncError(Exception):
    """Base exception for all application-specific errors."""


class StartupError(HfsyncError):
    """Raised when the process cannot start a sync session at all."""


class ConfigurationError(StartupError):
    """Raised for issues related to configuration loading or validation."""


class CredentialError(StartupError):
    """Raised when the host identity needed for the download credential is unavailable."""


class ManifestError(HfsyncError):
    """Raised when the remote file index cannot be fetched or parsed."""


class DownloadError(HfsyncError):
    """Raised when a single file transfer fails."""


class HTTPStatusError(DownloadError):
    """Raised when the file server answers with a non-success status code."""

    def __init__(self, status: int, reason: str | None = None):
        self.status = status
        self.reason = reason or ""
        super().__init__(f"{status} {self.reason}".strip())
