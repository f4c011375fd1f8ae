"""Custom exception types for the Drone release tracker."""


class ReleaseTrackerError(Exception):
    """Base exception for all recoverable release tracker errors."""


class ConfigurationError(ReleaseTrackerError):
    """Raised when runtime configuration values are missing or invalid."""


class AuthenticationError(ReleaseTrackerError):
    """Raised when Drone credentials are unavailable or rejected by the server."""


class ApiError(ReleaseTrackerError):
    """Raised when a Drone API request fails or returns an unexpected response."""


class RenderError(ReleaseTrackerError):
    """Raised when the calendar heatmap collaborator cannot produce an image."""
