"""
Domain errors raised by the storage and service layers.

Handlers in ``main.py`` translate each class into an HTTP status and
the standard response envelope, so services never deal with HTTP.
"""


class RazorTrackerError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(RazorTrackerError):
    """The requested entity does not exist."""


class DanglingReferenceError(RazorTrackerError):
    """A usage record refers to a razor or blade that does not exist."""


class BackendUnavailableError(RazorTrackerError):
    """The durable store failed, or the active backend cannot do this."""


class ValidationFailureError(RazorTrackerError):
    """Input was rejected before reaching the storage layer."""
