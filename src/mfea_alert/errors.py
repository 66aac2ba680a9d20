"""
MFEA ALERT - Error Taxonomy

Fatal: InsufficientData, UpstreamUnavailable (abort the run).
Non-fatal: StorageTierFailure, NotificationDispatchFailure (logged only).
"""

from __future__ import annotations


class MfeaError(Exception):
    """Base class for all MFEA ALERT errors."""

    def to_dict(self) -> dict:
        """Structured error for CLI / API output."""
        return {"error": type(self).__name__, "message": str(self)}


class InsufficientData(MfeaError):
    """Upstream series too short after filtering gaps."""


class UpstreamUnavailable(MfeaError):
    """Market data fetch failed, timed out, or returned a malformed payload."""


class StorageTierFailure(MfeaError):
    """One persistence tier failed one operation."""

    def __init__(self, tier: str, operation: str, cause: object) -> None:
        super().__init__(f"{tier} {operation} failed: {cause}")
        self.tier = tier
        self.operation = operation
        self.cause = cause


class NotificationDispatchFailure(MfeaError):
    """Webhook send or edit failed. Not retried."""
