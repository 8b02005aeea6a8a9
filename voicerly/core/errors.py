"""Error types raised by the admission pipeline and asset services."""

from typing import Dict, Optional


class VoicerlyError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    status_code = 500

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.headers = headers


class ClientInputError(VoicerlyError):
    """Raised when the request itself is unusable (missing file, bad id, bad format)."""

    status_code = 400


class UnauthorizedError(VoicerlyError):
    """Raised when a maintenance endpoint is called without a valid token."""

    status_code = 401


class NotFoundError(VoicerlyError):
    """Raised when an asset does not exist or was already deleted."""

    status_code = 404


class RateLimitError(VoicerlyError):
    """Raised when the caller has used up its upload allowance."""

    status_code = 429


class UpstreamDependencyError(VoicerlyError):
    """Raised when Supabase Storage or the metadata table fails."""

    status_code = 500
