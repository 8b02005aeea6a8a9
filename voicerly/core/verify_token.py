"""
Bearer token validation for the maintenance endpoints
"""

import hmac
from typing import Optional

from voicerly.core.errors import UnauthorizedError, VoicerlyError

__all__ = ["verify_bearer_token"]


def verify_bearer_token(
    authorization: Optional[str], expected_token: Optional[str] = None
) -> bool:
    """
    Validate an ``Authorization: Bearer <token>`` header.

    Args:
        authorization: Raw Authorization header value
        expected_token: Expected token. If None, the server is misconfigured.

    Returns:
        True if validation succeeds

    Raises:
        UnauthorizedError: If the header is missing or does not match
        VoicerlyError: 500 if no token is configured
    """
    if not expected_token:
        raise VoicerlyError("Server configuration error: CLEANUP_TOKEN not configured")

    if not authorization:
        raise UnauthorizedError("Unauthorized")

    if not hmac.compare_digest(
        authorization.encode("utf-8"), f"Bearer {expected_token}".encode("utf-8")
    ):
        raise UnauthorizedError("Unauthorized")

    return True
