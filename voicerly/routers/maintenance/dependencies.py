"""FastAPI dependencies for the maintenance endpoints."""

from typing import Optional

from fastapi import Header

from voicerly import config
from voicerly.core.verify_token import verify_bearer_token


async def require_cleanup_token(
    authorization: Optional[str] = Header(default=None),
) -> None:
    """Reject the request unless it carries ``Bearer {CLEANUP_TOKEN}``."""
    verify_bearer_token(authorization, config.CLEANUP_TOKEN)
