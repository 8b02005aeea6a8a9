"""Utility helpers for the upload router."""

from typing import Optional

from fastapi import Request

from voicerly.config import PUBLIC_BASE_URL


def get_client_ip(request: Request) -> Optional[str]:
    """Extract the requester IP from common proxy headers."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    cf_ip = request.headers.get("CF-Connecting-IP")
    if cf_ip:
        return cf_ip

    if request.client:
        return request.client.host

    return None


def get_base_url(request: Request) -> str:
    """Base URL for share links: configured value, then Origin, then this server."""
    if PUBLIC_BASE_URL:
        return PUBLIC_BASE_URL.rstrip("/")

    origin = request.headers.get("Origin")
    if origin:
        return origin.rstrip("/")

    return str(request.base_url).rstrip("/")
