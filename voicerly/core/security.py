"""
Security helpers for user supplied names and share ids.
"""

import re
import secrets
import string
from typing import Optional

from voicerly.config import MAX_FILENAME_LENGTH, SHORT_ID_LENGTH

__all__ = ["sanitize_filename", "validate_id", "generate_secure_id", "ID_PATTERN"]

ID_ALPHABET = string.ascii_letters + string.digits + "_-"
ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,10}")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9.-]")
_DOT_RUNS = re.compile(r"\.{2,}")
_EDGE_DOTS = re.compile(r"^\.+|\.+$")


def sanitize_filename(file_name: Optional[str]) -> str:
    """
    Strip a client supplied file name down to a storage-safe form.

    Removes everything outside ``[A-Za-z0-9.-]``, collapses dot runs,
    trims leading/trailing dots and caps the length. May return an
    empty string, which callers treat as "no usable name".
    """
    if not file_name:
        return ""

    cleaned = _UNSAFE_CHARS.sub("", file_name)
    cleaned = _DOT_RUNS.sub(".", cleaned)
    cleaned = _EDGE_DOTS.sub("", cleaned)
    return cleaned[:MAX_FILENAME_LENGTH]


def validate_id(audio_id: Optional[str]) -> bool:
    """Check that a share id is safe to embed in URLs and storage keys."""
    if not audio_id:
        return False
    return ID_PATTERN.fullmatch(audio_id) is not None


def generate_secure_id(length: int = SHORT_ID_LENGTH) -> str:
    """Draw a URL-safe short id from a cryptographically secure source."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))
