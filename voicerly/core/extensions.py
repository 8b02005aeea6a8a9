"""Canonical file extension lookup for uploaded audio."""

from typing import Optional

from voicerly.config import ALLOWED_EXTENSIONS, DEFAULT_EXTENSION

# Checked in order; the first token found in the MIME type wins.
MIME_TOKEN_EXTENSIONS = [
    (("mp4", "m4a"), "mp4"),
    (("webm",), "webm"),
    (("wav",), "wav"),
    (("ogg",), "ogg"),
    (("mp3", "mpeg"), "mp3"),
    (("aac",), "aac"),
]


def extension_from_mime(mime_type: Optional[str]) -> Optional[str]:
    """Map a declared MIME type to an extension, or None if it names no known sub-type."""
    if not mime_type:
        return None

    mime_type = mime_type.lower()
    for tokens, extension in MIME_TOKEN_EXTENSIONS:
        if any(token in mime_type for token in tokens):
            return extension
    return None


def resolve_extension(mime_type: Optional[str], sanitized_name: str) -> str:
    """
    Pick the extension the stored object will carry.

    The declared MIME type is preferred because browsers report it more
    consistently than users name files. A name-derived extension is used
    when it is allow-listed, and ``webm`` otherwise.
    """
    extension = extension_from_mime(mime_type)
    if extension:
        return extension

    if sanitized_name and "." in sanitized_name:
        name_extension = sanitized_name.rsplit(".", 1)[-1].lower()
        if name_extension in ALLOWED_EXTENSIONS:
            return name_extension

    return DEFAULT_EXTENSION
