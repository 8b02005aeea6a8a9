"""
Audio payload validation.
Structural checks first, then magic-byte sniffing on the file header.
"""

from dataclasses import dataclass
from typing import Optional

from voicerly.config import (
    ALLOWED_AUDIO_TYPES,
    ALLOWED_EXTENSIONS,
    MAX_FILE_SIZE,
    STRICT_AUDIO_SIGNATURES,
    logger,
)

HEADER_LENGTH = 12


@dataclass
class ValidationResult:
    valid: bool
    error: Optional[str] = None
    detected_format: Optional[str] = None


def _is_webm(header: bytes) -> bool:
    return header[0] == 0x1A and header[1] == 0x45


def _is_mp4(header: bytes) -> bool:
    return header[4:8] == b"ftyp"


def _is_mp3(header: bytes) -> bool:
    return header[0] == 0xFF and (header[1] & 0xE0) == 0xE0


def _is_wav(header: bytes) -> bool:
    return header[0:4] == b"RIFF"


def _is_ogg(header: bytes) -> bool:
    return header[0:4] == b"OggS"


AUDIO_SIGNATURES = [
    ("webm", _is_webm),
    ("mp4", _is_mp4),
    ("mp3", _is_mp3),
    ("wav", _is_wav),
    ("ogg", _is_ogg),
]


def sniff_audio_format(payload: bytes) -> Optional[str]:
    """Return the container named by the payload's magic bytes, if any."""
    if len(payload) <= HEADER_LENGTH:
        return None

    header = payload[:HEADER_LENGTH]
    for name, check in AUDIO_SIGNATURES:
        if check(header):
            return name
    return None


def too_large_error() -> str:
    return f"File too large. Maximum size is {MAX_FILE_SIZE // (1024 * 1024)}MB"


def normalize_mime_type(mime_type: Optional[str]) -> str:
    """Drop parameters such as ``;codecs=opus`` and lower-case the type."""
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


def validate_audio_file(
    payload: bytes,
    extension: str,
    mime_type: Optional[str] = None,
    strict: Optional[bool] = None,
) -> ValidationResult:
    """
    Decide whether an uploaded payload is acceptable audio.

    Args:
        payload: Raw uploaded bytes
        extension: Extension chosen by the extension resolver
        mime_type: MIME type declared by the client
        strict: Reject on unknown signatures regardless of declared type.
            Defaults to the STRICT_AUDIO_SIGNATURES setting.

    Returns:
        ValidationResult with ``valid`` and, on rejection, a readable ``error``
    """
    if strict is None:
        strict = STRICT_AUDIO_SIGNATURES

    size = len(payload)
    if size == 0:
        return ValidationResult(valid=False, error="File is empty")

    if size > MAX_FILE_SIZE:
        return ValidationResult(valid=False, error=too_large_error())

    if not extension or extension.lower() not in ALLOWED_EXTENSIONS:
        return ValidationResult(
            valid=False,
            error="Invalid file extension. Only audio files are allowed",
        )

    # Short payloads cannot hold a full header
    if size <= HEADER_LENGTH:
        return ValidationResult(valid=True)

    detected = sniff_audio_format(payload)
    if detected:
        return ValidationResult(valid=True, detected_format=detected)

    # Some browsers record containers that match no single signature
    has_valid_mime = normalize_mime_type(mime_type) in ALLOWED_AUDIO_TYPES
    has_valid_extension = extension.lower() in ALLOWED_EXTENSIONS

    if not strict and (has_valid_mime or has_valid_extension):
        logger.debug(
            "Audio signature not recognised, accepted on declared type",
            extra={"mime_type": mime_type, "extension": extension},
        )
        return ValidationResult(valid=True)

    logger.warning(
        "Rejected upload with unrecognised audio header",
        extra={"mime_type": mime_type, "extension": extension, "strict": strict},
    )
    return ValidationResult(valid=False, error="Invalid audio file format")
