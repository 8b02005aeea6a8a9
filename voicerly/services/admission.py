"""
Upload admission pipeline.
Decides whether an uploaded blob becomes a stored, shareable audio asset.
"""

from voicerly.config import MAX_FILE_SIZE, logger
from voicerly.core import database_ops, storage_ops
from voicerly.core.errors import (
    ClientInputError,
    RateLimitError,
    UpstreamDependencyError,
)
from voicerly.core.extensions import resolve_extension
from voicerly.core.security import generate_secure_id, sanitize_filename
from voicerly.core.validation import too_large_error, validate_audio_file

from .contexts import AdmissionResult, AssetMetadata, UploadRequest

ID_ATTEMPTS = 3


async def generate_unique_id() -> str:
    """Draw a short id that no existing record uses yet."""
    for _ in range(ID_ATTEMPTS):
        short_id = generate_secure_id()
        if await database_ops.find_audio_record_by_short_id(short_id) is None:
            return short_id
        logger.warning(f"Short id collision on {short_id}, drawing again")

    raise UpstreamDependencyError(
        f"Could not allocate a unique audio id after {ID_ATTEMPTS} attempts"
    )


async def store_asset(payload: bytes, metadata: AssetMetadata) -> dict:
    """
    Write the payload to storage, then its metadata row.

    The row references the storage path, so the upload has to finish first.
    If the row cannot be written the stored object is removed again.
    """
    metadata.storage_path = await storage_ops.upload_audio_file(
        payload, metadata.file_name, metadata.mime_type
    )

    try:
        return await database_ops.create_audio_record(metadata.to_record())
    except Exception:
        try:
            await storage_ops.delete_file(metadata.storage_path)
        except Exception as cleanup_exc:
            logger.warning(
                "Failed to cleanup orphaned file",
                extra={"path": metadata.storage_path, "error": str(cleanup_exc)},
            )
        raise


async def admit_upload(
    upload: UploadRequest, rate_limiter, base_url: str
) -> AdmissionResult:
    """
    Run an upload through rate limiting, validation and storage.

    Raises:
        RateLimitError: The client used up its hourly allowance
        ClientInputError: Missing payload or invalid audio
        UpstreamDependencyError: Storage or database failure
    """
    client_key = upload.client_address or "unknown"

    if not await rate_limiter.check_and_consume(client_key):
        raise RateLimitError(
            f"Rate limit exceeded. Maximum {rate_limiter.max_requests} uploads per hour."
        )

    if upload.declared_size is not None and upload.declared_size > MAX_FILE_SIZE:
        raise ClientInputError(too_large_error())

    if upload.payload is None and upload.loader is not None:
        upload.payload = await upload.loader()

    if upload.payload is None:
        raise ClientInputError("No audio file provided")

    sanitized_name = sanitize_filename(upload.file_name)
    extension = resolve_extension(upload.mime_type, sanitized_name)

    validation = validate_audio_file(upload.payload, extension, upload.mime_type)
    if not validation.valid:
        logger.info(
            "Upload rejected",
            extra={"client_key": client_key, "reason": validation.error},
        )
        raise ClientInputError(validation.error or "Invalid audio file")

    try:
        short_id = await generate_unique_id()
        metadata = AssetMetadata(
            short_id=short_id,
            file_name=f"{short_id}.{extension}",
            original_name=sanitized_name,
            file_size=len(upload.payload),
            mime_type=upload.mime_type or f"audio/{extension}",
            storage_path="",
        )
        record = await store_asset(upload.payload, metadata)
    except UpstreamDependencyError:
        raise
    except Exception as exc:
        logger.error("Supabase error during upload", extra={"error": str(exc)})
        raise UpstreamDependencyError("Failed to upload file to storage") from exc

    url = f"{base_url.rstrip('/')}/share/{short_id}"

    logger.info(
        "Upload admitted",
        extra={
            "short_id": short_id,
            "record_id": record.get("id"),
            "file_size": metadata.file_size,
            "detected_format": validation.detected_format,
        },
    )

    return AdmissionResult(
        url=url,
        short_id=short_id,
        document_id=str(record.get("id")),
        storage_file_id=metadata.storage_path,
        metadata=metadata,
        record=record,
    )
