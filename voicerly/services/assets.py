"""Share, download, delete and maintenance operations on stored assets."""

from typing import Any, Dict, Optional

from voicerly.config import logger
from voicerly.core import database_ops, storage_ops
from voicerly.core.errors import (
    ClientInputError,
    NotFoundError,
    UpstreamDependencyError,
)
from voicerly.core.security import validate_id


def extract_id_from_url(url: str) -> str:
    """Return the trailing path segment of a share URL."""
    return url.split("?", 1)[0].split("#", 1)[0].split("/")[-1]


def _extension_of(record: Dict[str, Any]) -> str:
    file_name = record.get("file_name") or ""
    return file_name.rsplit(".", 1)[-1] if "." in file_name else "webm"


async def get_active_asset(short_id: Optional[str]) -> Dict[str, Any]:
    """Validate a share id and load its record."""
    if not validate_id(short_id):
        raise ClientInputError("Invalid audio ID format")

    try:
        record = await database_ops.find_audio_record_by_short_id(short_id)
    except Exception as exc:
        raise UpstreamDependencyError("Failed to look up audio file") from exc

    if not record:
        raise NotFoundError("Audio file not found")
    return record


async def resolve_share(short_id: str) -> Dict[str, Any]:
    """Everything a playback page needs for a share id."""
    record = await get_active_asset(short_id)

    try:
        audio_url = storage_ops.generate_public_url(record["storage_path"])
    except Exception as exc:
        raise UpstreamDependencyError("Failed to resolve audio URL") from exc

    return {
        "id": short_id,
        "file_name": record.get("file_name"),
        "original_name": record.get("original_name"),
        "file_size": record.get("file_size"),
        "mime_type": record.get("mime_type"),
        "created_at": record.get("created_at"),
        "download_count": record.get("download_count") or 0,
        "audio_url": audio_url,
    }


async def register_download(short_id: str) -> Dict[str, Any]:
    """Count an explicit download and return where to fetch the file."""
    record = await get_active_asset(short_id)

    try:
        download_count = await database_ops.update_download_count(record["id"])
        audio_url = storage_ops.generate_public_url(record["storage_path"])
    except Exception as exc:
        raise UpstreamDependencyError("Failed to register download") from exc

    return {
        "id": short_id,
        "download_count": download_count,
        "audio_url": audio_url,
        "download_name": f"recording-{short_id}.{_extension_of(record)}",
    }


async def delete_asset(url: Optional[str]) -> Dict[str, Any]:
    """
    Delete the asset a share URL points to.

    A failing storage delete is logged and the record is removed anyway,
    so a stray object in the bucket is preferred over an undeletable link.
    """
    if not url:
        raise ClientInputError("No URL provided")

    short_id = extract_id_from_url(url)
    record = await get_active_asset(short_id)

    try:
        await storage_ops.delete_file(record["storage_path"])
    except Exception as exc:
        logger.error(
            "Error deleting from storage",
            extra={"short_id": short_id, "error": str(exc)},
        )

    try:
        await database_ops.delete_audio_record(record["id"])
    except Exception as exc:
        raise UpstreamDependencyError("Failed to delete audio file") from exc

    logger.info("Audio file deleted", extra={"short_id": short_id})
    return {"success": True, "message": "Audio file deleted successfully"}


async def get_stats() -> Dict[str, Any]:
    try:
        return await database_ops.get_file_stats()
    except Exception as exc:
        raise UpstreamDependencyError("Internal server error") from exc


async def cleanup() -> Dict[str, Any]:
    try:
        result = await database_ops.delete_expired_files()
    except Exception as exc:
        raise UpstreamDependencyError("Internal server error during cleanup") from exc

    return {
        "success": True,
        "deleted_count": result["deleted_count"],
        "total_size_deleted": result["total_size"],
        "message": result["message"],
    }
