"""
Database operations module for the Supabase audio_files table.
Handles all CRUD operations for shared audio records.
"""

from typing import Optional, Dict, Any

from voicerly.config import logger, AUDIO_FILES_TABLE
from voicerly.core.retry import with_retry
from voicerly.db import get_supabase_client


def _like_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def create_audio_record(record_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a new audio record in the database.

    Args:
        record_data: Column values (file_name, original_name, file_size,
            mime_type, storage_path, is_active)

    Returns:
        Dict containing the created record with 'id' field

    Raises:
        Exception: If database operation fails
    """
    try:
        client = get_supabase_client()

        logger.info(f"Creating audio record for file: {record_data.get('file_name')}")

        response = client.table(AUDIO_FILES_TABLE).insert(record_data).execute()

        if response.data and len(response.data) > 0:
            record = response.data[0]
            logger.info(f"Successfully created audio record with ID: {record.get('id')}")
            return record
        else:
            error_msg = "Failed to create audio record: No data returned"
            logger.error(error_msg)
            raise Exception(error_msg)

    except Exception as e:
        logger.error(f"Error creating audio record: {e}")
        raise


async def find_audio_record_by_short_id(short_id: str) -> Optional[Dict[str, Any]]:
    """
    Find the active record whose file name starts with ``{short_id}.``.

    Args:
        short_id: Share id embedded in the file name

    Returns:
        Dict containing the record data, or None if not found

    Raises:
        Exception: If database operation fails
    """
    try:
        client = get_supabase_client()

        pattern = f"{_like_escape(short_id)}.%"
        logger.debug(f"Looking up audio record with pattern {pattern}")

        response = (
            client.table(AUDIO_FILES_TABLE)
            .select("*")
            .like("file_name", pattern)
            .eq("is_active", True)
            .limit(1)
            .execute()
        )

        if response.data and len(response.data) > 0:
            return response.data[0]

        logger.info(f"Audio record {short_id} not found")
        return None

    except Exception as e:
        logger.error(f"Error finding audio record {short_id}: {e}")
        raise


async def update_download_count(record_id: str) -> int:
    """
    Increment the download counter of a record.

    Args:
        record_id: Primary key of the record

    Returns:
        int: The new download count

    Raises:
        Exception: If database operation fails
    """
    try:
        client = get_supabase_client()

        response = (
            client.table(AUDIO_FILES_TABLE)
            .select("download_count")
            .eq("id", record_id)
            .execute()
        )
        if not response.data:
            raise Exception(f"Audio record {record_id} not found")

        new_count = (response.data[0].get("download_count") or 0) + 1

        client.table(AUDIO_FILES_TABLE).update({"download_count": new_count}).eq(
            "id", record_id
        ).execute()

        logger.info(f"Download count for {record_id} is now {new_count}")
        return new_count

    except Exception as e:
        logger.error(f"Error updating download count for {record_id}: {e}")
        raise


async def delete_audio_record(record_id: str) -> bool:
    """
    Delete an audio record from the database.

    Args:
        record_id: Primary key of the record

    Returns:
        bool: True if deletion was successful

    Raises:
        Exception: If database operation fails
    """
    try:
        client = get_supabase_client()

        logger.info(f"Deleting audio record: {record_id}")

        client.table(AUDIO_FILES_TABLE).delete().eq("id", record_id).execute()

        logger.info(f"Successfully deleted audio record: {record_id}")
        return True

    except Exception as e:
        logger.error(f"Error deleting audio record {record_id}: {e}")
        raise


async def _fetch_active_sizes() -> list:
    client = get_supabase_client()
    response = (
        client.table(AUDIO_FILES_TABLE)
        .select("file_size")
        .eq("is_active", True)
        .execute()
    )
    return response.data or []


async def get_file_stats() -> Dict[str, Any]:
    """
    Aggregate counts and sizes of stored audio files.

    Files never expire, so the "old files" figures are always zero.

    Raises:
        Exception: If database operation fails
    """
    try:
        records = await with_retry(_fetch_active_sizes)

        total_size = sum(record.get("file_size") or 0 for record in records)

        return {
            "total_files": len(records),
            "total_size": total_size,
            "total_size_mb": f"{total_size / 1024 / 1024:.2f}",
            "old_files": 0,
            "old_files_size": 0,
            "old_files_size_mb": "0.00",
            "max_age_hours": 0,
        }

    except Exception as e:
        logger.error(f"Error getting file stats: {e}")
        raise


async def delete_expired_files() -> Dict[str, Any]:
    """
    Cleanup hook for expired files.

    Files are permanent, so nothing is deleted; the current totals are
    reported instead.
    """
    stats = await get_file_stats()

    return {
        "deleted_count": 0,
        "total_size": stats["total_size"],
        "message": (
            "No files deleted - all files are permanent. "
            f"Total files: {stats['total_files']}, "
            f"Total size: {stats['total_size_mb']} MB"
        ),
    }
