"""
Storage operations module for Supabase Storage.
Handles upload, public URL and delete operations for audio files.
"""

from voicerly.config import logger, STORAGE_BUCKET
from voicerly.db import get_supabase_client


def generate_public_url(path: str) -> str:
    """
    Generate a public URL for a file in Supabase Storage.

    Args:
        path: Path to the file in storage (e.g., 'aB3dE_9xYz.webm')

    Returns:
        str: Public URL to access the file
    """
    try:
        client = get_supabase_client()

        public_url = client.storage.from_(STORAGE_BUCKET).get_public_url(path)

        logger.debug(f"Generated public URL for path: {path}")
        return public_url

    except Exception as e:
        logger.error(f"Error generating public URL for path {path}: {e}")
        raise


async def upload_audio_file(
    file_bytes: bytes, file_name: str, content_type: str = "audio/webm"
) -> str:
    """
    Upload an audio file to Supabase Storage.

    Args:
        file_bytes: Audio content as bytes
        file_name: Canonical file name (``{id}.{extension}``), used as the storage path
        content_type: MIME type stored with the object

    Returns:
        str: Storage path of the uploaded file

    Raises:
        Exception: If upload fails
    """
    try:
        client = get_supabase_client()

        logger.info(f"Uploading audio file: {file_name}")

        client.storage.from_(STORAGE_BUCKET).upload(
            path=file_name,
            file=file_bytes,
            file_options={
                "content-type": content_type,
                "cache-control": "3600",
                "upsert": "false",
            },
        )

        logger.info(f"Successfully uploaded audio file: {file_name}")
        return file_name

    except Exception as e:
        logger.error(f"Error uploading audio file {file_name}: {e}")
        raise


async def delete_file(path: str) -> bool:
    """
    Delete a file from Supabase Storage.

    Args:
        path: Path to the file in storage

    Returns:
        bool: True if deletion was successful

    Raises:
        Exception: If deletion fails
    """
    try:
        client = get_supabase_client()

        logger.info(f"Deleting file: {path}")

        client.storage.from_(STORAGE_BUCKET).remove([path])

        logger.info(f"Successfully deleted file: {path}")
        return True

    except Exception as e:
        logger.error(f"Error deleting file {path}: {e}")
        raise
