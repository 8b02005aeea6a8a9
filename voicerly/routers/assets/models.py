"""Pydantic models used by the share and delete endpoints."""

from typing import Optional

from pydantic import BaseModel


class DeleteRequest(BaseModel):
    url: Optional[str] = None


class DeleteResponse(BaseModel):
    success: bool
    message: str


class ShareResponse(BaseModel):
    """Playback details for a share id."""

    id: str
    file_name: str
    original_name: Optional[str] = None
    file_size: int
    mime_type: Optional[str] = None
    created_at: Optional[str] = None
    download_count: int = 0
    audio_url: str


class DownloadResponse(BaseModel):
    id: str
    download_count: int
    audio_url: str
    download_name: str
