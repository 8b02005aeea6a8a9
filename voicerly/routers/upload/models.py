"""Pydantic models used by the upload router."""

from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    """Share link and identifiers for an admitted upload."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    id: str
    document_id: str = Field(..., alias="documentId")
    storage_file_id: str = Field(..., alias="storageFileId")


class RateLimitResponse(BaseModel):
    """Rate limit status details for the requester."""

    allowed: bool
    remaining: int
    reset_at: str
    limit: int
    message: str
