"""Pydantic models used by the maintenance router."""

from pydantic import BaseModel, ConfigDict, Field


class FileStatsResponse(BaseModel):
    """Aggregate counts and sizes of stored audio files."""

    model_config = ConfigDict(populate_by_name=True)

    total_files: int = Field(..., alias="totalFiles")
    total_size: int = Field(..., alias="totalSize")
    total_size_mb: str = Field(..., alias="totalSizeMB")
    old_files: int = Field(0, alias="oldFiles")
    old_files_size: int = Field(0, alias="oldFilesSize")
    old_files_size_mb: str = Field("0.00", alias="oldFilesSizeMB")
    max_age_hours: int = Field(0, alias="maxAgeHours")


class CleanupResponse(BaseModel):
    """Outcome of a cleanup run."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    deleted_count: int = Field(..., alias="deletedCount")
    total_size_deleted: int = Field(..., alias="totalSizeDeleted")
    message: str
