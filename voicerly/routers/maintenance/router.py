"""FastAPI router for storage statistics and cleanup."""

from fastapi import APIRouter, Depends

from voicerly.config import logger
from voicerly.models import ErrorResponse
from voicerly.services import assets

from .dependencies import require_cleanup_token
from .models import CleanupResponse, FileStatsResponse

router = APIRouter(
    prefix="/api",
    tags=["Maintenance"],
    dependencies=[Depends(require_cleanup_token)],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.get("/cleanup", response_model=FileStatsResponse)
async def file_stats() -> FileStatsResponse:
    """Report how many files are stored and how much space they use."""

    stats = await assets.get_stats()
    return FileStatsResponse(**stats)


@router.post("/cleanup", response_model=CleanupResponse)
async def cleanup_files() -> CleanupResponse:
    """Run the cleanup job. Files are permanent, so nothing is removed."""

    result = await assets.cleanup()
    logger.info("Cleanup finished", extra={"deleted_count": result["deleted_count"]})
    return CleanupResponse(**result)
