"""FastAPI router for sharing, downloading and deleting audio files."""

from fastapi import APIRouter

from voicerly.config import logger
from voicerly.core.errors import VoicerlyError
from voicerly.models import ErrorResponse
from voicerly.services import assets

from .models import DeleteRequest, DeleteResponse, DownloadResponse, ShareResponse

router = APIRouter(prefix="/api", tags=["Assets"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/delete", response_model=DeleteResponse, responses=ERROR_RESPONSES)
async def delete_audio(payload: DeleteRequest) -> DeleteResponse:
    """Delete the audio file behind a share URL."""

    try:
        result = await assets.delete_asset(payload.url)
    except VoicerlyError:
        raise
    except Exception as exc:
        logger.error("Delete error", exc_info=True)
        raise VoicerlyError("Failed to delete audio file") from exc

    return DeleteResponse(**result)


@router.get("/share/{short_id}", response_model=ShareResponse, responses=ERROR_RESPONSES)
async def get_share(short_id: str) -> ShareResponse:
    """Resolve a share id to its playback URL and metadata."""

    return ShareResponse(**await assets.resolve_share(short_id))


@router.post(
    "/share/{short_id}/download",
    response_model=DownloadResponse,
    responses=ERROR_RESPONSES,
)
async def download_share(short_id: str) -> DownloadResponse:
    """Record a download and return the file URL."""

    return DownloadResponse(**await assets.register_download(short_id))
