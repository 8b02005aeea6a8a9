"""FastAPI router for audio uploads."""

from typing import Dict, Optional

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile

from voicerly.config import logger
from voicerly.core.errors import RateLimitError, VoicerlyError
from voicerly.core.rate_limit import get_rate_limiter
from voicerly.models import ErrorResponse
from voicerly.services.admission import admit_upload
from voicerly.services.contexts import UploadRequest

from .models import RateLimitResponse, UploadResponse
from .utils import get_base_url, get_client_ip

router = APIRouter(prefix="/api", tags=["Upload"])


async def _rate_limit_headers(rate_limiter, client_key: str) -> Dict[str, str]:
    headers = {"X-RateLimit-Limit": str(rate_limiter.max_requests)}
    try:
        status = await rate_limiter.status(client_key)
        headers["X-RateLimit-Remaining"] = str(status["remaining"])
    except Exception as status_exc:  # pragma: no cover - defensive guard
        logger.warning(
            "Failed to refresh rate limit status",
            extra={"error": str(status_exc)},
        )
    return headers


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def upload_audio(
    request: Request,
    response: Response,
    audio: Optional[UploadFile] = File(default=None, description="Recorded or uploaded audio"),
    rate_limiter=Depends(get_rate_limiter),
) -> UploadResponse:
    """Admit an audio file and return its share link."""

    client_ip = get_client_ip(request)
    client_key = client_ip or "unknown"

    logger.info("Upload request received", extra={"client_ip": client_ip})

    try:
        upload = UploadRequest(client_address=client_ip, payload=None)
        if audio is not None:
            upload.mime_type = audio.content_type
            upload.file_name = audio.filename
            upload.declared_size = audio.size
            upload.loader = audio.read

        result = await admit_upload(upload, rate_limiter, get_base_url(request))

    except RateLimitError as exc:
        exc.headers = await _rate_limit_headers(rate_limiter, client_key)
        raise
    except VoicerlyError:
        raise
    except Exception as exc:
        logger.error("Unexpected error in upload request", exc_info=True)
        raise VoicerlyError("Server error: Failed to process upload") from exc

    response.headers.update(await _rate_limit_headers(rate_limiter, client_key))

    return UploadResponse(
        url=result.url,
        id=result.short_id,
        document_id=result.document_id,
        storage_file_id=result.storage_file_id,
    )


@router.get("/ratelimit", response_model=RateLimitResponse)
async def check_rate_limit_status(
    request: Request,
    rate_limiter=Depends(get_rate_limiter),
) -> RateLimitResponse:
    """Report the remaining uploads for the caller's IP."""

    client_key = get_client_ip(request) or "unknown"

    try:
        status = await rate_limiter.status(client_key)
    except Exception as exc:
        logger.error("Error checking rate limit status", extra={"error": str(exc)})
        raise VoicerlyError("Failed to check rate limit") from exc

    return RateLimitResponse(
        allowed=status["allowed"],
        remaining=status["remaining"],
        reset_at=status["reset_at"],
        limit=status["limit"],
        message=f"You have {status['remaining']} uploads left",
    )
