"""Router package exposing all API routers."""

from fastapi import APIRouter

from .assets.router import router as assets_router
from .maintenance.router import router as maintenance_router
from .upload.router import router as upload_router

router = APIRouter()
router.include_router(upload_router)
router.include_router(assets_router)
router.include_router(maintenance_router)


@router.get("/api/health", tags=["Health"])
async def health_check() -> dict:
    """Simple health check endpoint."""

    return {
        "status": "healthy",
        "service": "voicerly-api",
        "version": "1.0.0",
    }


__all__ = ["router", "upload_router", "assets_router", "maintenance_router"]
