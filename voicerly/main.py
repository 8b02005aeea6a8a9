from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from voicerly.config import CORS_ALLOW_ORIGINS, logger
from voicerly.core.errors import VoicerlyError

from .routers import router

# Initialize FastAPI application
app = FastAPI(
    title="Voicerly API",
    description="Record, upload and share voice memos",
    version="1.0.0",
)

app.include_router(router)


@app.exception_handler(VoicerlyError)
async def voicerly_error_handler(request: Request, exc: VoicerlyError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            extra={"path": request.url.path, "error": exc.message},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    location = ".".join(str(part) for part in errors[0].get("loc", ())) if errors else ""

    logger.info(
        "Malformed request rejected",
        extra={"path": request.url.path, "error": detail, "location": location},
    )
    message = f"Invalid request: {detail}" + (f" ({location})" if location else "")
    return JSONResponse(status_code=400, content={"error": message})


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials="*" not in CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=86400,
)


logger.info("Voicerly API initialized successfully")
