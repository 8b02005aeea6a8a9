"""
Configuration module for the Voicerly API
Contains logger setup, environment variables and upload limits
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# -------------------------
# Logger Setup
# -------------------------
def setup_logger(name: str = __name__, log_file: str = "voicerly.log") -> logging.Logger:
    """
    Set up and return a logger with both file and console handlers

    Args:
        name: Logger name (usually __name__)
        log_file: Path to log file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    file_handler = logging.FileHandler(log_file, mode="a")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


LOG_FILE = os.getenv("LOG_FILE", "voicerly.log")

# Create the main application logger
logger = setup_logger("voicerly", LOG_FILE)

# -------------------------
# Environment Variables
# -------------------------
# supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")
STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "audio-storage")
AUDIO_FILES_TABLE = os.getenv("AUDIO_FILES_TABLE", "audio_files")
RATE_LIMIT_TABLE = os.getenv("RATE_LIMIT_TABLE", "upload_rate_limits")

PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL")
CLEANUP_TOKEN = os.getenv("CLEANUP_TOKEN")
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

# -------------------------
# Upload limits
# -------------------------
MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", str(10 * 1024 * 1024)))  # 10MB
MAX_FILES_PER_HOUR = int(os.getenv("MAX_FILES_PER_HOUR", "10"))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "3600"))
RATE_LIMIT_BACKEND = os.getenv("RATE_LIMIT_BACKEND", "memory").lower()
STRICT_AUDIO_SIGNATURES = _env_bool("STRICT_AUDIO_SIGNATURES")

# Ordered by how widely browsers can play them back
ALLOWED_AUDIO_TYPES = [
    "audio/mp4",
    "audio/mpeg",
    "audio/m4a",
    "audio/aac",
    "audio/webm",
    "audio/wav",
    "audio/ogg",
    "audio/flac",
]
ALLOWED_EXTENSIONS = ["mp4", "mp3", "m4a", "aac", "webm", "wav", "ogg", "flac"]
DEFAULT_EXTENSION = "webm"

MAX_FILENAME_LENGTH = 100
SHORT_ID_LENGTH = 10


# Log configuration status
logger.info("Configuration loaded successfully")
logger.debug(f"SUPABASE_URL configured: {bool(SUPABASE_URL)}")
logger.debug(f"SUPABASE_SERVICE_KEY configured: {bool(SUPABASE_SERVICE_KEY)}")
logger.debug(f"CLEANUP_TOKEN configured: {bool(CLEANUP_TOKEN)}")
logger.debug(f"PUBLIC_BASE_URL: {PUBLIC_BASE_URL or '(from request)'}")
logger.debug(f"RATE_LIMIT_BACKEND: {RATE_LIMIT_BACKEND}")
