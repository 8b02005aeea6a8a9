"""
Rate limiting module for per-client upload throttling.
Limits uploads to MAX_FILES_PER_HOUR per client address per window.

Two backends are available:
- memory: fixed window kept in process memory (single instance only)
- supabase: rows in RATE_LIMIT_TABLE counted over the last window, shared
  by every instance pointing at the same project
"""

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from voicerly.config import (
    MAX_FILES_PER_HOUR,
    RATE_LIMIT_BACKEND,
    RATE_LIMIT_TABLE,
    RATE_LIMIT_WINDOW_SECONDS,
    logger,
)
from voicerly.db import get_supabase_client


@dataclass
class RateLimitEntry:
    count: int
    window_reset_at: float


class InMemoryRateLimiter:
    """Fixed-window counter keyed by client address."""

    def __init__(
        self,
        max_requests: int = MAX_FILES_PER_HOUR,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        # Stale entries are overwritten on the next request, never swept
        self._entries: Dict[str, RateLimitEntry] = {}

    def consume(self, client_key: str) -> bool:
        now = self._clock()
        entry = self._entries.get(client_key)

        if entry is None or now >= entry.window_reset_at:
            self._entries[client_key] = RateLimitEntry(
                count=1, window_reset_at=now + self.window_seconds
            )
            return True

        if entry.count >= self.max_requests:
            return False

        entry.count += 1
        return True

    async def check_and_consume(self, client_key: str) -> bool:
        allowed = self.consume(client_key)
        if not allowed:
            logger.warning("Rate limit exceeded", extra={"client_key": client_key})
        return allowed

    async def status(self, client_key: str) -> Dict[str, Any]:
        now = self._clock()
        entry = self._entries.get(client_key)

        if entry is None or now >= entry.window_reset_at:
            used = 0
            resets_in = self.window_seconds
        else:
            used = entry.count
            resets_in = entry.window_reset_at - now

        reset_at = datetime.now(timezone.utc) + timedelta(seconds=resets_in)
        return {
            "allowed": used < self.max_requests,
            "remaining": max(0, self.max_requests - used),
            "reset_at": reset_at.isoformat(),
            "limit": self.max_requests,
        }


class SupabaseRateLimiter:
    """Sliding-window counter stored in a Supabase table."""

    def __init__(
        self,
        max_requests: int = MAX_FILES_PER_HOUR,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
        table: str = RATE_LIMIT_TABLE,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.table = table

    def _window_start(self) -> datetime:
        return datetime.now(timezone.utc) - timedelta(seconds=self.window_seconds)

    def _recent_attempts(self, client_key: str) -> Tuple[int, Optional[datetime]]:
        """Attempts by the key inside the window, and when the oldest one was made."""
        client = get_supabase_client()
        response = (
            client.table(self.table)
            .select("created_at", count="exact")  # type: ignore
            .eq("client_key", client_key)
            .gte("created_at", self._window_start().isoformat())
            .order("created_at")
            .limit(1)
            .execute()
        )
        total = response.count if response.count is not None else 0

        oldest = None
        if response.data:
            try:
                oldest = datetime.fromisoformat(response.data[0]["created_at"])
            except (KeyError, TypeError, ValueError):
                logger.debug(f"Unparseable created_at for {client_key}: {response.data[0]}")
        return total, oldest

    async def check_and_consume(self, client_key: str) -> bool:
        try:
            total, _ = self._recent_attempts(client_key)
            if total >= self.max_requests:
                logger.warning(
                    "Rate limit exceeded",
                    extra={"client_key": client_key, "total": total},
                )
                return False

            client = get_supabase_client()
            client.table(self.table).insert(
                {
                    "client_key": client_key,
                    "created_at": datetime.now(timezone.utc).isoformat(),
                }
            ).execute()
            return True

        except Exception as e:
            # Limiter outages must not block uploads
            logger.error(f"Error checking rate limit for {client_key}: {e}")
            return True

    async def status(self, client_key: str) -> Dict[str, Any]:
        total, oldest = self._recent_attempts(client_key)
        window = timedelta(seconds=self.window_seconds)
        # The window slides: a slot frees up once the oldest attempt ages out
        if oldest is not None:
            if oldest.tzinfo is None:
                oldest = oldest.replace(tzinfo=timezone.utc)
            reset_at = oldest + window
        else:
            reset_at = datetime.now(timezone.utc) + window
        return {
            "allowed": total < self.max_requests,
            "remaining": max(0, self.max_requests - total),
            "reset_at": reset_at.isoformat(),
            "limit": self.max_requests,
        }


_rate_limiter: Optional[Any] = None


def create_rate_limiter(backend: str = RATE_LIMIT_BACKEND):
    """Build a limiter for the configured backend."""
    if backend == "supabase":
        logger.info("Using Supabase rate limit backend")
        return SupabaseRateLimiter()
    if backend != "memory":
        logger.warning(f"Unknown RATE_LIMIT_BACKEND '{backend}', using memory")
    return InMemoryRateLimiter()


def get_rate_limiter():
    """Process-wide limiter instance, used as a FastAPI dependency."""
    global _rate_limiter

    if _rate_limiter is None:
        _rate_limiter = create_rate_limiter()
    return _rate_limiter
