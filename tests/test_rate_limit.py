"""Tests for the upload rate limiters."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional
from unittest.mock import MagicMock, patch

from voicerly.core.rate_limit import (
    InMemoryRateLimiter,
    SupabaseRateLimiter,
    create_rate_limiter,
)


def test_eleventh_request_in_window_is_denied(clock) -> None:
    limiter = InMemoryRateLimiter(max_requests=10, window_seconds=3600, clock=clock)

    results = [limiter.consume("1.2.3.4") for _ in range(11)]

    assert results[:10] == [True] * 10
    assert results[10] is False


def test_window_reset_allows_exactly_ten_more(clock) -> None:
    limiter = InMemoryRateLimiter(max_requests=10, window_seconds=3600, clock=clock)
    for _ in range(12):
        limiter.consume("1.2.3.4")

    clock.advance(3600)

    results = [limiter.consume("1.2.3.4") for _ in range(11)]
    assert results[:10] == [True] * 10
    assert results[10] is False


def test_window_is_fixed_from_first_request(clock) -> None:
    limiter = InMemoryRateLimiter(max_requests=2, window_seconds=100, clock=clock)
    assert limiter.consume("k")
    clock.advance(99)
    assert limiter.consume("k")
    assert not limiter.consume("k")
    clock.advance(1)
    assert limiter.consume("k")


def test_denied_request_does_not_mutate_entry(clock) -> None:
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=60, clock=clock)
    limiter.consume("k")
    entry_before = (limiter._entries["k"].count, limiter._entries["k"].window_reset_at)

    assert not limiter.consume("k")
    assert (limiter._entries["k"].count, limiter._entries["k"].window_reset_at) == entry_before


def test_clients_are_limited_independently(clock) -> None:
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=60, clock=clock)
    assert limiter.consume("a")
    assert not limiter.consume("a")
    assert limiter.consume("b")


def test_status_does_not_consume(clock) -> None:
    limiter = InMemoryRateLimiter(max_requests=3, window_seconds=60, clock=clock)
    limiter.consume("k")

    status = asyncio.run(limiter.status("k"))
    status_again = asyncio.run(limiter.status("k"))

    assert status["remaining"] == 2
    assert status_again["remaining"] == 2
    assert status["allowed"] is True
    assert status["limit"] == 3


def test_check_and_consume_is_async_wrapper(clock) -> None:
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=60, clock=clock)
    assert asyncio.run(limiter.check_and_consume("k")) is True
    assert asyncio.run(limiter.check_and_consume("k")) is False


def test_create_rate_limiter_backends() -> None:
    assert isinstance(create_rate_limiter("memory"), InMemoryRateLimiter)
    assert isinstance(create_rate_limiter("supabase"), SupabaseRateLimiter)
    assert isinstance(create_rate_limiter("redis"), InMemoryRateLimiter)


def _client_with_count(count: int, oldest: Optional[str] = None) -> MagicMock:
    client = MagicMock()
    query = client.table.return_value.select.return_value.eq.return_value.gte.return_value
    data = [{"created_at": oldest}] if oldest else []
    query.order.return_value.limit.return_value.execute.return_value = MagicMock(
        count=count, data=data
    )
    return client


@patch("voicerly.core.rate_limit.get_supabase_client")
def test_supabase_limiter_allows_and_records_attempt(mock_client) -> None:
    client = _client_with_count(3)
    mock_client.return_value = client
    limiter = SupabaseRateLimiter(max_requests=10, window_seconds=3600)

    assert asyncio.run(limiter.check_and_consume("1.2.3.4")) is True

    inserted = client.table.return_value.insert.call_args[0][0]
    assert inserted["client_key"] == "1.2.3.4"


@patch("voicerly.core.rate_limit.get_supabase_client")
def test_supabase_limiter_denies_at_ceiling(mock_client) -> None:
    client = _client_with_count(10)
    mock_client.return_value = client
    limiter = SupabaseRateLimiter(max_requests=10, window_seconds=3600)

    assert asyncio.run(limiter.check_and_consume("1.2.3.4")) is False
    client.table.return_value.insert.assert_not_called()


@patch("voicerly.core.rate_limit.get_supabase_client")
def test_supabase_limiter_never_raises(mock_client) -> None:
    mock_client.side_effect = ValueError("SUPABASE_URL or SUPABASE_SERVICE_KEY is not configured")
    limiter = SupabaseRateLimiter()

    assert asyncio.run(limiter.check_and_consume("1.2.3.4")) is True


@patch("voicerly.core.rate_limit.get_supabase_client")
def test_supabase_status_resets_when_oldest_attempt_leaves_window(mock_client) -> None:
    oldest = datetime.now(timezone.utc) - timedelta(minutes=50)
    mock_client.return_value = _client_with_count(10, oldest.isoformat())
    limiter = SupabaseRateLimiter(max_requests=10, window_seconds=3600)

    status = asyncio.run(limiter.status("1.2.3.4"))

    assert status["allowed"] is False
    assert status["remaining"] == 0
    assert datetime.fromisoformat(status["reset_at"]) == oldest + timedelta(hours=1)


@patch("voicerly.core.rate_limit.get_supabase_client")
def test_supabase_status_without_attempts_resets_a_window_from_now(mock_client) -> None:
    mock_client.return_value = _client_with_count(0)
    limiter = SupabaseRateLimiter(max_requests=10, window_seconds=3600)

    before = datetime.now(timezone.utc)
    status = asyncio.run(limiter.status("1.2.3.4"))

    reset_at = datetime.fromisoformat(status["reset_at"])
    assert status["remaining"] == 10
    assert before + timedelta(hours=1) <= reset_at <= datetime.now(timezone.utc) + timedelta(hours=1)
