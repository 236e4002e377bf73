"""Shared test fixtures and hypothesis strategies for the htb test suite."""

from __future__ import annotations

import httpx
import pytest
from hypothesis import strategies as st

from htb.client import HTBClient
from htb.config.settings import HTBSettings
from htb.resilience.rate_limiter import RateLimiter
from tests.helpers import BASE_URL, StubRoutes


# ---------------------------------------------------------------------------
# Ensure required env vars are set for HTBSettings in tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set a token so HTBSettings can be instantiated in tests."""
    monkeypatch.setenv("HTB_API_TOKEN", "test-token")


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> HTBSettings:
    """Test settings with a generous rate limit."""
    return HTBSettings(
        api_token="test-token",
        base_url=BASE_URL,
        timeout_seconds=5.0,
        rate_limit_tokens=100,
        rate_limit_interval_seconds=1.0,
    )


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rate_limiter(settings: HTBSettings) -> RateLimiter:
    return RateLimiter(
        tokens=settings.rate_limit_tokens,
        interval_seconds=settings.rate_limit_interval_seconds,
    )


@pytest.fixture
def routes() -> StubRoutes:
    return StubRoutes()


@pytest.fixture
async def client(settings: HTBSettings, routes: StubRoutes):
    async with HTBClient(settings, transport=httpx.MockTransport(routes)) as htb_client:
        yield htb_client


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

season_ids = st.integers(min_value=1, max_value=10_000)
season_names = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ ",
    min_size=1,
    max_size=30,
)
error_status_codes = st.sampled_from([400, 401, 403, 404, 409, 422, 429, 500, 502, 503])
