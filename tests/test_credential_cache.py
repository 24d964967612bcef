"""Unit tests for services/credential_cache.py.

Tests cover:
- lazy acquisition and reuse of the app access token
- invalidate() returns the cache to EMPTY and forces a new fetch
- non-200 responses, connection errors and missing tokens raise
  TokenAcquisitionError and leave the cache EMPTY
"""

import aiohttp
import pytest

from conftest import FakeResponse, FakeSession
from services.credential_cache import TWITCH_TOKEN_URL, TokenAcquisitionError, TokenState, TwitchTokenCache


@pytest.fixture
def cache() -> TwitchTokenCache:
    return TwitchTokenCache("client-id", "client-secret")


@pytest.mark.asyncio
async def test_token_is_fetched_once_and_reused(cache) -> None:
    session = FakeSession(FakeResponse(json_data={"access_token": "abc"}))

    assert cache.state is TokenState.EMPTY
    assert await cache.ensure_token(session) == "abc"
    assert await cache.ensure_token(session) == "abc"

    assert cache.state is TokenState.VALID
    assert session.urls("POST") == [TWITCH_TOKEN_URL]
    _, _, kwargs = session.calls[0]
    assert kwargs["params"] == {
        "client_id": "client-id",
        "client_secret": "client-secret",
        "grant_type": "client_credentials",
    }


@pytest.mark.asyncio
async def test_invalidate_forces_refetch(cache) -> None:
    session = FakeSession(
        FakeResponse(json_data={"access_token": "first"}),
        FakeResponse(json_data={"access_token": "second"}),
    )

    await cache.ensure_token(session)
    cache.invalidate()
    assert cache.state is TokenState.EMPTY

    assert await cache.ensure_token(session) == "second"
    assert len(session.calls) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("outcome", [
    FakeResponse(status=400, text="invalid client"),
    FakeResponse(json_data={"expires_in": 100}),
    aiohttp.ClientConnectionError("connection reset"),
])
async def test_failed_acquisition_leaves_cache_empty(cache, outcome) -> None:
    session = FakeSession(outcome)

    with pytest.raises(TokenAcquisitionError):
        await cache.ensure_token(session)

    assert cache.state is TokenState.EMPTY
    assert cache.token is None
