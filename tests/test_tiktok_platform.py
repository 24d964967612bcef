"""Unit tests for platforms/tiktok_platform.py.

Tests cover:
- a live page with a live marker is reported live
- a redirect away from ``/live`` is not-live even if the markup says live
- 403, 404, timeouts and connection errors are not-live
- username extraction from URLs and ``@handles``
"""

import asyncio

import aiohttp
import pytest

from conftest import FakeResponse, FakeSession
from platforms.tiktok_platform import TikTokPlatform

LIVE_URL = "https://www.tiktok.com/@creator/live"
LIVE_PAGE = '<html><head><title>creator is LIVE - TikTok</title></head><body></body></html>'
PROFILE_PAGE = '<html><head><title>creator (@creator) | TikTok</title></head><body>Videos</body></html>'


@pytest.mark.asyncio
async def test_live_page_is_live() -> None:
    session = FakeSession(FakeResponse(text=LIVE_PAGE, url=LIVE_URL))

    assert await TikTokPlatform(session=session).is_stream_live("creator") is True

    method, url, kwargs = session.calls[0]
    assert url == LIVE_URL
    assert kwargs["max_redirects"] == 5
    assert "Mozilla" in kwargs["headers"]["User-Agent"]


@pytest.mark.asyncio
async def test_live_page_without_markers_is_not_live() -> None:
    session = FakeSession(FakeResponse(text=PROFILE_PAGE, url=LIVE_URL))
    assert await TikTokPlatform(session=session).is_stream_live("creator") is False


@pytest.mark.asyncio
async def test_redirect_to_profile_is_not_live() -> None:
    session = FakeSession(FakeResponse(text=LIVE_PAGE, url="https://www.tiktok.com/@creator"))
    assert await TikTokPlatform(session=session).is_stream_live("creator") is False


@pytest.mark.asyncio
@pytest.mark.parametrize("outcome", [
    FakeResponse(status=403, url=LIVE_URL),
    FakeResponse(status=404, url=LIVE_URL),
    FakeResponse(status=500, url=LIVE_URL),
    asyncio.TimeoutError(),
    aiohttp.ClientConnectionError("reset"),
])
async def test_request_failures_are_not_live(outcome) -> None:
    session = FakeSession(outcome)
    assert await TikTokPlatform(session=session).is_stream_live("creator") is False


@pytest.mark.parametrize("identity, expected", [
    ("creator", "creator"),
    ("@creator", "creator"),
    ("https://www.tiktok.com/@creator/live", "creator"),
    ("tiktok.com/@some.name_1", "some.name_1"),
    ("not a name!", None),
])
def test_extract_username(identity, expected) -> None:
    assert TikTokPlatform(session=FakeSession())._extract_username(identity) == expected


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [202, 204, 206])
async def test_non_200_success_is_not_live(status) -> None:
    session = FakeSession(FakeResponse(status=status, text=LIVE_PAGE, url=LIVE_URL))
    assert await TikTokPlatform(session=session).is_stream_live("creator") is False
