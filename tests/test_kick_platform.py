"""Unit tests for platforms/kick_platform.py.

Tests cover:
- the channel API's ``livestream`` field decides liveness
- a 403 from the API falls back to scraping the channel page exactly once
- other API failures never scrape and are not-live
- every outbound request passes through the shared rate limiter
- username extraction from profile URLs
"""

import asyncio

import aiohttp
import pytest

from conftest import FakeResponse, FakeSession
from platforms.kick_platform import KICK_URL, KickPlatform
from services.rate_limiter import RateLimiter

API_URL = f"{KICK_URL}/api/v1/channels/streamer"
PAGE_URL = f"{KICK_URL}/streamer"
LIVE_PAGE = '<html><body><span class="live-indicator">LIVE</span></body></html>'
OFFLINE_PAGE = '<html><head><title>streamer | Kick</title></head><body>Offline</body></html>'


class RecordingLimiter(RateLimiter):
    """Rate limiter on a fake clock that remembers every dispatch time"""

    def __init__(self):
        self.now = 0.0
        self.dispatched = []
        super().__init__(3.0, clock=lambda: self.now, sleep=self._advance)

    async def _advance(self, seconds: float) -> None:
        self.now += seconds

    async def wait(self) -> float:
        dispatched = await super().wait()
        self.dispatched.append(dispatched)
        return dispatched


@pytest.fixture
def limiter() -> RecordingLimiter:
    return RecordingLimiter()


def _platform(session: FakeSession, limiter: RateLimiter) -> KickPlatform:
    return KickPlatform(rate_limiter=limiter, session=session)


# ---------------------------------------------------------------------------
# Channel API
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_livestream_present_is_live(limiter) -> None:
    session = FakeSession(FakeResponse(json_data={"livestream": {"id": 1, "is_live": True}}))

    assert await _platform(session, limiter).is_stream_live("streamer") is True

    method, url, kwargs = session.calls[0]
    assert url == API_URL
    assert kwargs["headers"]["Referer"] == PAGE_URL
    assert kwargs["headers"]["Origin"] == KICK_URL


@pytest.mark.asyncio
async def test_livestream_null_is_not_live(limiter) -> None:
    session = FakeSession(FakeResponse(json_data={"livestream": None}))

    assert await _platform(session, limiter).is_stream_live("streamer") is False
    assert session.urls() == [API_URL]


# ---------------------------------------------------------------------------
# Scraping fallback
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_forbidden_falls_back_to_scraping_once(limiter) -> None:
    session = FakeSession(
        FakeResponse(status=403),
        FakeResponse(text=LIVE_PAGE, url=PAGE_URL),
    )

    assert await _platform(session, limiter).is_stream_live("streamer") is True

    assert session.urls() == [API_URL, PAGE_URL]
    assert "Sec-Ch-Ua" in session.calls[1][2]["headers"]


@pytest.mark.asyncio
async def test_scraped_offline_page_is_not_live(limiter) -> None:
    session = FakeSession(
        FakeResponse(status=403),
        FakeResponse(text=OFFLINE_PAGE, url=PAGE_URL),
    )

    assert await _platform(session, limiter).is_stream_live("streamer") is False


@pytest.mark.asyncio
@pytest.mark.parametrize("outcome", [
    FakeResponse(status=503, url=PAGE_URL),
    asyncio.TimeoutError(),
    aiohttp.ClientConnectionError("reset"),
])
async def test_scrape_failure_is_not_live(limiter, outcome) -> None:
    session = FakeSession(FakeResponse(status=403), outcome)

    assert await _platform(session, limiter).is_stream_live("streamer") is False
    assert len(session.calls) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("outcome", [
    FakeResponse(status=404),
    FakeResponse(status=500),
    asyncio.TimeoutError(),
    aiohttp.ClientConnectionError("reset"),
])
async def test_other_api_failures_do_not_scrape(limiter, outcome) -> None:
    session = FakeSession(outcome)

    assert await _platform(session, limiter).is_stream_live("streamer") is False
    assert session.urls() == [API_URL]


# ---------------------------------------------------------------------------
# Pacing
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_requests_are_spaced_by_limiter(limiter) -> None:
    session = FakeSession(
        FakeResponse(status=403),
        FakeResponse(text=OFFLINE_PAGE, url=PAGE_URL),
        FakeResponse(json_data={"livestream": None}),
    )
    platform = _platform(session, limiter)

    await platform.is_stream_live("streamer")
    await platform.is_stream_live("other")

    assert len(limiter.dispatched) == 3
    gaps = [b - a for a, b in zip(limiter.dispatched, limiter.dispatched[1:])]
    assert all(gap >= 3.0 for gap in gaps)


@pytest.mark.parametrize("identity, expected", [
    ("streamer", "streamer"),
    ("https://kick.com/some-streamer", "some-streamer"),
    ("kick.com/x_y", "x_y"),
    ("bad name", None),
])
def test_extract_username(identity, expected) -> None:
    platform = KickPlatform(rate_limiter=RateLimiter(), session=FakeSession())
    assert platform._extract_username(identity) == expected


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [["livestream"], "live", None])
async def test_unexpected_api_payload_is_not_live(limiter, payload) -> None:
    session = FakeSession(FakeResponse(json_data=payload))
    assert await _platform(session, limiter).is_stream_live("streamer") is False
    assert session.urls() == [API_URL]


@pytest.mark.asyncio
async def test_scrape_with_non_200_success_is_not_live(limiter) -> None:
    session = FakeSession(
        FakeResponse(status=403),
        FakeResponse(status=202, text=LIVE_PAGE, url=PAGE_URL),
    )

    assert await _platform(session, limiter).is_stream_live("streamer") is False
