"""Shared pytest fixtures for the stream monitor tests.

Fixture summary
---------------
logging_service: LoggingService with no Discord channel attached.
tracker        : Fresh in-memory LiveStatusTracker.
db_service     : DatabaseService on a temporary SQLite file, initialized.
store          : TrackingStore over ``db_service``.

No test touches the network: checkers get a ``FakeSession`` and the webhook
is patched where it is exercised.
"""

from typing import Any, Dict, List, Optional, Tuple, Union
from unittest.mock import MagicMock

import aiohttp
import pytest
import pytest_asyncio

from services.database_service import DatabaseService
from services.live_status_tracker import LiveStatusTracker
from services.logging_service import LoggingService
from services.tracking_store import TrackingStore


# ---------------------------------------------------------------------------
# Fake aiohttp session
# ---------------------------------------------------------------------------


class FakeResponse:
    """Just enough of ``aiohttp.ClientResponse`` for the checkers."""

    def __init__(self, status: int = 200, json_data: Any = None, text: str = "",
                 url: str = "https://example.test/"):
        self.status = status
        self._json = json_data
        self._text = text
        self.url = url

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        return self._json

    async def text(self) -> str:
        return self._text

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=MagicMock(),
                history=(),
                status=self.status,
                message=f"HTTP {self.status}",
            )


class _RequestContext:
    def __init__(self, outcome: Union[FakeResponse, BaseException]):
        self._outcome = outcome

    async def __aenter__(self) -> FakeResponse:
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class FakeSession:
    """Hands out queued responses in order and records every request.

    A queued exception is raised when the request context is entered, which
    is where aiohttp raises connection errors and timeouts.
    """

    def __init__(self, *outcomes: Union[FakeResponse, BaseException]):
        self._outcomes: List[Union[FakeResponse, BaseException]] = list(outcomes)
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.closed = False

    def _request(self, method: str, url: str, **kwargs) -> _RequestContext:
        self.calls.append((method, url, kwargs))
        if not self._outcomes:
            raise AssertionError(f"Unexpected {method} {url}")
        return _RequestContext(self._outcomes.pop(0))

    def get(self, url: str, **kwargs) -> _RequestContext:
        return self._request("GET", url, **kwargs)

    def post(self, url: str, **kwargs) -> _RequestContext:
        return self._request("POST", url, **kwargs)

    def urls(self, method: Optional[str] = None) -> List[str]:
        return [url for m, url, _ in self.calls if method is None or m == method]

    async def close(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


@pytest.fixture
def logging_service() -> LoggingService:
    return LoggingService(logger_name="streamradar.tests")


@pytest.fixture
def tracker() -> LiveStatusTracker:
    return LiveStatusTracker()


@pytest_asyncio.fixture
async def db_service(tmp_path) -> DatabaseService:
    service = DatabaseService(str(tmp_path / "bot_data.db"))
    await service.initialize()
    return service


@pytest_asyncio.fixture
async def store(db_service) -> TrackingStore:
    return TrackingStore(db_service)
