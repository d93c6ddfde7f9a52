"""Pytest configuration and fixtures."""

import json
import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class RecordingSink:
    """Sink that keeps captured events in memory."""

    def __init__(self):
        self.events = []
        self.flushed = 0
        self.closed = False

    async def capture(self, event):
        self.events.append(event)

    async def flush(self):
        self.flushed += 1

    async def close(self):
        self.closed = True


class FailingSink(RecordingSink):
    """Sink whose vendor is unreachable."""

    async def capture(self, event):
        raise ConnectionError("vendor unreachable")

    async def flush(self):
        raise ConnectionError("vendor unreachable")


class FakeEndpoint:
    """Collection endpoint for httpx.MockTransport."""

    def __init__(self, status_code: int = 200):
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"ok": self.status_code < 300})

    @property
    def batches(self) -> list[list[dict]]:
        return [json.loads(r.content)["batch"] for r in self.requests]


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from planner_analytics.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def event_buffer(storage):
    """Create EventBuffer over in-memory storage."""
    from planner_analytics.buffer import EventBuffer

    return EventBuffer(storage)


@pytest.fixture
def endpoint():
    """Fake collection endpoint accepting every batch."""
    return FakeEndpoint()


@pytest_asyncio.fixture
async def uploader(endpoint):
    """BatchUploader wired to the fake endpoint."""
    from planner_analytics.buffer import BatchUploader

    client = httpx.AsyncClient(transport=httpx.MockTransport(endpoint))
    up = BatchUploader("http://collector.test/api/collect", client=client)
    yield up
    await client.aclose()


@pytest.fixture
def collector_sink(event_buffer, uploader):
    """CollectorSink with the default batch size of 10."""
    from planner_analytics.sinks import CollectorSink

    return CollectorSink(buffer=event_buffer, uploader=uploader)


@pytest.fixture
def recording_sink():
    """In-memory vendor sink."""
    return RecordingSink()


@pytest.fixture
def failing_sink():
    """Vendor sink that always raises."""
    return FailingSink()


@pytest.fixture
def tracker(recording_sink):
    """Tracker forwarding to the recording sink."""
    from planner_analytics.tracker import AnalyticsTracker

    return AnalyticsTracker(sink=recording_sink)


@pytest.fixture
def log_tracker():
    """Tracker with no vendor wired up."""
    from planner_analytics.tracker import AnalyticsTracker

    return AnalyticsTracker()


@pytest.fixture
def settings():
    """Settings with no vendor and in-memory database."""
    from planner_analytics.config import Settings

    return Settings(db_path=":memory:")
