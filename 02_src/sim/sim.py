"""SIM implementation - hardcoded planning-suite scenario for testing."""

import asyncio
import random
import uuid
from typing import Any, Protocol

import httpx

from planner_analytics.bucketing import ACCOUNT_COUNT, ROW_COUNT, SUCCESS_RATE, YEARS
from planner_analytics.logging_config import get_logger
from planner_analytics.tracker import ITracker

logger = get_logger(__name__)

FUNNEL = ["CSV Uploaded", "Budget Created", "Simulation Run", "Report Exported"]

# Chance that a visitor continues to the next funnel step
CONTINUE_PROBABILITY = 0.75


class ISim(Protocol):
    """Generate test traffic. Hardcoded scenario."""

    async def start(self) -> None:
        """Start hardcoded scenario."""
        ...

    async def stop(self) -> None:
        """Stop scenario."""
        ...


def build_session(rng: random.Random) -> list[tuple[str, dict[str, Any]]]:
    """Events one simulated visitor emits, already bucketed."""
    events: list[tuple[str, dict[str, Any]]] = [
        (
            "CSV Uploaded",
            {
                "rows": ROW_COUNT.label(rng.randint(1, 20000)),
                "file_type": rng.choice(["bank", "card", "brokerage"]),
                "accounts": ACCOUNT_COUNT.label(rng.randint(1, 12)),
            },
        ),
        (
            "Budget Created",
            {
                "categories": rng.randint(3, 25),
                "template": rng.choice(["50-30-20", "zero-based", "custom"]),
            },
        ),
        (
            "Simulation Run",
            {
                "success_rate": SUCCESS_RATE.label(rng.uniform(20, 100)),
                "horizon": YEARS.label(rng.randint(1, 45)),
                "has_spouse": rng.random() < 0.5,
            },
        ),
        ("Report Exported", {"format": rng.choice(["pdf", "csv"])}),
    ]

    reached = 1
    while reached < len(events) and rng.random() < CONTINUE_PROBABILITY:
        reached += 1
    return events[:reached]


class Sim:
    """SIM with hardcoded scenario for testing."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        tracker: ITracker | None = None,
        visitors: int = 5,
        delay: tuple[float, float] = (0.5, 2.0),
        seed: int | None = None,
    ):
        self._api_url = api_url
        self._tracker = tracker
        self._visitors = visitors
        self._delay = delay
        self._rng = random.Random(seed)
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    @property
    def running(self) -> bool:
        return self._running

    def set_tracker(self, tracker: ITracker) -> None:
        """Inject tracker for SIM lifecycle events."""
        self._tracker = tracker

    async def start(self) -> None:
        """Start hardcoded scenario."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient()

        # Start background task
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def _run_scenario(self) -> None:
        """Run hardcoded scenario."""
        sent = 0
        try:
            if self._tracker:
                await self._tracker.track("Sim Started", {"visitors": self._visitors})

            for _ in range(self._visitors):
                if not self._running:
                    break

                session_id = str(uuid.uuid4())
                for name, properties in build_session(self._rng):
                    if not self._running:
                        break
                    if await self._send_event(session_id, name, properties):
                        sent += 1
                    await asyncio.sleep(self._rng.uniform(*self._delay))

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            self._running = False
            if self._tracker:
                await self._tracker.track("Sim Completed", {"events_sent": sent})

    async def _send_event(
        self, session_id: str, name: str, properties: dict[str, Any]
    ) -> bool:
        """Send one event via HTTP API."""
        if not self._client:
            return False

        try:
            response = await self._client.post(
                f"{self._api_url}/api/events",
                json={"name": name, "properties": properties, "session_id": session_id},
                timeout=10.0,
            )
        except httpx.HTTPError as e:
            logger.error("SIM: Failed to send event: %s", e)
            return False

        if response.status_code != 200:
            logger.error("SIM: Error sending event: %s", response.status_code)
            return False

        logger.info("SIM: %s %s -> %s", session_id[:8], name, response.json().get("status"))
        return True
