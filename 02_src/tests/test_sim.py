"""Tests for the traffic simulator."""

import json
import random

import httpx

from planner_analytics.bucketing import ROW_COUNT, SUCCESS_RATE, YEARS
from planner_analytics.privacy import is_sensitive_key, value_problem
from sim import FUNNEL, Sim, build_session


class TestBuildSession:
    """Tests for build_session()."""

    def test_follows_funnel_order(self):
        rng = random.Random(7)
        for _ in range(50):
            names = [name for name, _ in build_session(rng)]
            assert names == FUNNEL[: len(names)]
            assert len(names) >= 1

    def test_properties_are_bucketed_and_safe(self):
        rng = random.Random(1)
        for _ in range(50):
            for name, props in build_session(rng):
                for key, value in props.items():
                    assert not is_sensitive_key(key)
                    assert value_problem(value) is None
                if name == "CSV Uploaded":
                    assert props["rows"] in ROW_COUNT
                if name == "Simulation Run":
                    assert props["success_rate"] in SUCCESS_RATE
                    assert props["horizon"] in YEARS


class TestSimSend:
    """Tests for Sim._send_event()."""

    async def test_send_event_posts_to_api(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"status": "ok", "properties": {}})

        sim = Sim(api_url="http://api.test")
        sim._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        sent = await sim._send_event("sess", "Report Exported", {"format": "pdf"})

        assert sent is True
        assert str(requests[0].url) == "http://api.test/api/events"
        assert json.loads(requests[0].content) == {
            "name": "Report Exported",
            "properties": {"format": "pdf"},
            "session_id": "sess",
        }
        await sim.stop()

    async def test_send_event_failure(self):
        def handler(request):
            raise httpx.ConnectError("refused")

        sim = Sim(api_url="http://api.test")
        sim._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        assert await sim._send_event("sess", "x", {}) is False
        await sim.stop()

    async def test_send_without_client(self):
        assert await Sim()._send_event("sess", "x", {}) is False


class TestSimScenario:
    """Tests for the scenario run."""

    async def test_scenario_tracks_lifecycle(self, tracker, recording_sink, monkeypatch):
        sent = []

        async def fake_send(session_id, name, properties):
            sent.append((session_id, name))
            return True

        sim = Sim(tracker=tracker, visitors=3, delay=(0, 0), seed=3)
        monkeypatch.setattr(sim, "_send_event", fake_send)
        sim._running = True

        await sim._run_scenario()

        names = [e.name for e in recording_sink.events]
        assert names == ["Sim Started", "Sim Completed"]
        assert recording_sink.events[1].properties == {"events_sent": len(sent)}
        assert len({session for session, _ in sent}) == 3
        assert not sim.running

    async def test_stop_when_not_started(self):
        await Sim().stop()
