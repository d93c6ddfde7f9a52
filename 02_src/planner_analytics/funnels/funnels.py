"""Funnel computation over collected events."""

from collections import defaultdict
from typing import Iterable, Sequence

from ..models import AnalyticsEvent, FunnelReport, FunnelStep


def compute_funnel(
    events: Iterable[AnalyticsEvent], steps: Sequence[str]
) -> FunnelReport:
    """Count how many sessions reach each step, in order.

    A session reaches step i when it emitted steps[0..i] in that order.
    Events without a session id cannot be attributed and are skipped.
    """
    if not steps:
        raise ValueError("Funnel needs at least one step")

    step_names = set(steps)
    by_session: dict[str, list[AnalyticsEvent]] = defaultdict(list)
    for event in events:
        if event.session_id and event.name in step_names:
            by_session[event.session_id].append(event)

    reached = [0] * len(steps)
    for session_events in by_session.values():
        session_events.sort(key=lambda e: e.timestamp)
        position = 0
        for event in session_events:
            if position < len(steps) and event.name == steps[position]:
                position += 1
        for i in range(position):
            reached[i] += 1

    report_steps = []
    for i, name in enumerate(steps):
        rate = None
        if i > 0 and reached[i - 1]:
            rate = reached[i] / reached[i - 1]
        report_steps.append(FunnelStep(name=name, sessions=reached[i], conversion_rate=rate))

    return FunnelReport(steps=report_steps, total_sessions=len(by_session))
