"""Funnel report data models."""

from dataclasses import dataclass, field


@dataclass
class FunnelStep:
    """One step of a funnel and how many sessions reached it."""

    name: str
    sessions: int
    conversion_rate: float | None = None  # relative to the previous step


@dataclass
class FunnelReport:
    """Ordered funnel steps with step-to-step conversion."""

    steps: list[FunnelStep] = field(default_factory=list)
    total_sessions: int = 0  # sessions that emitted any funnel event

    @property
    def overall_conversion(self) -> float | None:
        """Share of first-step sessions that completed the last step."""
        if not self.steps or self.steps[0].sessions == 0:
            return None
        return self.steps[-1].sessions / self.steps[0].sessions
