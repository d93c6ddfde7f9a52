"""Traffic simulator."""

from .sim import FUNNEL, ISim, Sim, build_session

__all__ = ["FUNNEL", "ISim", "Sim", "build_session"]
