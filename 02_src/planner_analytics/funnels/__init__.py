"""Funnel reporting."""

from .funnels import compute_funnel

__all__ = ["compute_funnel"]
