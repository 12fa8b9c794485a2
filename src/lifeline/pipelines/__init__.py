"""Pipeline entry points for Lifeline.

Currently exposed:

- :func:`run_view` — filter → tier aggregation → collision-free layout →
  bubbles, implemented in ``timeline_view.py``.
"""

from __future__ import annotations

from .timeline_view import TimelineView, ViewStats, run_view

__all__ = ["run_view", "TimelineView", "ViewStats"]
