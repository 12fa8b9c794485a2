"""Lifeline: event aggregation and spatial layout engine for life timelines.

The package is split into a pure core (``lifeline.core`` contracts and
helpers, ``lifeline.engine`` algorithms, ``lifeline.pipelines``) and thin
shells that host it (``lifeline.api`` over HTTP, ``lifeline.cli`` in the
terminal).
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.3.0"
