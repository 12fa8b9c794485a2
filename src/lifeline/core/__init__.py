"""Core package initializer for Lifeline.

Holds the shared contracts, geometry and calendar helpers, the ``Result``
container and the shell-side settings. Downstream code imports from the
submodules directly, e.g.:
    from lifeline.core.settings import settings, load_settings, Settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
