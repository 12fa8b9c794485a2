"""
ASGI Entry Point for Lifeline API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads environment variables from `.env` before the application factory
reads settings.

Usage
-----
Run via the module entry point:
    $ python -m lifeline.api.server

Or via uvicorn directly:
    $ uvicorn lifeline.api.server:app --reload
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #

# Load .env BEFORE importing the application factory: `lifeline.core.settings`
# builds its cached instance at import time.
load_dotenv(dotenv_path=Path(".env"))

from lifeline.api.app import create_app  # noqa: E402
from lifeline.core.settings import get_logger, load_settings  # noqa: E402

# Factory invocation
app = create_app()


def main() -> None:
    """Run the API server locally for development."""
    cfg = load_settings()
    get_logger().info(
        "Starting Lifeline API (env=%s, log_level=%s)", cfg.environment, cfg.log_level
    )

    uvicorn.run(
        "lifeline.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=cfg.is_dev,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
