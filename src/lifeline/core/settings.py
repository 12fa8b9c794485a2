"""Centralized shell configuration using Pydantic Settings (v2).

Only the hosting shells (``lifeline.api`` and ``lifeline.cli``) consult these
settings. Engine functions receive their thresholds and layout constants as
explicit arguments and never read the environment.

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lifeline.core.contracts.clustering import ContextType

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed shell configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `LIFELINE_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    default_context : ContextType
        Clustering preset used when a request does not name one; maps from
        `LIFELINE_DEFAULT_CONTEXT`.
    cors_origins : list[str]
        Origins allowed by the HTTP API; maps from `LIFELINE_CORS_ORIGINS`
        (JSON list).
    """

    environment: EnvName = Field(default="dev", alias="LIFELINE_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    default_context: ContextType = Field(
        default=ContextType.PERSON, alias="LIFELINE_DEFAULT_CONTEXT"
    )
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], alias="LIFELINE_CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`.
    """
    os.environ.setdefault("LIFELINE_ENV", "dev")
    return Settings()


settings: Settings = load_settings()


def get_logger(name: str = "lifeline") -> logging.Logger:
    """Return a process-global logger configured to the current log level.

    Engine modules log through ``logging.getLogger(__name__)``; their records
    propagate up to the ``lifeline`` logger configured here.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
