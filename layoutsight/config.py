"""Application configuration from environment variables."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    layoutsight_env: str = "development"
    layoutsight_log_level: str = "info"

    # Caller policy caps applied when no AnalysisConfig is passed
    layoutsight_max_elements: int | None = None
    layoutsight_time_budget_ms: float | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Set up root logging for scripts and services embedding the engine."""
    name = (level or settings.layoutsight_log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
