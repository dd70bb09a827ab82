"""
FairPlay - Application Settings

Loads engine configuration from environment variables using Pydantic Settings.
"""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    # Game math
    house_edge_percent: float = Field(default=1.0, ge=0, lt=100)
    limbo_max_multiplier: float = Field(default=1_000_000, gt=1.01)
    minesweeper_range_factor: float = Field(default=5.0, gt=0)

    # Seed generation
    server_seed_bytes: int = Field(default=32, ge=16)
    client_seed_bytes: int = Field(default=16, ge=4)

    # Supabase (only needed by the persistence adapter)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger from settings (or an explicit level)."""
    if level is None:
        settings = get_settings()
        level = "DEBUG" if settings.debug else settings.log_level
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
