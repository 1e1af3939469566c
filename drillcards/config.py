"""
Configuration settings for drill-cards.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from drillcards.delivery.scheduler import SchedulerConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Decks
    # ========================================
    deck_file: Path = Field(
        default=Path("decks.yaml"),
        description="YAML file with the deck definitions",
    )

    # ========================================
    # Session
    # ========================================
    advance_delay_seconds: float = Field(
        default=3.0,
        ge=0.0,
        description="Delay between revealing an answer and the next question",
    )

    # ========================================
    # Scheduling
    # ========================================
    cooldown_presentations: int = Field(
        default=3,
        ge=1,
        description="Minimum presentations before the same item may repeat",
    )
    fresh_threshold: int = Field(
        default=3,
        ge=1,
        description="Hit streak that masters an item never missed",
    )
    relapse_threshold: int = Field(
        default=6,
        ge=1,
        description="Hit streak that masters an item missed at least once",
    )
    drill_streak: int = Field(
        default=3,
        ge=1,
        description="Hit streak that ends active drilling of a missed item",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    def get_scheduler_config(self) -> SchedulerConfig:
        """Get scheduler configuration."""
        return SchedulerConfig(
            cooldown=self.cooldown_presentations,
            fresh_threshold=self.fresh_threshold,
            relapse_threshold=self.relapse_threshold,
            drill_streak=self.drill_streak,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
