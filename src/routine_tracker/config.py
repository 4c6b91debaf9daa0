"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from routine_tracker.domain.scoring import ScoringPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: Literal["memory", "supabase"] = "memory"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    diet_weight: float = 0.4
    workout_weight: float = 0.45
    consistency_weight: float = 0.15
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def scoring_policy(self) -> ScoringPolicy:
        """Return the configured daily scoring weights."""
        return ScoringPolicy(
            diet_weight=self.diet_weight,
            workout_weight=self.workout_weight,
            consistency_weight=self.consistency_weight,
        )
