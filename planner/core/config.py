"""Planner configuration using pydantic-settings (env prefix PLANNER_)."""

from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from planner.core.contribution_math import ProjectionAssumptions


class Settings(BaseSettings):
    """Projection assumptions plus HTTP server and logging settings."""

    model_config = SettingsConfigDict(env_prefix="PLANNER_")

    annual_return_rate: float = Field(0.05, ge=0, le=1)
    retirement_age: int = Field(65, gt=0, lt=120)

    host: str = "127.0.0.1"
    port: int = 4000
    debug: bool = False
    cors_origins: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    log_level: str = "INFO"
    log_json: bool = False

    def assumptions(self) -> ProjectionAssumptions:
        return ProjectionAssumptions(
            retirement_age=self.retirement_age,
            annual_return_rate=self.annual_return_rate,
        )
