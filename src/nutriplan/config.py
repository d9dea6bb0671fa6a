"""Application configuration."""

import os
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    knowledge_source: Literal["seed", "supabase"] = "seed"
    operational_timezone: str = "Asia/Jakarta"
    selection_weekday: int = Field(default=4, ge=0, le=6)
    selection_cutoff_hour: int = Field(default=17, ge=0, le=23)
    auto_assignment_enabled: bool = True
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
