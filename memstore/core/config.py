"""Runtime configuration for the in-memory session store."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..schemas.sessions import StoreConfig


class Settings(BaseSettings):
    """Store settings loaded from ``SESSION_STORE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SESSION_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    timeout_ticks: int = Field(default=-1, description="Sweep cycles an idle session survives; negative disables")
    sweep_interval: float = Field(default=60.0, gt=0, description="Seconds between sweep cycles")

    @field_validator("timeout_ticks", mode="before")
    @classmethod
    def _blank_means_disabled(cls, value: object) -> object:
        """Treat an empty env value as the disabled sentinel."""

        if isinstance(value, str) and not value.strip():
            return -1
        return value

    def store_config(self) -> StoreConfig:
        return StoreConfig(timeout_ticks=self.timeout_ticks, sweep_interval=self.sweep_interval)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
