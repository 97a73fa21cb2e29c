"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DisplaySystem = Literal["imperial", "metric"]
DISPLAY_SYSTEMS: tuple[str, ...] = ("imperial", "metric")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Display
    default_display_system: DisplaySystem = "imperial"
    week_starts_on: int = 0  # 0 = Monday, 6 = Sunday

    # Client-local storage
    storage_path: str = ".bitepath/storage.json"
    struck_items_key: str = "bitepath-struckSharedGroceryItems"
    manual_items_key: str = "bitepath-manualGroceryItems"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    @property
    def origins(self) -> list[str]:
        """Get the allowed CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def resolve_display_system(preference: str | None) -> DisplaySystem:
    """
    Resolve a stored unit-system preference to a display system.

    Missing or unknown preferences fall back to the configured default.
    """
    if preference:
        value = preference.strip().lower()
        if value in DISPLAY_SYSTEMS:
            return value  # type: ignore[return-value]
    return get_settings().default_display_system


settings = get_settings()
