"""Configuration management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Force map settings pulled from FORCEMAP_* environment variables."""

    # Boundary force defaults
    default_strength: float = Field(default=0.2, gt=0, description="Default boundary force strength")
    default_radius: float = Field(default=0.0, ge=0, description="Default node radius for boundary checks")
    max_recommended_strength: float = Field(
        default=2.0, gt=0, description="Strength above which overshoot oscillation is likely"
    )

    # Grid defaults
    default_cols: int = Field(default=1, ge=1, description="Default column count")
    default_rows: int = Field(default=1, ge=1, description="Default row count")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["json", "console"] = Field(default="json", description="Log renderer")

    class Config:
        env_prefix = "FORCEMAP_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
