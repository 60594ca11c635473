"""Configuration management for school analytics."""

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from models.outputs import TierThresholds


class TierConfig(BaseSettings):
    """Tier threshold settings (lower bounds, inclusive)."""

    green_threshold: float = Field(85.0)
    orange_threshold: float = Field(75.0)
    red_threshold: float = Field(65.0)

    model_config = SettingsConfigDict(
        env_prefix="SCHOOL_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_ordering(self):
        """Thresholds must be strictly descending."""
        if not (self.green_threshold > self.orange_threshold > self.red_threshold):
            raise ValueError(
                "Tier thresholds must be strictly descending: green > orange > red"
            )
        return self

    def to_thresholds(self) -> TierThresholds:
        return TierThresholds(
            green=self.green_threshold,
            orange=self.orange_threshold,
            red=self.red_threshold,
        )


class AppConfig(BaseSettings):
    """Application configuration settings."""

    name: str = Field("school-analytics")
    version: str = Field("0.1.0")
    log_level: str = Field("INFO")
    debug: bool = Field(False)
    decimal_places: int = Field(1, ge=0, le=6)
    uploads_path: Optional[str] = Field(None)
    roster_path: Optional[str] = Field(None)

    model_config = SettingsConfigDict(
        env_prefix="SCHOOL_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class Settings(BaseSettings):
    """Main application settings."""

    tiers: TierConfig = Field(default_factory=TierConfig)
    app: AppConfig = Field(default_factory=AppConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment."""
        return cls()
