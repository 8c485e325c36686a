"""
Kindred Application Settings

Configuration management using Pydantic Settings.
All values can be overridden from environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DetectionSettings(BaseSettings):
    """
    Crisis detection engine configuration.

    One instance is passed to each CrisisDetectionSession.

    CLINICAL_VALIDATION_REQUIRED: Floors and deltas below drive
    crisis events and must be reviewed before production use.
    """

    model_config = SettingsConfigDict(env_prefix="KINDRED_DETECTION_")

    # Feature toggles
    enable_ml_analysis: bool = Field(default=True, description="Call the ML analyzer when one is injected")
    enable_emotional_tracking: bool = Field(default=True, description="Record emotional history")
    enable_cultural_context: bool = Field(default=True, description="Apply cultural bias adjustments")
    auto_analyze: bool = Field(default=True, description="Analyze monitored text inputs automatically")
    allow_heuristic_fallback: bool = Field(
        default=True,
        description="Use the keyword heuristic when ML is disabled or fails",
    )

    # Input and history bounds
    min_analysis_length: int = Field(default=10, ge=0, le=10_000)
    max_history_size: int = Field(default=100, ge=1, le=10_000)
    emotional_history_limit: int = Field(default=50, ge=1, le=10_000)
    risk_trend_window: int = Field(default=10, ge=1, le=10_000)
    debounce_ms: int = Field(default=1000, ge=0, le=60_000)

    # Thresholds (canonical 0-100 risk scale)
    confidence_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    crisis_risk_floor: float = Field(default=70.0, ge=0.0, le=100.0)
    escalation_delta: float = Field(default=20.0, ge=0.0, le=100.0)

    # ML backend
    ml_timeout_seconds: float = Field(default=5.0, gt=0.0, le=120.0)

    # Resources
    default_country_code: str = Field(default="US", min_length=2, max_length=4)


class MonitoringSettings(BaseSettings):
    """Error tracking and metrics configuration."""

    model_config = SettingsConfigDict(env_prefix="KINDRED_")

    sentry_dsn: SecretStr = Field(default=SecretStr(""), description="Sentry DSN (empty disables)")
    sentry_traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    metrics_enabled: bool = Field(default=True)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with KINDRED_ prefix.

    Usage:
        settings = get_settings()
        session = CrisisDetectionSession(settings.detection)
    """

    model_config = SettingsConfigDict(
        env_prefix="KINDRED_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    # Nested settings
    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @model_validator(mode="after")
    def validate_history_windows(self) -> "Settings":
        """Risk trend window can never exceed the analysis history."""
        detection = self.detection
        if detection.risk_trend_window > detection.max_history_size:
            raise ValueError(
                "risk_trend_window must not exceed max_history_size"
            )
        return self

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    For tests, construct DetectionSettings directly and pass it
    to the session instead of relying on the cache.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
