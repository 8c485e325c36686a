"""
Kindred Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of thresholds and history bounds
- Secure handling of secrets
"""

from kindred.config.settings import (
    DetectionSettings,
    MonitoringSettings,
    Settings,
    get_settings,
)

__all__ = ["DetectionSettings", "MonitoringSettings", "Settings", "get_settings"]
