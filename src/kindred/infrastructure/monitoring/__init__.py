"""Error tracking infrastructure package."""

from kindred.infrastructure.monitoring.sentry_integration import (
    capture_exception_with_context,
    init_sentry,
    scrub,
)

__all__ = ["capture_exception_with_context", "init_sentry", "scrub"]
