"""
Sentry Error Tracking Integration

Error tracking for analyzer failures with sensitive data scrubbing.
Correlates errors with detection session IDs.

PRIVACY: User text and secrets are stripped before any event
leaves the process.
"""

import re
from typing import Any, Optional

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from kindred.config.logging_config import USER_CONTENT_KEYS, get_logger

logger = get_logger(__name__)

# Patterns for secrets embedded in strings
SENSITIVE_PATTERNS = [
    r"api[_-]?key[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"token[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"secret[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"bearer\s+[a-zA-Z0-9\-._~+/]+=*",
]

SENSITIVE_KEYS = frozenset({
    "password",
    "token",
    "secret",
    "api_key",
    "apikey",
    "authorization",
    "credential",
    "dsn",
})


def _scrub_string(value: str) -> str:
    """Scrub sensitive patterns from string."""
    result = value
    for pattern in SENSITIVE_PATTERNS:
        result = re.sub(pattern, "[REDACTED]", result, flags=re.IGNORECASE)
    return result


def scrub(data: Any, key: str = "") -> Any:
    """
    Recursively scrub secrets and user text.

    Args:
        data: Value to scrub
        key: Key the value was found under

    Returns:
        Scrubbed copy
    """
    key_lower = key.lower().replace("-", "_")
    if key_lower in USER_CONTENT_KEYS:
        return "[USER_TEXT]"
    if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS):
        return "[REDACTED]"
    if isinstance(data, dict):
        return {k: scrub(v, str(k)) for k, v in data.items()}
    if isinstance(data, list):
        return [scrub(item, key) for item in data]
    if isinstance(data, str):
        return _scrub_string(data)
    return data


def before_send(event: dict, hint: dict) -> Optional[dict]:
    """Scrub extra context and breadcrumbs before sending to Sentry."""
    if "extra" in event:
        event["extra"] = scrub(event["extra"])

    for breadcrumb in event.get("breadcrumbs", {}).get("values", []):
        if isinstance(breadcrumb.get("data"), dict):
            breadcrumb["data"] = scrub(breadcrumb["data"])

    # Exception values can echo analyzer input
    for exception in event.get("exception", {}).get("values", []):
        if isinstance(exception.get("value"), str):
            exception["value"] = _scrub_string(exception["value"])

    return event


def init_sentry(
    dsn: str,
    environment: str = "development",
    release: str = "kindred-crisis-engine@0.1.0",
    traces_sample_rate: float = 0.1,
) -> bool:
    """
    Initialize Sentry error tracking.

    Args:
        dsn: Sentry DSN, empty disables tracking
        environment: Environment name
        release: Release version
        traces_sample_rate: Performance tracing rate

    Returns:
        True if Sentry was initialized
    """
    if not dsn:
        logger.warning("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        traces_sample_rate=traces_sample_rate,
        before_send=before_send,
        integrations=[
            AsyncioIntegration(),
            LoggingIntegration(level=None, event_level=None),
        ],
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
    )

    logger.info("Sentry initialized", environment=environment, release=release)
    return True


def capture_exception_with_context(
    exception: BaseException,
    session_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> Optional[str]:
    """
    Capture exception with detection context.

    A no-op returning None when Sentry is not initialized.

    Returns:
        Sentry event ID
    """
    with sentry_sdk.new_scope() as scope:
        scope.set_tag("component", "crisis-detection")
        if session_id:
            scope.set_tag("detection_session_id", session_id)
        if extra:
            for key, value in scrub(extra).items():
                scope.set_extra(key, value)
        return sentry_sdk.capture_exception(exception)
