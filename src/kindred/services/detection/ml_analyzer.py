"""
ML Crisis Analyzer Interface

Abstract interface for an external crisis analyzer, injected into
a detection session at construction.

ARCHITECTURE: Sessions depend only on this interface. A session
without an analyzer uses the keyword heuristic, which is a
supported path rather than an error.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import ValidationError

from kindred.domain.models.ml_analysis import MLAnalysisResult


@dataclass(frozen=True)
class AnalysisContext:
    """
    Session-level context sent along with each text.

    Attributes:
        user_id: Optional user identifier
        language_code: BCP-47 language of the text
        cultural_context: Cultural region label, if known
    """

    user_id: Optional[str] = None
    language_code: str = "en"
    cultural_context: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "language_code": self.language_code,
            "cultural_context": self.cultural_context,
        }


class CrisisAnalyzerError(Exception):
    """Base exception for analyzer failures."""

    def __init__(
        self,
        message: str,
        analyzer: str,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.analyzer = analyzer
        self.original_error = original_error


class AnalysisTimeoutError(CrisisAnalyzerError):
    """Analyzer did not answer within the configured timeout."""

    def __init__(self, analyzer: str, timeout_seconds: float) -> None:
        super().__init__(
            f"{analyzer} analysis timed out after {timeout_seconds}s",
            analyzer=analyzer,
        )
        self.timeout_seconds = timeout_seconds


class InvalidAnalysisPayloadError(CrisisAnalyzerError):
    """Analyzer returned a payload that failed validation."""


AnalyzerPayload = Union[MLAnalysisResult, Mapping[str, Any]]


class CrisisMLAnalyzer(ABC):
    """
    Abstract crisis analyzer.

    Implementations may call a remote service or run a local model.
    They may raise any exception; the session treats every exception
    as a backend failure.
    """

    name: str = "ml-analyzer"

    @abstractmethod
    async def analyze(self, text: str, context: AnalysisContext) -> AnalyzerPayload:
        """
        Analyze text for crisis indicators.

        Args:
            text: User-authored text
            context: Session context

        Returns:
            MLAnalysisResult, or a camelCase mapping in the same shape
        """
        pass


def coerce_payload(payload: AnalyzerPayload, analyzer: str) -> MLAnalysisResult:
    """
    Validate an analyzer payload into an MLAnalysisResult.

    Args:
        payload: Model instance or raw mapping
        analyzer: Analyzer name for error reporting

    Returns:
        Validated MLAnalysisResult

    Raises:
        InvalidAnalysisPayloadError: If the payload does not validate
    """
    if isinstance(payload, MLAnalysisResult):
        return payload
    if not isinstance(payload, Mapping):
        raise InvalidAnalysisPayloadError(
            f"Unexpected payload type {type(payload).__name__}",
            analyzer=analyzer,
        )
    try:
        return MLAnalysisResult.model_validate(dict(payload))
    except ValidationError as e:
        raise InvalidAnalysisPayloadError(
            "Analyzer payload failed validation",
            analyzer=analyzer,
            original_error=e,
        ) from e
