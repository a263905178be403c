"""
Exception hierarchy for the job match application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class JobMatchException(Exception):
    """Base exception for all job match application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ProviderUnavailable(JobMatchException):
    """Raised when no candidate model responds."""

    def __init__(
        self,
        message: str,
        last_error: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider unavailable error.

        Args:
            message: Error message
            last_error: Last underlying provider error
            details: Additional context
        """
        details = details or {}
        if last_error is not None:
            details["last_error"] = f"{type(last_error).__name__}: {last_error}"
        self.last_error = last_error
        super().__init__(message, details)


class InvalidInput(JobMatchException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class AnalysisNotFound(JobMatchException):
    """Raised when no analysis is stored under an identifier."""

    def __init__(self, analysis_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["analysis_id"] = analysis_id
        super().__init__(f"Analysis not found: {analysis_id}", details)


class AnalysisNotReady(JobMatchException):
    """Raised when an answer is requested before processing completed."""

    def __init__(
        self,
        analysis_id: str,
        status: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["analysis_id"] = analysis_id
        details["status"] = status
        super().__init__(f"Analysis not completed. Current status: {status}", details)


class AnalysisInProgress(JobMatchException):
    """Raised when processing is requested for an analysis already being processed."""

    def __init__(self, analysis_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["analysis_id"] = analysis_id
        super().__init__(f"Analysis already in progress: {analysis_id}", details)


class AnalysisFailed(JobMatchException):
    """Raised when an analysis is (or ends up) in the error state."""

    def __init__(
        self,
        analysis_id: str,
        error: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize analysis failure.

        Args:
            analysis_id: ID of the failed analysis
            error: Stored failure detail
            details: Additional context
        """
        details = details or {}
        details["analysis_id"] = analysis_id
        self.error = error
        super().__init__(f"Analysis processing failed: {error}", details)


class NoContextAvailable(JobMatchException):
    """Raised when retrieval and every fallback yield no usable context."""

    def __init__(
        self,
        message: str = "No context available to answer this question",
        analysis_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if analysis_id:
            details["analysis_id"] = analysis_id
        super().__init__(message, details)
