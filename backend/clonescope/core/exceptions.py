"""
Custom exceptions for the CloneScope scoring pipeline.

This module provides a hierarchy of exceptions for consistent error handling
across the application. All exceptions inherit from CloneScopeError.

Example:
    try:
        catalog.load()
    except CatalogLoadError as e:
        logger.error(f"Catalog unavailable: {e}")
"""

from pathlib import Path
from typing import Optional, Union


class CloneScopeError(Exception):
    """
    Base exception class for all CloneScope errors.

    Attributes:
        message: Human-readable description of the error.
        details: Optional additional context for debugging.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation with optional details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class CatalogLoadError(CloneScopeError):
    """
    Exception raised when the technology profile dataset cannot be loaded.

    This is the only fatal error of the pipeline: the service cannot start
    without its catalog, so it is propagated and never retried.

    Attributes:
        path: Location of the dataset that failed to load.
        original_error: The underlying exception if available.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        original_error: Optional[Exception] = None,
        details: Optional[str] = None,
    ) -> None:
        self.path = str(path) if path is not None else None
        self.original_error = original_error

        enhanced_message = f"[Catalog] {message}"
        if self.path:
            enhanced_message = f"{enhanced_message} (path: {self.path})"
        if original_error:
            enhanced_message = (
                f"{enhanced_message} | Caused by: "
                f"{type(original_error).__name__}: {str(original_error)[:200]}"
            )

        super().__init__(enhanced_message, details)


class InsightsGenerationError(CloneScopeError):
    """
    Exception raised when full insights generation fails.

    Transient by definition: the orchestrator retries it with backoff and then
    degrades to fallback insights, so it never reaches the orchestrator's caller.

    Attributes:
        attempts: Number of attempts made before giving up.
        original_error: The underlying exception if available.
    """

    def __init__(
        self,
        message: str,
        attempts: int = 0,
        original_error: Optional[Exception] = None,
        details: Optional[str] = None,
    ) -> None:
        self.attempts = attempts
        self.original_error = original_error

        enhanced_message = f"[Insights] {message}"
        if attempts > 0:
            enhanced_message = f"{enhanced_message} (attempts: {attempts})"
        if original_error:
            enhanced_message = (
                f"{enhanced_message} | Caused by: "
                f"{type(original_error).__name__}: {str(original_error)[:200]}"
            )

        super().__init__(enhanced_message, details)


class ScoringValidationError(CloneScopeError):
    """
    Exception raised when a scoring invariant is violated.

    Covers constructor-time checks such as the clonability weights not
    summing to 1.0.

    Attributes:
        field: Name of the offending configuration value.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        self.field = field

        enhanced_message = f"[Scoring] {message}"
        if field:
            enhanced_message = f"{enhanced_message} (field: {field})"

        super().__init__(enhanced_message, details)
