"""Centralized error definitions for milestone-timeline.

The extraction engine never raises for content problems: unparseable dates are
dropped silently. These errors cover the surfaces around it, i.e. loading
settings, reading a vault and writing year annotations back.

Usage:
    from milestone_timeline.errors import MilestoneTimelineError, handle_error

    try:
        settings = load_settings(path)
    except MilestoneTimelineError as e:
        print(handle_error(e))
"""

from __future__ import annotations

from milestone_timeline.errors.user_messages import (
    format_error_for_cli,
    format_error_for_user,
    get_recovery_suggestion,
    get_user_message,
)


# =============================================================================
# Base Error
# =============================================================================


class MilestoneTimelineError(Exception):
    """Base exception for all milestone-timeline errors.

    Attributes:
        code: Error code for categorization
        user_message: User-friendly message (optional override)
        recoverable: Whether the error is potentially recoverable
        details: Additional error details for debugging
    """

    code: str = "MILESTONE_TIMELINE_ERROR"
    default_message: str = "An unexpected error occurred"
    recoverable: bool = True

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.message = message or self.default_message
        self._user_message = user_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def user_message(self) -> str:
        """Get user-friendly message."""
        if self._user_message:
            return self._user_message
        return get_user_message(self)

    @property
    def recovery_suggestion(self) -> str:
        """Get recovery suggestion."""
        return get_recovery_suggestion(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "recoverable": self.recoverable,
            "details": self.details,
        }


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MilestoneTimelineError):
    """Configuration-related error."""

    code = "CONFIGURATION_ERROR"
    default_message = "Configuration error"


class InvalidConfigError(ConfigurationError):
    """Configuration file could not be decoded or validated."""

    code = "INVALID_CONFIG"
    default_message = "Invalid configuration"


class MissingConfigError(ConfigurationError):
    """Configuration file does not exist."""

    code = "MISSING_CONFIG"
    default_message = "Configuration file not found"


# =============================================================================
# Source Errors
# =============================================================================


class SourceError(MilestoneTimelineError):
    """Base error for vault and document access."""

    code = "SOURCE_ERROR"
    default_message = "Source access failed"


class VaultNotFoundError(SourceError):
    """Vault root is missing or not a directory."""

    code = "VAULT_NOT_FOUND"
    default_message = "Vault not found"
    recoverable = False


class DocumentReadError(SourceError):
    """A markdown document could not be read or decoded."""

    code = "DOCUMENT_READ_ERROR"
    default_message = "Document could not be read"


# =============================================================================
# Processing Errors
# =============================================================================


class ProcessingError(MilestoneTimelineError):
    """Base error for document processing."""

    code = "PROCESSING_ERROR"
    default_message = "Processing failed"


class AnnotationError(ProcessingError):
    """A year annotation could not be applied to the requested line."""

    code = "ANNOTATION_ERROR"
    default_message = "Year annotation failed"


# =============================================================================
# Error Handler
# =============================================================================


def handle_error(error: Exception) -> str:
    """Handle an error and return a user-friendly message with recovery suggestion."""
    return format_error_for_user(error)


def is_recoverable(error: Exception) -> bool:
    """Check if an error is potentially recoverable."""
    if isinstance(error, MilestoneTimelineError):
        return error.recoverable
    return False


__all__ = [
    # Base
    "MilestoneTimelineError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigError",
    "MissingConfigError",
    # Source
    "SourceError",
    "VaultNotFoundError",
    "DocumentReadError",
    # Processing
    "ProcessingError",
    "AnnotationError",
    # Helpers
    "handle_error",
    "is_recoverable",
    "get_user_message",
    "get_recovery_suggestion",
    "format_error_for_user",
    "format_error_for_cli",
]
