"""User-friendly error messages for milestone-timeline.

Human-readable messages and recovery suggestions keyed by error code, so the
command line never shows raw tracebacks for expected failures.

Note:
- Messages never include document content
- Details are printed only for non-content keys
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Message Catalog
# =============================================================================

ERROR_MESSAGES: dict[str, str] = {
    # Configuration errors
    "CONFIGURATION_ERROR": "There's a configuration issue.",
    "INVALID_CONFIG": "The configuration file is invalid.",
    "MISSING_CONFIG": "No configuration file was found.",
    # Source errors
    "SOURCE_ERROR": "A vault or document issue occurred.",
    "VAULT_NOT_FOUND": "The vault directory wasn't found.",
    "DOCUMENT_READ_ERROR": "A document couldn't be read.",
    # Processing errors
    "PROCESSING_ERROR": "Failed to process the document.",
    "ANNOTATION_ERROR": "The year tag couldn't be added to that line.",
    # Generic
    "MILESTONE_TIMELINE_ERROR": "An unexpected error occurred. Please try again.",
    "UNKNOWN_ERROR": "Something went wrong. Please try again.",
}


# =============================================================================
# Recovery Suggestions
# =============================================================================

RECOVERY_SUGGESTIONS: dict[str, str] = {
    # Configuration errors
    "CONFIGURATION_ERROR": "Check config: milestone-timeline config show",
    "INVALID_CONFIG": "Recreate defaults: milestone-timeline config init --force",
    "MISSING_CONFIG": "Create one with: milestone-timeline config init",
    # Source errors
    "SOURCE_ERROR": "Check that the path exists and is readable.",
    "VAULT_NOT_FOUND": "Pass the folder that contains your markdown notes.",
    "DOCUMENT_READ_ERROR": "Ensure the file is UTF-8 encoded and readable.",
    # Processing errors
    "PROCESSING_ERROR": "Check if the file is corrupted or in an unsupported format.",
    "ANNOTATION_ERROR": "Re-run 'milestone-timeline years scan' to get current line numbers.",
    # Generic
    "MILESTONE_TIMELINE_ERROR": "If this persists, please report the issue.",
    "UNKNOWN_ERROR": "Run again with --verbose for more detail.",
}


# =============================================================================
# Helper Functions
# =============================================================================


def _error_code(error: Any) -> str:
    if hasattr(error, "code"):
        return error.code
    if isinstance(error, str):
        return error
    return type(error).__name__.upper()


def get_user_message(error: Any) -> str:
    """Get user-friendly message for an error.

    Args:
        error: The error (can be Exception or error code string)

    Returns:
        User-friendly error message
    """
    return ERROR_MESSAGES.get(_error_code(error), ERROR_MESSAGES["UNKNOWN_ERROR"])


def get_recovery_suggestion(error: Any) -> str:
    """Get recovery suggestion for an error."""
    return RECOVERY_SUGGESTIONS.get(_error_code(error), RECOVERY_SUGGESTIONS["UNKNOWN_ERROR"])


def format_error_for_user(error: Any) -> str:
    """Format a complete user-friendly error message with recovery suggestion."""
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)

    return f"{message}\n\nSuggestion: {suggestion}"


def format_error_for_cli(error: Any) -> str:
    """Format error for CLI output.

    Args:
        error: The error to format

    Returns:
        CLI-formatted error message
    """
    message = getattr(error, "user_message", None) or get_user_message(error)
    suggestion = get_recovery_suggestion(error)
    code = getattr(error, "code", "ERROR")

    lines = [
        f"Error [{code}]: {message}",
        "",
        f"Suggestion: {suggestion}",
    ]

    details = getattr(error, "details", None)
    if details:
        lines.append("")
        lines.append("Details:")
        for key, value in details.items():
            # Never echo note text back
            if key not in ("content", "text"):
                lines.append(f"  {key}: {value}")

    return "\n".join(lines)
