"""Tests for the error hierarchy and user-facing formatting."""

from __future__ import annotations

from milestone_timeline.errors import (
    AnnotationError,
    ConfigurationError,
    InvalidConfigError,
    MilestoneTimelineError,
    VaultNotFoundError,
    format_error_for_cli,
    handle_error,
    is_recoverable,
)


class TestErrorHierarchy:
    """Tests for error codes and defaults."""

    def test_defaults(self):
        error = InvalidConfigError()
        assert isinstance(error, ConfigurationError)
        assert error.code == "INVALID_CONFIG"
        assert error.message == "Invalid configuration"
        assert error.user_message == "The configuration file is invalid."
        assert "config init --force" in error.recovery_suggestion

    def test_user_message_override(self):
        error = AnnotationError("line 9 missing", user_message="Nothing to tag")
        assert error.user_message == "Nothing to tag"
        assert str(error) == "line 9 missing"

    def test_to_dict(self):
        error = VaultNotFoundError("gone", details={"path": "/x"})
        assert error.to_dict() == {
            "code": "VAULT_NOT_FOUND",
            "message": "gone",
            "user_message": "The vault directory wasn't found.",
            "recoverable": False,
            "details": {"path": "/x"},
        }

    def test_is_recoverable(self):
        assert is_recoverable(AnnotationError()) is True
        assert is_recoverable(VaultNotFoundError()) is False
        assert is_recoverable(RuntimeError()) is False


class TestFormatting:
    """Tests for CLI and user formatting."""

    def test_cli_format(self):
        error = AnnotationError(details={"line_number": 3, "text": "secret note text"})
        output = format_error_for_cli(error)

        assert output.startswith("Error [ANNOTATION_ERROR]: ")
        assert "Suggestion: " in output
        assert "line_number: 3" in output
        assert "secret note text" not in output

    def test_handle_error_unknown_exception(self):
        assert handle_error(KeyError("x")).startswith("Something went wrong.")

    def test_base_error(self):
        assert "unexpected" in handle_error(MilestoneTimelineError())
