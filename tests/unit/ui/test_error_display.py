"""Tests for error classification and display."""

from unittest.mock import patch

import pytest
from streamlit.runtime.scriptrunner_utils.exceptions import RerunException

from timeless.ui.components.error_display import ErrorDisplayManager, error_context
from timeless.ui.handlers.error import (
    DatabaseError,
    ErrorCategory,
    ErrorHandler,
    ErrorSeverity,
    TimelessError,
    UploadError,
    ValidationError,
    handle_error,
)


class TestErrorClasses:
    """Error hierarchy defaults."""

    def test_validation_error_defaults(self):
        error = ValidationError("title missing")

        assert error.category is ErrorCategory.VALIDATION
        assert error.severity is ErrorSeverity.LOW
        assert error.code == "validation_failed"
        assert error.user_message == "All fields are required"

    def test_upload_error_is_retryable(self):
        error = UploadError("Cloudinary rejected the file")

        assert error.retry_suggested is True
        assert error.code == "upload_failed"

    def test_error_info_round_trip(self):
        error = DatabaseError("disk full", code="create_failed", details={"operation": "create"})

        info = error.get_error_info().to_dict()

        assert info["category"] == "database"
        assert info["severity"] == "high"
        assert info["code"] == "create_failed"
        assert info["details"] == {"operation": "create"}

    def test_errors_log_on_creation(self):
        with patch("timeless.ui.handlers.error.log_error") as mock_log:
            error = UploadError("boom", details={"filename": "imgA.jpg"})

        mock_log.assert_called_once()
        assert mock_log.call_args[0][0] is error
        assert mock_log.call_args[0][1]["filename"] == "imgA.jpg"


class TestErrorHandler:
    """Classification of foreign exceptions."""

    def setup_method(self):
        self.handler = ErrorHandler()

    @pytest.mark.parametrize(
        ("message", "category"),
        [
            ("secure_url missing from upload response", ErrorCategory.UPLOAD),
            ("cannot identify image file", ErrorCategory.IMAGE_PROCESSING),
            ("duckdb catalog error", ErrorCategory.DATABASE),
            ("bucket does not exist", ErrorCategory.STORAGE),
            ("Required configuration 'X' not found", ErrorCategory.VALIDATION),
            ("connection reset by peer", ErrorCategory.NETWORK),
            ("something odd", ErrorCategory.UNKNOWN),
        ],
    )
    def test_classification(self, message, category):
        assert self.handler.handle_error(RuntimeError(message)).category is category

    def test_timeless_errors_pass_through(self):
        error = ValidationError("missing", code="required_fields_missing")

        assert self.handler.handle_error(error).code == "required_fields_missing"

    def test_frequent_errors_are_logged(self):
        with patch.object(self.handler, "logger") as mock_logger:
            for _ in range(10):
                self.handler.handle_error(RuntimeError("something odd"))

        mock_logger.warning.assert_called_once_with("frequent_error_detected", error_code="unknown_error", count=10)

    def test_global_handle_error(self):
        assert isinstance(handle_error(ValueError("invalid date")).category, ErrorCategory)


class TestErrorDisplay:
    """Streamlit display of errors."""

    @patch("timeless.ui.components.error_display.st")
    def test_display_error_alert_by_severity(self, mock_st):
        manager = ErrorDisplayManager()

        manager.display_error(DatabaseError("disk full").get_error_info())
        manager.display_error(ValidationError("missing").get_error_info())

        mock_st.error.assert_called_once_with("Could not save or load memories. Please try again.")
        mock_st.warning.assert_called_once_with("All fields are required")

    @patch("timeless.ui.components.error_display.st")
    def test_display_form_error(self, mock_st):
        manager = ErrorDisplayManager()

        manager.display_form_error(ValidationError("missing", user_message="Please fill in all fields"))
        manager.display_form_error(UploadError("Cloudinary rejected the file"))

        mock_st.warning.assert_called_once_with("Please fill in all fields")
        mock_st.error.assert_called_once()

    @patch("timeless.ui.components.error_display.st")
    def test_error_context_swallows_and_displays(self, mock_st):
        with error_context("Loading timeline"):
            raise TimelessError("broken")

        mock_st.error.assert_called_once()

    @patch("timeless.ui.components.error_display.st")
    def test_error_context_lets_rerun_through(self, mock_st):
        with pytest.raises(RerunException):
            with error_context("Loading timeline"):
                raise RerunException(None)

        mock_st.error.assert_not_called()
