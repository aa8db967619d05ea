"""
Streamlit error display components for user-friendly error presentation.

This module provides components for displaying errors within the Streamlit
interface, with severity-appropriate styling.
"""

from typing import Any

import streamlit as st
from streamlit.runtime.scriptrunner_utils.exceptions import RerunException, StopException

from timeless.ui.handlers.error import ErrorInfo, ErrorSeverity, TimelessError, ValidationError, handle_error
from ...logging_config import get_logger

# Type alias for Streamlit container
StreamlitContainer = Any

logger = get_logger(__name__)


class ErrorDisplayManager:
    """Manager for displaying errors in Streamlit interface."""

    def display_error(
        self,
        error_info: ErrorInfo,
        container: StreamlitContainer | None = None,
        show_details: bool = False,
    ) -> None:
        """
        Display error information in Streamlit interface.

        Args:
            error_info: Structured error information
            container: Streamlit container to display in (optional)
            show_details: Whether to show technical details
        """
        alert_type = self._get_alert_type(error_info.severity)

        def _display_content() -> None:
            if alert_type == "error":
                st.error(error_info.user_message)
            elif alert_type == "warning":
                st.warning(error_info.user_message)
            else:
                st.info(error_info.user_message)

            if show_details and error_info.details:
                with st.expander("Details", expanded=False):
                    st.write("**Error code:**", error_info.code)
                    st.write("**Category:**", error_info.category.value)
                    st.write("**Time:**", error_info.timestamp.strftime("%Y-%m-%d %H:%M:%S"))
                    for key, value in error_info.details.items():
                        st.write(f"- {key}: {value}")

        if container is not None:
            with container:
                _display_content()
        else:
            _display_content()

        logger.info(
            "error_displayed_to_user",
            error_code=error_info.code,
            category=error_info.category.value,
            severity=error_info.severity.value,
            user_message=error_info.user_message,
        )

    def display_exception(
        self,
        exception: Exception,
        context: dict[str, Any] | None = None,
        container: StreamlitContainer | None = None,
        show_details: bool = False,
    ) -> ErrorInfo:
        """
        Classify an exception and display it.

        Returns:
            ErrorInfo: The classified error
        """
        error_info = handle_error(exception, context)
        self.display_error(error_info=error_info, container=container, show_details=show_details)
        return error_info

    def display_form_error(self, error: TimelessError) -> None:
        """Show a failed form submission: missing fields as a notice, anything else as an error."""
        if isinstance(error, ValidationError):
            st.warning(error.user_message)
            return
        self.display_error(error.get_error_info())

    def _get_alert_type(self, severity: ErrorSeverity) -> str:
        """Map severity to a Streamlit alert type."""
        if severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL, ErrorSeverity.MEDIUM):
            return "error"
        return "warning"


error_display_manager = ErrorDisplayManager()


def get_error_display_manager() -> ErrorDisplayManager:
    """Get the global error display manager instance."""
    return error_display_manager


class StreamlitErrorContext:
    """Context manager that shows errors raised inside a Streamlit block instead of crashing the page."""

    def __init__(
        self,
        error_message: str = "Something went wrong",
        show_details: bool = False,
        container: StreamlitContainer | None = None,
    ):
        self.error_message = error_message
        self.show_details = show_details
        self.container = container

    def __enter__(self) -> "StreamlitErrorContext":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        if exc_type is None:
            return False

        # st.rerun() and st.stop() are control flow, not errors
        if isinstance(exc_val, (RerunException, StopException)):
            return False

        if not isinstance(exc_val, Exception):
            return False

        logger.warning("error_context_caught", context_message=self.error_message, error=str(exc_val))
        error_display_manager.display_exception(
            exception=exc_val,
            context={"context_message": self.error_message},
            container=self.container,
            show_details=self.show_details,
        )
        return True


def error_context(
    error_message: str = "Something went wrong",
    show_details: bool = False,
    container: StreamlitContainer | None = None,
) -> StreamlitErrorContext:
    """Create an error context manager for Streamlit operations."""
    return StreamlitErrorContext(error_message, show_details, container)
