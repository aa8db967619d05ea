"""Tests for main Streamlit application."""

from unittest.mock import patch

import pytest

from timeless.main import initialize_session_state, main, render_main_content, sync_route_from_url


@pytest.fixture
def app_st():
    """Patch streamlit in the main module with dict-backed session state."""

    class SessionState(dict):
        __getattr__ = dict.__getitem__
        __setattr__ = dict.__setitem__

    with patch("timeless.main.st") as mock_st:
        mock_st.session_state = SessionState()
        mock_st.query_params = {}
        yield mock_st


class TestMainApplication:
    """Test main application functionality."""

    def test_initialize_session_state(self, app_st):
        initialize_session_state()

        assert app_st.session_state.current_page == "timeline"
        assert app_st.session_state.route_memory_id is None

    def test_route_taken_from_url(self, app_st):
        initialize_session_state()
        app_st.query_params = {"page": "edit", "id": "abc"}

        assert sync_route_from_url() == ("edit", "abc")
        assert app_st.session_state.current_page == "edit"

    @patch("timeless.main.get_client")
    @patch("timeless.main.render_timeline_page")
    @patch("timeless.main.render_create_page")
    @patch("timeless.main.render_edit_page")
    def test_dispatch(self, mock_edit, mock_create, mock_timeline, mock_get_client, app_st):
        client = mock_get_client.return_value

        render_main_content("create", None)
        render_main_content("edit", "abc")
        render_main_content("timeline", "abc")

        mock_create.assert_called_once_with(client)
        mock_edit.assert_called_once_with(client, "abc")
        mock_timeline.assert_called_once_with(client, selected_memory_id="abc")

    @patch("timeless.main.render_sidebar")
    @patch("timeless.main.render_main_content")
    def test_main_function_basic(self, mock_content, mock_sidebar, app_st):
        main()

        app_st.set_page_config.assert_called_once()
        mock_sidebar.assert_called_once()
        mock_content.assert_called_once_with("timeline", None)

    @patch("timeless.main.error_display")
    @patch("timeless.main.render_sidebar", side_effect=RuntimeError("sidebar exploded"))
    def test_main_handles_critical_error(self, mock_sidebar, mock_error_display, app_st):
        app_st.button.return_value = False

        main()

        mock_error_display.display_exception.assert_called_once()

    @patch("timeless.ui.components.error_display.st")
    @patch("timeless.main.get_client", side_effect=ValueError("Required configuration 'CLOUDINARY_CLOUD_NAME' not found"))
    def test_missing_configuration_is_shown_in_context(self, mock_get_client, mock_display_st, app_st):
        render_main_content("timeline", None)

        mock_display_st.error.assert_called_once()
