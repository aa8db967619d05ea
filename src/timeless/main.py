"""
Main Streamlit application for timeless.

This is the entry point for the memories timeline web application.
"""

import streamlit as st

from timeless.config import get_debug_mode
from timeless.logging_config import configure_structured_logging, get_logger
from timeless.ui.components.common import render_sidebar
from timeless.ui.components.error_display import error_context, get_error_display_manager
from timeless.ui.handlers.navigation import CREATE_PAGE, EDIT_PAGE, TIMELINE_PAGE, resolve_route
from timeless.ui.handlers.timeline import get_client
from timeless.ui.pages.create import render_create_page
from timeless.ui.pages.edit import render_edit_page
from timeless.ui.pages.timeline import render_timeline_page

# Configure structured logging
configure_structured_logging()
logger = get_logger(__name__)
error_display = get_error_display_manager()


def initialize_session_state() -> None:
    """Initialize session state variables."""
    if "current_page" not in st.session_state:
        st.session_state.current_page = TIMELINE_PAGE

    if "route_memory_id" not in st.session_state:
        st.session_state.route_memory_id = None


def sync_route_from_url() -> tuple[str, str | None]:
    """Take the current page from the URL so links and reloads land on the right page."""
    page, memory_id = resolve_route(st.query_params)
    if page != st.session_state.current_page:
        logger.info("route_from_url", from_page=st.session_state.current_page, to_page=page, memory_id=memory_id)
    st.session_state.current_page = page
    st.session_state.route_memory_id = memory_id
    return page, memory_id


def render_main_content(page: str, memory_id: str | None) -> None:
    """Render the main content area based on current page with error handling."""
    with error_context(f"Error while loading the '{page}' page"):
        client = get_client()

        if page == CREATE_PAGE:
            render_create_page(client)
        elif page == EDIT_PAGE and memory_id:
            render_edit_page(client, memory_id)
        else:
            render_timeline_page(client, selected_memory_id=memory_id)


def main() -> None:
    """Main application entry point."""
    logger.info("application_starting", page="main")

    try:
        st.set_page_config(
            page_title="Timeless - Memories",
            page_icon="🕰️",
            layout="wide",
            initial_sidebar_state="collapsed",
            menu_items={
                "Get Help": None,
                "Report a bug": None,
                "About": "Timeless - a timeline of shared memories",
            },
        )

        initialize_session_state()
        page, memory_id = sync_route_from_url()

        logger.info("session_initialized", current_page=page, memory_id=memory_id)

        render_sidebar()

        with st.container():
            render_main_content(page, memory_id)

        if get_debug_mode():
            with st.expander("Debug Info"):
                st.write("Session State:", st.session_state)

    except Exception as e:
        logger.error("critical_application_error", error=str(e))
        error_display.display_exception(e, context={"operation": "main_application"}, show_details=True)

        if st.button("🔄 Restart application", type="primary"):
            st.rerun()


if __name__ == "__main__":
    main()
