"""Reusable UI components for timeless application."""

import streamlit as st
import structlog

from timeless import __version__
from timeless.ui.handlers.navigation import CREATE_PAGE, TIMELINE_PAGE, navigate

logger = structlog.get_logger()


def render_empty_state(
    title: str,
    description: str,
    icon: str = "📭",
    action_text: str | None = None,
    action_page: str | None = None,
) -> None:
    """
    Render an empty state message with optional action button.

    Args:
        title: Main title for the empty state
        description: Description text
        icon: Emoji icon to display
        action_text: Text for action button (optional)
        action_page: Page to navigate to when action button is clicked (optional)
    """
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        st.markdown(
            f"""
        <div style='text-align: center; padding: 2rem 0;'>
            <div style='font-size: 4rem; margin-bottom: 1rem;'>{icon}</div>
            <h3 style='color: #5F6368; margin-bottom: 1rem;'>{title}</h3>
            <p style='color: #888; margin-bottom: 2rem;'>{description}</p>
        </div>
        """,
            unsafe_allow_html=True,
        )

        if action_text and action_page:
            if st.button(action_text, use_container_width=True, type="primary", key=f"empty_action_{action_page}"):
                navigate(action_page)


def render_loading_state(message: str = "Loading timeline...") -> None:
    """Centered placeholder shown while memories are unavailable."""
    st.markdown(
        f"<p style='text-align: center; margin-top: 5rem; color: #5F6368;'>{message}</p>",
        unsafe_allow_html=True,
    )


def render_sidebar() -> None:
    """Render the navigation sidebar."""
    with st.sidebar:
        st.markdown("### 🕰️ Timeless")
        st.divider()

        current_page = st.session_state.get("current_page", TIMELINE_PAGE)
        pages = {"🕰️ Timeline": TIMELINE_PAGE, "➕ New memory": CREATE_PAGE}

        for page_name, page_key in pages.items():
            if st.button(
                page_name,
                key=f"nav_{page_key}",
                use_container_width=True,
                type="primary" if page_key == current_page else "secondary",
            ):
                navigate(page_key)

        st.divider()
        st.caption(f"timeless v{__version__}")
