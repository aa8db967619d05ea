"""Timeline page for timeless application."""

import streamlit as st
import structlog

from timeless.config import get_swipe_threshold
from timeless.core.timeline import Direction, TimelineViewModel
from timeless.services.client import TimelessClient
from timeless.ui.components.carousel import render_carousel
from timeless.ui.components.common import render_empty_state, render_loading_state
from timeless.ui.components.timeline_strip import render_memory_picker, render_timeline_strip
from timeless.ui.handlers.navigation import CREATE_PAGE, EDIT_PAGE, TIMELINE_PAGE, navigate
from timeless.ui.handlers.timeline import build_timeline, load_memories, step_timeline

logger = structlog.get_logger(__name__)


def render_active_memory(timeline: TimelineViewModel) -> None:
    """Render the active memory with its carousel, details and navigation."""
    memory = timeline.active_memory
    if memory is None:
        return

    col_prev, col_images, col_details, col_next = st.columns([1, 10, 8, 1], vertical_alignment="center")

    with col_prev:
        if st.button("‹", key="timeline_prev", help="Previous memory"):
            previous = step_timeline(timeline, Direction.PREVIOUS, st.session_state)
            navigate(TIMELINE_PAGE, previous.id if previous else None)

    with col_images:
        render_carousel(memory.id, memory.images, memory.title, threshold=get_swipe_threshold())

    with col_details:
        st.markdown(
            f"<p style='color: #38BDF8; font-weight: 600; letter-spacing: 0.05em;'>{memory.normalized_date}</p>",
            unsafe_allow_html=True,
        )
        st.markdown(f"## {memory.title}")
        st.write(memory.description)
        if st.button("✏️ Edit memory", key=f"edit_{memory.id}"):
            navigate(EDIT_PAGE, memory.id)

    with col_next:
        if st.button("›", key="timeline_next", help="Next memory"):
            following = step_timeline(timeline, Direction.NEXT, st.session_state)
            navigate(TIMELINE_PAGE, following.id if following else None)


def render_timeline_page(client: TimelessClient, selected_memory_id: str | None = None) -> None:
    """Render the timeline: active memory on top, calendar strip below."""
    memories = load_memories(client, st.session_state)

    if memories is None:
        # Load failed and was logged; stay in the loading state
        render_loading_state()
        return

    if not memories:
        render_empty_state(
            title="No memories yet",
            description="Your timeline is empty. Add your first memory to get started!",
            icon="📷",
            action_text="Create a memory",
            action_page=CREATE_PAGE,
        )
        return

    timeline = build_timeline(memories, st.session_state, selected_memory_id)
    logger.debug("timeline_rendered", memory_count=len(memories), active_index=timeline.active_index)

    render_active_memory(timeline)
    st.divider()
    render_timeline_strip(timeline)
    render_memory_picker(timeline)
