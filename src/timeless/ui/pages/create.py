"""Create page for timeless application."""

from typing import Any

import streamlit as st
import structlog

from timeless.services.client import TimelessClient
from timeless.ui.components.error_display import get_error_display_manager
from timeless.ui.handlers.error import TimelessError
from timeless.ui.handlers.memory_form import (
    clear_form_state,
    finish_submission,
    is_submitting,
    pop_failure,
    remember_failure,
    start_submission,
    submit_create,
)
from timeless.ui.handlers.navigation import go_to_timeline
from timeless.ui.handlers.timeline import invalidate_memories

logger = structlog.get_logger(__name__)

FORM_PREFIX = "create_"
IMAGE_TYPES = ["jpg", "jpeg", "png", "gif", "webp", "heic", "heif"]


def _suggest_date(client: TimelessClient, files: list[Any]) -> None:
    """Prefill the date from the first photo's EXIF data, once."""
    if not files or st.session_state.get("create_date") is not None or st.session_state.get("create_date_suggested"):
        return
    suggested = client.image_processor.extract_memory_date(files[0].getvalue())
    st.session_state["create_date_suggested"] = True
    if suggested:
        st.session_state["create_date"] = suggested
        logger.info("memory_date_suggested", source="exif", memory_date=suggested.isoformat())


def _render_previews(files: list[Any]) -> None:
    columns = st.columns(min(len(files), 4))
    for position, uploaded_file in enumerate(files):
        with columns[position % len(columns)]:
            st.image(uploaded_file, caption=f"preview-{position}", use_container_width=True)


def handle_create_submission(client: TimelessClient, title: str, description: str, memory_date: Any, files: list[Any]) -> bool:
    """
    Run the create submission.

    A failure is kept in session state and shown on the next run, once the
    Share button is enabled again.

    Returns:
        bool: True if the memory was saved
    """
    progress = st.progress(0.0, text="Uploading...") if files else None

    def _on_progress(done: int, total: int) -> None:
        if progress is not None:
            progress.progress(done / total, text=f"Uploading... {done}/{total}")

    try:
        with st.spinner("Uploading..."):
            submit_create(client, title, description, memory_date, files, progress_callback=_on_progress)
    except TimelessError as e:
        remember_failure(st.session_state, FORM_PREFIX, e)
        return False
    finally:
        finish_submission(st.session_state, FORM_PREFIX)
        if progress is not None:
            progress.empty()

    invalidate_memories(st.session_state)
    clear_form_state(st.session_state, FORM_PREFIX)
    return True


def render_create_page(client: TimelessClient) -> None:
    """Render the create memory form."""
    submitting = is_submitting(st.session_state, FORM_PREFIX)

    if st.button("← Back", key="create_back", disabled=submitting):
        go_to_timeline()

    st.markdown("### Create new memory")

    files = st.file_uploader(
        "Drag and drop photos here or select from computer",
        type=IMAGE_TYPES,
        accept_multiple_files=True,
        key="create_files",
    ) or []

    if files:
        _suggest_date(client, files)
        _render_previews(files)

    description = st.text_area("Caption", placeholder="Write a caption...", height=140, key="create_description")
    title = st.text_input("Title", placeholder="Title", key="create_title")
    memory_date = st.date_input("Date of Memory", value=None, key="create_date", format="YYYY-MM-DD")

    failure = pop_failure(st.session_state, FORM_PREFIX)
    if failure is not None:
        get_error_display_manager().display_form_error(failure)

    st.button(
        "Uploading..." if submitting else "Share",
        type="primary",
        disabled=submitting,
        key="create_share",
        on_click=start_submission,
        args=(st.session_state, FORM_PREFIX),
    )

    if submitting:
        if handle_create_submission(client, title, description, memory_date, files):
            go_to_timeline()
        else:
            st.rerun()
