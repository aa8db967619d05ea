"""Edit page for timeless application."""

from collections.abc import MutableMapping
from typing import Any

import streamlit as st
import structlog

from timeless.models.memory import Memory
from timeless.services.client import TimelessClient
from timeless.ui.components.error_display import get_error_display_manager
from timeless.ui.handlers.error import TimelessError
from timeless.ui.handlers.memory_form import (
    clear_form_state,
    finish_submission,
    is_submitting,
    pop_failure,
    remember_failure,
    remove_at,
    start_submission,
    submit_edit,
)
from timeless.ui.handlers.navigation import go_to_timeline
from timeless.ui.handlers.timeline import invalidate_memories
from timeless.ui.pages.create import IMAGE_TYPES

logger = structlog.get_logger(__name__)

FORM_PREFIX = "edit_"
LOADED_ID_KEY = "edit_loaded_id"
IMAGES_KEY = "edit_images"


def load_edit_state(session_state: MutableMapping[str, Any], memory: Memory) -> None:
    """Prefill the form fields from the stored memory, once per memory."""
    if session_state.get(LOADED_ID_KEY) == memory.id:
        return

    clear_form_state(session_state, FORM_PREFIX)
    session_state[LOADED_ID_KEY] = memory.id
    session_state["edit_title"] = memory.title
    session_state["edit_description"] = memory.description
    session_state["edit_date"] = memory.date
    session_state[IMAGES_KEY] = list(memory.images)
    logger.debug("edit_form_loaded", memory_id=memory.id, image_count=len(memory.images))


def _remove_kept_image(index: int) -> None:
    st.session_state[IMAGES_KEY] = remove_at(st.session_state.get(IMAGES_KEY, []), index)


def _render_kept_images(images: list[str]) -> None:
    if not images:
        st.caption("No photos kept. Add new photos below.")
        return

    columns = st.columns(min(len(images), 4))
    for position, url in enumerate(images):
        with columns[position % len(columns)]:
            st.image(url, caption=f"Memory image {position + 1}", use_container_width=True)
            st.button("Remove", key=f"edit_remove_{position}_{url}", on_click=_remove_kept_image, args=(position,))


def handle_edit_submission(
    client: TimelessClient,
    memory_id: str,
    title: str,
    description: str,
    memory_date: Any,
    kept_images: list[str],
    new_files: list[Any],
) -> bool:
    """
    Run the edit submission, keeping any failure for the next run.

    Returns:
        bool: True if the changes were saved
    """
    try:
        with st.spinner("Saving changes..."):
            submit_edit(client, memory_id, title, description, memory_date, kept_images, new_files)
    except TimelessError as e:
        remember_failure(st.session_state, FORM_PREFIX, e)
        return False
    finally:
        finish_submission(st.session_state, FORM_PREFIX)

    invalidate_memories(st.session_state)
    clear_form_state(st.session_state, FORM_PREFIX)
    return True


def render_edit_page(client: TimelessClient, memory_id: str) -> None:
    """Render the edit form for one memory."""
    memory = client.repository.get(memory_id)
    if memory is None:
        st.warning("This memory could not be found.")
        if st.button("← Back to timeline", key="edit_not_found_back"):
            go_to_timeline()
        return

    load_edit_state(st.session_state, memory)

    st.markdown("### Edit memory")

    _render_kept_images(st.session_state.get(IMAGES_KEY, []))

    new_files = st.file_uploader(
        "Add more photos",
        type=IMAGE_TYPES,
        accept_multiple_files=True,
        key="edit_new_files",
    ) or []

    title = st.text_input("Title", key="edit_title")
    description = st.text_area("Description", height=140, key="edit_description")
    memory_date = st.date_input("Date", value=None, key="edit_date", format="YYYY-MM-DD")

    failure = pop_failure(st.session_state, FORM_PREFIX)
    if failure is not None:
        get_error_display_manager().display_form_error(failure)

    submitting = is_submitting(st.session_state, FORM_PREFIX)
    col_save, col_cancel = st.columns(2)
    with col_save:
        st.button(
            "Saving..." if submitting else "Save Changes",
            type="primary",
            disabled=submitting,
            key="edit_save",
            on_click=start_submission,
            args=(st.session_state, FORM_PREFIX),
            use_container_width=True,
        )
    with col_cancel:
        cancel_clicked = st.button("Cancel", key="edit_cancel", disabled=submitting, use_container_width=True)

    if cancel_clicked:
        clear_form_state(st.session_state, FORM_PREFIX)
        go_to_timeline(memory_id)

    if submitting:
        kept_images = list(st.session_state.get(IMAGES_KEY, []))
        if handle_edit_submission(client, memory_id, title, description, memory_date, kept_images, new_files):
            go_to_timeline()
        else:
            st.rerun()
