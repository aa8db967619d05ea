"""Timeline handlers for timeless application."""

from collections.abc import MutableMapping
from typing import Any

import streamlit as st
import structlog

from timeless.config import get_config, get_timeline_bounds
from timeless.core.timeline import Direction, TimelineViewModel
from timeless.models.memory import Memory
from timeless.services.client import TimelessClient
from timeless.ui.handlers.error import DatabaseError

logger = structlog.get_logger(__name__)

MEMORIES_KEY = "memories"
MEMORIES_LOADED_KEY = "memories_loaded"
ACTIVE_MEMORY_KEY = "timeline_active_memory_id"


@st.cache_resource
def get_client() -> TimelessClient:
    """
    The process-wide service client, built from configuration and initialized.

    Raises:
        ValueError: If required configuration is missing
        DatabaseError: If the database cannot be opened
    """
    return TimelessClient.from_config(get_config()).initialize()


def load_memories(client: TimelessClient, session_state: MutableMapping[str, Any]) -> list[Memory] | None:
    """
    Load all memories once per session.

    Returns:
        list[Memory] | None: Memories sorted by date, or None if loading failed
    """
    if session_state.get(MEMORIES_LOADED_KEY):
        return session_state.get(MEMORIES_KEY, [])

    try:
        memories = client.repository.list_all()
    except DatabaseError as e:
        logger.error("memories_load_failed", error=str(e))
        return None

    session_state[MEMORIES_KEY] = memories
    session_state[MEMORIES_LOADED_KEY] = True
    logger.info("memories_loaded", count=len(memories))
    return memories


def invalidate_memories(session_state: MutableMapping[str, Any]) -> None:
    """Force the next timeline render to reload memories."""
    session_state.pop(MEMORIES_KEY, None)
    session_state.pop(MEMORIES_LOADED_KEY, None)


def build_timeline(
    memories: list[Memory],
    session_state: MutableMapping[str, Any],
    selected_memory_id: str | None = None,
) -> TimelineViewModel:
    """
    Build the view-model for this render.

    The active memory comes from ``selected_memory_id`` when it matches a
    memory, otherwise from the memory id kept in session state, otherwise
    the first memory. The id survives reloads that change the sort order.
    """
    start, end = get_timeline_bounds()
    start, end = TimelineViewModel.range_bounds_for(memories, start, end)

    timeline = TimelineViewModel(memories, start, end)
    known_ids = {memory.id for memory in memories}
    for memory_id in (selected_memory_id, session_state.get(ACTIVE_MEMORY_KEY)):
        if memory_id in known_ids:
            timeline.jump_to(memory_id)
            break

    _remember_active(timeline, session_state)
    return timeline


def _remember_active(timeline: TimelineViewModel, session_state: MutableMapping[str, Any]) -> None:
    active = timeline.active_memory
    session_state[ACTIVE_MEMORY_KEY] = active.id if active else None


def step_timeline(
    timeline: TimelineViewModel,
    direction: Direction,
    session_state: MutableMapping[str, Any],
) -> Memory | None:
    """Advance the active memory and remember the new position."""
    timeline.advance(direction)
    _remember_active(timeline, session_state)
    return timeline.active_memory
