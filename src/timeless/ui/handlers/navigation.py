"""Page routing for timeless application.

The current page lives in session state, mirrored into the URL query string
(``?page=edit&id=...``) so edit links and selected memories survive reloads.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any

import streamlit as st
import structlog

logger = structlog.get_logger(__name__)

TIMELINE_PAGE = "timeline"
CREATE_PAGE = "create"
EDIT_PAGE = "edit"
PAGES = (TIMELINE_PAGE, CREATE_PAGE, EDIT_PAGE)


def resolve_route(query_params: Mapping[str, Any]) -> tuple[str, str | None]:
    """
    Work out the page and memory id from query parameters.

    Unknown pages fall back to the timeline; an edit route without an id
    also falls back to the timeline.

    Returns:
        tuple: (page, memory_id)
    """
    page = str(query_params.get("page") or TIMELINE_PAGE)
    memory_id = query_params.get("id") or query_params.get("memory") or None

    if page not in PAGES:
        logger.warning("unknown_page_requested", page=page)
        page = TIMELINE_PAGE

    if page == EDIT_PAGE and not memory_id:
        page = TIMELINE_PAGE

    return page, (str(memory_id) if memory_id else None)


def route_params(page: str, memory_id: str | None = None) -> dict[str, str]:
    """Query parameters for a page."""
    if page == EDIT_PAGE and memory_id:
        return {"page": EDIT_PAGE, "id": memory_id}
    if page == TIMELINE_PAGE and memory_id:
        return {"page": TIMELINE_PAGE, "memory": memory_id}
    return {"page": page}


def route_href(page: str, memory_id: str | None = None) -> str:
    """Relative link for a page, usable in rendered HTML."""
    return "?" + "&".join(f"{key}={value}" for key, value in route_params(page, memory_id).items())


def set_route(session_state: MutableMapping[str, Any], page: str, memory_id: str | None = None) -> None:
    """Record the route in session state and in the URL."""
    previous = session_state.get("current_page")
    session_state["current_page"] = page
    session_state["route_memory_id"] = memory_id
    st.query_params.from_dict(route_params(page, memory_id))
    logger.info("page_navigation", from_page=previous, to_page=page, memory_id=memory_id)


def navigate(page: str, memory_id: str | None = None) -> None:
    """Switch page and rerun the script."""
    set_route(st.session_state, page, memory_id)
    st.rerun()


def go_to_timeline(memory_id: str | None = None) -> None:
    """Back to the timeline root, after a successful save or on cancel."""
    navigate(TIMELINE_PAGE, memory_id)
