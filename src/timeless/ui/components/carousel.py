"""Image carousel for the active memory."""

from collections.abc import MutableMapping
from typing import Any

import streamlit as st
import structlog

from timeless.core.carousel import DEFAULT_SWIPE_THRESHOLD, CarouselState

logger = structlog.get_logger(__name__)

SWIPE_RANGE = 100
# Widget keys use "carousel_prev_" and "carousel_next_"; state keys must not share their prefix
CAROUSEL_STATE_PREFIX = "carousel_state_"


def get_carousel_state(
    session_state: MutableMapping[str, Any],
    owner_id: str,
    images: list[str],
    title: str,
    threshold: int = DEFAULT_SWIPE_THRESHOLD,
) -> CarouselState:
    """
    Carousel state for one memory.

    State is keyed by the memory id and only the current memory's state is
    kept, so switching memories starts the carousel from the first image.
    """
    key = f"{CAROUSEL_STATE_PREFIX}{owner_id}"
    for stale in [k for k in list(session_state.keys()) if str(k).startswith(CAROUSEL_STATE_PREFIX) and k != key]:
        del session_state[stale]

    state = session_state.get(key)
    if not isinstance(state, CarouselState):
        state = CarouselState(images=images, title=title, threshold=threshold)
        session_state[key] = state
    else:
        state.sync(images, title)
    return state


def _swipe_key(owner_id: str, session_state: MutableMapping[str, Any]) -> str:
    nonce = session_state.get(f"swipe_nonce_{owner_id}", 0)
    return f"swipe_{owner_id}_{nonce}"


def _on_swipe(state: CarouselState, owner_id: str) -> None:
    """Slider callback: treat the drag from the centre as one swipe gesture."""
    session_state = st.session_state
    offset = session_state.get(_swipe_key(owner_id, session_state), 0)
    before = state.index
    # Dragging the handle left is a left swipe: pointer moves from 0 to offset
    after = state.swipe(0, offset)
    logger.debug("carousel_swipe", owner_id=owner_id, offset=offset, before=before, after=after)
    # A fresh key recentres the slider for the next gesture
    session_state[f"swipe_nonce_{owner_id}"] = session_state.get(f"swipe_nonce_{owner_id}", 0) + 1


def render_carousel(owner_id: str, images: list[str], title: str, threshold: int = DEFAULT_SWIPE_THRESHOLD) -> None:
    """
    Render one image at a time with wraparound controls.

    Renders nothing when there are no images.
    """
    state = get_carousel_state(st.session_state, owner_id, images, title, threshold)
    if state.is_empty:
        return

    with st.container(border=True):
        st.image(state.current_image, caption=state.alt_text, use_container_width=True)

        if state.has_controls:
            col_prev, col_position, col_next = st.columns([1, 2, 1])
            with col_prev:
                if st.button("‹", key=f"carousel_prev_{owner_id}", help="Previous image", use_container_width=True):
                    state.previous()
                    st.rerun()
            with col_position:
                st.markdown(
                    f"<p style='text-align: center; color: #6B9EE8; font-weight: 600;'>{state.position_label}</p>",
                    unsafe_allow_html=True,
                )
            with col_next:
                if st.button("›", key=f"carousel_next_{owner_id}", help="Next image", use_container_width=True):
                    state.next()
                    st.rerun()

            st.slider(
                "Swipe",
                min_value=-SWIPE_RANGE,
                max_value=SWIPE_RANGE,
                value=0,
                key=_swipe_key(owner_id, st.session_state),
                on_change=_on_swipe,
                args=(state, owner_id),
                label_visibility="collapsed",
                help="Drag left or right to flip through photos",
            )
        else:
            st.caption(state.position_label)
