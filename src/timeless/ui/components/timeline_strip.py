"""Horizontal calendar strip with memory markers."""

import html

import streamlit as st

from timeless.core.dates import month_groups
from timeless.core.timeline import TimelineTick, TimelineViewModel
from timeless.ui.handlers.navigation import TIMELINE_PAGE, navigate, route_href

STRIP_STYLE = """
<style>
.timeless-strip { overflow-x: auto; background: #F7F9FC; padding: 2.5rem 0 1rem 0; border-radius: 1rem; }
.timeless-strip-track { position: relative; display: flex; min-width: max-content; padding: 0 2rem; gap: 1rem; }
.timeless-strip-track::before { content: ""; position: absolute; left: 0; right: 0; bottom: 38px; height: 2px;
    background: #D1D5DB; }
.timeless-month-group { display: flex; gap: 1rem; }
.timeless-tick { position: relative; display: flex; flex-direction: column; align-items: center; min-width: 4rem; }
.timeless-month { position: absolute; top: -1.5rem; font-size: 0.7rem; font-weight: 700; color: #1D4ED8;
    text-transform: uppercase; white-space: nowrap; }
.timeless-line { width: 1px; background: #D1D5DB; height: 1.25rem; margin-top: 3.75rem; }
.timeless-line.month-start { height: 5rem; margin-top: 0; }
.timeless-label { margin-top: 0.25rem; font-size: 10px; color: #6B7280; letter-spacing: 0.05em; white-space: nowrap; }
.timeless-marker { position: absolute; bottom: 34px; width: 10px; height: 10px; border-radius: 50%;
    border: 1px solid #9CA3AF; background: #FFFFFF; z-index: 2; }
.timeless-marker.active { background: #3B82F6; border-color: #1D4ED8; box-shadow: 0 0 0 4px rgba(147, 197, 253, 0.6); }
</style>
"""


def render_tick_html(entry: TimelineTick) -> str:
    """Markup for one day on the strip."""
    parts = ["<div class='timeless-tick'>"]

    if entry.starts_month:
        parts.append(f"<div class='timeless-month'>{html.escape(entry.tick.month_name)}</div>")

    if entry.memory is not None:
        css_class = "timeless-marker active" if entry.is_active else "timeless-marker"
        tooltip = html.escape(TimelineViewModel.tooltip(entry.memory), quote=True)
        href = html.escape(route_href(TIMELINE_PAGE, entry.memory.id), quote=True)
        parts.append(
            f"<a class='{css_class}' href='{href}' target='_self' title='{tooltip}' "
            f"aria-label='Go to {tooltip}'></a>"
        )

    line_class = "timeless-line month-start" if entry.starts_month else "timeless-line"
    parts.append(f"<div class='{line_class}'></div>")
    parts.append(f"<p class='timeless-label'>{html.escape(entry.tick.display_label)}</p>")
    parts.append("</div>")
    return "".join(parts)


def build_strip_html(ticks: list[TimelineTick]) -> str:
    """Markup for the whole strip, one group per calendar month."""
    groups = []
    position = 0
    for _, month_ticks in month_groups([entry.tick for entry in ticks]):
        entries = ticks[position : position + len(month_ticks)]
        position += len(month_ticks)
        inner = "".join(render_tick_html(entry) for entry in entries)
        groups.append(f"<div class='timeless-month-group'>{inner}</div>")
    body = "".join(groups)
    return f"{STRIP_STYLE}<div class='timeless-strip'><div class='timeless-strip-track'>{body}</div></div>"


def render_timeline_strip(timeline: TimelineViewModel) -> None:
    """Render the strip for the current timeline state."""
    st.markdown(build_strip_html(timeline.ticks()), unsafe_allow_html=True)


def render_memory_picker(timeline: TimelineViewModel) -> None:
    """
    Slider over the memories in date order.

    Marker links on the strip load the page afresh, which starts a new
    Streamlit session. The picker selects a memory within the current one.
    """
    active = timeline.active_memory
    if active is None or len(timeline.memories) < 2:
        return

    labels = {memory.id: TimelineViewModel.tooltip(memory) for memory in timeline.memories}
    picked = st.select_slider(
        "Jump to memory",
        options=list(labels),
        value=active.id,
        format_func=labels.get,
        label_visibility="collapsed",
    )
    if picked != active.id:
        navigate(TIMELINE_PAGE, picked)
