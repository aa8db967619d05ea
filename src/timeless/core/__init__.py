"""
Core timeline logic for timeless application.

Pure Python, no Streamlit imports:
- dates: Dense calendar strip generation and date normalization
- timeline: Active-memory selection over the strip
- carousel: Per-memory image pager and swipe gesture state machine
"""

from .carousel import CarouselState, SwipeGesture, SwipeResult
from .dates import DateTick, generate_date_range, normalize_date
from .timeline import Direction, TimelineTick, TimelineViewModel

__all__ = [
    "CarouselState",
    "SwipeGesture",
    "SwipeResult",
    "DateTick",
    "generate_date_range",
    "normalize_date",
    "Direction",
    "TimelineTick",
    "TimelineViewModel",
]
