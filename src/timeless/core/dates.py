"""Calendar strip generation for the timeline.

Dates here are plain calendar days. Nothing is interpreted in a timezone, so a
memory dated 2025-07-30 lands on the 2025-07-30 tick wherever the app runs.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

# Fixed English names so labels do not depend on the process locale
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DateLike = date | datetime | str


@dataclass(frozen=True)
class DateTick:
    """One calendar day on the timeline strip."""

    day: date
    iso_key: str
    display_label: str
    month_name: str


def parse_date(value: DateLike) -> date:
    """
    Parse a date, datetime, or date string into a calendar date.

    Strings may carry a time part ("2025-07-30T00:00:00Z"); only the leading
    ``YYYY-MM-DD`` is used.

    Args:
        value: Value to parse

    Returns:
        date: The calendar day

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError as e:
            raise ValueError(f"Invalid date string: {value!r}") from e
    raise ValueError(f"Unsupported date value: {value!r}")


def normalize_date(value: DateLike) -> str:
    """Rewrite a date value as its canonical ``YYYY-MM-DD`` key."""
    return parse_date(value).isoformat()


def month_name(day: date) -> str:
    """Full English month name, e.g. "July"."""
    return MONTH_NAMES[day.month - 1]


def format_tick_label(day: date) -> str:
    """Short tick label, e.g. "JUL. 30"."""
    return f"{month_name(day)[:3].upper()}. {day.day}"


def make_tick(day: date) -> DateTick:
    """Build the tick for a single day."""
    return DateTick(
        day=day,
        iso_key=day.isoformat(),
        display_label=format_tick_label(day),
        month_name=month_name(day),
    )


def generate_date_range(start: DateLike, end: DateLike) -> list[DateTick]:
    """
    Generate one tick per calendar day between two inclusive bounds.

    Args:
        start: First day of the strip
        end: Last day of the strip

    Returns:
        list[DateTick]: Ascending ticks; empty when start is after end
    """
    first = parse_date(start)
    last = parse_date(end)

    if first > last:
        return []

    span = (last - first).days
    return [make_tick(first + timedelta(days=offset)) for offset in range(span + 1)]


def starts_new_month(ticks: list[DateTick], position: int) -> bool:
    """Whether the tick at ``position`` opens a new month group."""
    if position == 0:
        return True
    return ticks[position - 1].month_name != ticks[position].month_name


def month_groups(ticks: list[DateTick]) -> list[tuple[str, list[DateTick]]]:
    """
    Split ticks into contiguous month groups.

    Returns:
        list: (month_name, ticks) pairs in strip order
    """
    groups: list[tuple[str, list[DateTick]]] = []
    for position, tick in enumerate(ticks):
        if starts_new_month(ticks, position):
            groups.append((tick.month_name, []))
        groups[-1][1].append(tick)
    return groups
