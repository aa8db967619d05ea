"""Timeline view-model: joins the dense calendar strip with sparse memories."""

from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import TYPE_CHECKING

from .dates import DateLike, DateTick, generate_date_range, parse_date, starts_new_month

if TYPE_CHECKING:
    from ..models.memory import Memory


class Direction(IntEnum):
    """Step applied to the active index by ``advance``."""

    PREVIOUS = -1
    NEXT = 1


@dataclass(frozen=True)
class TimelineTick:
    """A strip tick joined with the memory on that day, if any."""

    tick: DateTick
    memory: "Memory | None"
    is_active: bool
    starts_month: bool

    @property
    def has_memory(self) -> bool:
        return self.memory is not None


class TimelineViewModel:
    """
    Active-memory selection over an ordered list of memories.

    Memories are kept in the order given, which is ascending by date when
    they come from the repository. The active index wraps at both ends.
    """

    def __init__(
        self,
        memories: list["Memory"],
        start: DateLike,
        end: DateLike,
        active_index: int = 0,
    ) -> None:
        self.memories = list(memories)
        self.start = parse_date(start)
        self.end = parse_date(end)
        self._by_date = self.index(self.memories)
        self._active_index = 0
        if self.memories and 0 <= active_index < len(self.memories):
            self._active_index = active_index

    @staticmethod
    def index(memories: list["Memory"]) -> dict[str, "Memory"]:
        """
        Map each memory's normalized date to the memory.

        Two memories on the same day collide; the later one in the list wins.
        """
        by_date: dict[str, "Memory"] = {}
        for memory in memories:
            by_date[memory.normalized_date] = memory
        return by_date

    @classmethod
    def range_bounds_for(
        cls,
        memories: list["Memory"],
        start: date | None = None,
        end: date | None = None,
    ) -> tuple[date, date]:
        """
        Fill in missing strip bounds from the memories' dates.

        A missing start becomes the first day of the earliest memory's month,
        a missing end the last day of the latest memory's month. With no
        memories the current month is used.
        """
        if start is not None and end is not None:
            return start, end

        days = sorted(memory.date for memory in memories) or [date.today()]
        if start is None:
            start = days[0].replace(day=1)
        if end is None:
            last = days[-1]
            end = last.replace(day=monthrange(last.year, last.month)[1])
        return start, end

    @property
    def is_empty(self) -> bool:
        return not self.memories

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def active_memory(self) -> "Memory | None":
        if self.is_empty:
            return None
        return self.memories[self._active_index]

    def advance(self, direction: Direction | int) -> int:
        """
        Move the active index one step forward or backward, wrapping around.

        Returns:
            int: The new active index (unchanged when there are no memories)
        """
        if self.is_empty:
            return self._active_index
        step = 1 if int(direction) > 0 else -1
        self._active_index = (self._active_index + step) % len(self.memories)
        return self._active_index

    def jump_to(self, memory_id: str) -> int:
        """
        Make the memory with ``memory_id`` active.

        Returns:
            int: The new active index; unchanged if no memory has that id
        """
        for position, memory in enumerate(self.memories):
            if memory.id == memory_id:
                self._active_index = position
                break
        return self._active_index

    def lookup(self, iso_key: str) -> "Memory | None":
        return self._by_date.get(iso_key)

    def ticks(self) -> list[TimelineTick]:
        """The full strip between the bounds, joined with the memory index."""
        date_ticks = generate_date_range(self.start, self.end)
        active = self.active_memory
        active_id = active.id if active else None

        joined = []
        for position, tick in enumerate(date_ticks):
            memory = self._by_date.get(tick.iso_key)
            joined.append(
                TimelineTick(
                    tick=tick,
                    memory=memory,
                    is_active=memory is not None and memory.id == active_id,
                    starts_month=starts_new_month(date_ticks, position),
                )
            )
        return joined

    @staticmethod
    def tooltip(memory: "Memory") -> str:
        """Hover text for a memory marker."""
        return f"{memory.title} ({memory.normalized_date})"
