"""Image carousel state and swipe detection for a single memory."""

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_SWIPE_THRESHOLD = 50


class SwipeResult(Enum):
    """Outcome of a finished swipe gesture."""

    NONE = "none"
    NEXT = "next"
    PREVIOUS = "previous"


class GesturePhase(Enum):
    IDLE = "idle"
    TRACKING = "tracking"
    COMMIT = "commit"
    CANCEL = "cancel"


class SwipeGesture:
    """
    Horizontal swipe detector.

    idle -> tracking on ``start``; ``end`` moves to commit when the pointer
    travelled more than ``threshold`` units horizontally, otherwise cancel,
    and the detector is idle again after reporting the result. A left swipe
    (pointer moved towards smaller x) means "next".
    """

    def __init__(self, threshold: int = DEFAULT_SWIPE_THRESHOLD) -> None:
        self.threshold = threshold
        self.phase = GesturePhase.IDLE
        self.last_phase = GesturePhase.IDLE
        self.start_x: float | None = None
        self.current_x: float | None = None

    def start(self, x: float) -> None:
        self.phase = GesturePhase.TRACKING
        self.start_x = x
        self.current_x = x

    def move(self, x: float) -> None:
        if self.phase is GesturePhase.TRACKING:
            self.current_x = x

    def end(self) -> SwipeResult:
        if self.phase is not GesturePhase.TRACKING or self.start_x is None or self.current_x is None:
            self._reset(GesturePhase.CANCEL)
            return SwipeResult.NONE

        displacement = self.start_x - self.current_x
        if displacement > self.threshold:
            result = SwipeResult.NEXT
        elif displacement < -self.threshold:
            result = SwipeResult.PREVIOUS
        else:
            result = SwipeResult.NONE

        self._reset(GesturePhase.CANCEL if result is SwipeResult.NONE else GesturePhase.COMMIT)
        return result

    def swipe(self, start_x: float, end_x: float) -> SwipeResult:
        """Run a complete start/move/end sequence."""
        self.start(start_x)
        self.move(end_x)
        return self.end()

    def _reset(self, outcome: GesturePhase) -> None:
        self.last_phase = outcome
        self.phase = GesturePhase.IDLE
        self.start_x = None
        self.current_x = None


@dataclass
class CarouselState:
    """
    Which image of a memory is showing.

    The index belongs to one image list; ``sync`` with a different list
    starts again from the first image.
    """

    images: list[str]
    title: str = ""
    index: int = 0
    threshold: int = DEFAULT_SWIPE_THRESHOLD
    gesture: SwipeGesture = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.images = list(self.images)
        self.gesture = SwipeGesture(self.threshold)
        if not 0 <= self.index < max(len(self.images), 1):
            self.index = 0

    @property
    def is_empty(self) -> bool:
        return not self.images

    @property
    def count(self) -> int:
        return len(self.images)

    @property
    def has_controls(self) -> bool:
        return len(self.images) > 1

    @property
    def current_image(self) -> str | None:
        if self.is_empty:
            return None
        return self.images[self.index]

    @property
    def position_label(self) -> str:
        if self.is_empty:
            return ""
        return f"{self.index + 1} / {self.count}"

    @property
    def alt_text(self) -> str:
        return f"{self.title} image {self.index + 1}"

    def next(self) -> int:
        if not self.is_empty:
            self.index = (self.index + 1) % self.count
        return self.index

    def previous(self) -> int:
        if not self.is_empty:
            self.index = self.count - 1 if self.index == 0 else self.index - 1
        return self.index

    def apply_swipe(self, result: SwipeResult) -> int:
        if result is SwipeResult.NEXT:
            return self.next()
        if result is SwipeResult.PREVIOUS:
            return self.previous()
        return self.index

    def swipe(self, start_x: float, end_x: float) -> int:
        """Feed one pointer gesture through the detector and apply it."""
        return self.apply_swipe(self.gesture.swipe(start_x, end_x))

    def sync(self, images: list[str], title: str | None = None) -> None:
        """Point the carousel at ``images``, resetting position if they changed."""
        if title is not None:
            self.title = title
        if list(images) != self.images:
            self.images = list(images)
            self.index = 0
