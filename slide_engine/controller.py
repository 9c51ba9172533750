import enum
from typing import Callable, Optional, Sequence

import termcolor

from .config import NavigationConfig
from .display import DisplayPort, FullscreenUnavailable, Section
from .scheduler import Scheduler


class TransitionPhase(enum.Enum):
    IDLE = "idle"
    DEACTIVATING = "deactivating"
    ACTIVATING = "activating"


class NavigationOutcome(enum.Enum):
    """What happened to a navigation request. Rejections are never raised."""

    MOVED = "moved"
    BUSY = "busy"
    OUT_OF_RANGE = "out_of_range"
    UNCHANGED = "unchanged"
    INERT = "inert"


class NavAction(enum.Enum):
    NEXT = "next"
    PREV = "prev"
    FIRST = "first"
    LAST = "last"
    FULLSCREEN = "fullscreen"


def progress_fraction(index: int, total: int) -> float:
    return (index + 1) / total


def counter_text(index: int, total: int) -> str:
    return f"{index + 1} / {total}"


class NavigationController:
    """Keeps exactly one slide section active and moves between sections.

    A transition runs ``IDLE -> DEACTIVATING -> ACTIVATING -> IDLE``: the
    current section is hidden at once, the target is shown after
    ``fade_out_delay`` and the lock is released ``settle_delay`` later.
    Requests made while not idle are dropped.
    """

    def __init__(
        self,
        display: DisplayPort,
        scheduler: Scheduler,
        config: Optional[NavigationConfig] = None,
        status_callback: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._display = display
        self._scheduler = scheduler
        self._config = config or NavigationConfig()
        self._config.validate()
        self._status_callback = status_callback or (
            lambda message: termcolor.cprint(message, color="green")
        )
        self._sections: list[Section] = []
        self._current_index = 0
        self._phase = TransitionPhase.IDLE
        self._started = False

    @property
    def config(self) -> NavigationConfig:
        return self._config

    @property
    def sections(self) -> Sequence[Section]:
        return tuple(self._sections)

    @property
    def section_count(self) -> int:
        return len(self._sections)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def phase(self) -> TransitionPhase:
        return self._phase

    @property
    def is_transitioning(self) -> bool:
        return self._phase is not TransitionPhase.IDLE

    @property
    def is_inert(self) -> bool:
        return not self._sections

    def start(self) -> bool:
        """Discover sections and show the first one. Returns False when inert."""
        if self._started:
            return not self.is_inert
        self._started = True
        self._sections = list(self._display.discover_sections())
        if not self._sections:
            self._status_callback("No slide sections found; navigation disabled.")
            return False

        self._current_index = 0
        self._display.activate(0)
        self._update_widgets()
        self._animate(self._sections[0])
        self._status_callback(
            f"Slide navigation ready with {self.section_count} sections."
        )
        return True

    def next(self) -> NavigationOutcome:
        if self.is_inert:
            return NavigationOutcome.INERT
        if self.is_transitioning:
            return self._drop(NavigationOutcome.BUSY, "next")
        if self._current_index >= self.section_count - 1:
            return self._drop(NavigationOutcome.UNCHANGED, "next")
        return self.go_to(self._current_index + 1)

    def prev(self) -> NavigationOutcome:
        if self.is_inert:
            return NavigationOutcome.INERT
        if self.is_transitioning:
            return self._drop(NavigationOutcome.BUSY, "prev")
        if self._current_index <= 0:
            return self._drop(NavigationOutcome.UNCHANGED, "prev")
        return self.go_to(self._current_index - 1)

    def first(self) -> NavigationOutcome:
        return self.go_to(0)

    def last(self) -> NavigationOutcome:
        return self.go_to(self.section_count - 1)

    def go_to(self, target: int) -> NavigationOutcome:
        if self.is_inert:
            return NavigationOutcome.INERT
        if target < 0 or target >= self.section_count:
            return self._drop(NavigationOutcome.OUT_OF_RANGE, f"go_to({target})")
        if target == self._current_index:
            return self._drop(NavigationOutcome.UNCHANGED, f"go_to({target})")
        if self.is_transitioning:
            return self._drop(NavigationOutcome.BUSY, f"go_to({target})")

        self._phase = TransitionPhase.DEACTIVATING
        self._display.deactivate(self._current_index)
        self._scheduler.call_later(
            self._config.fade_out_delay, lambda: self._show(target)
        )
        self._trace(f"{self._current_index} -> {target}")
        return NavigationOutcome.MOVED

    def toggle_fullscreen(self) -> NavigationOutcome:
        if self.is_inert:
            return NavigationOutcome.INERT
        try:
            self._display.toggle_fullscreen()
        except FullscreenUnavailable as exc:
            self._trace(f"fullscreen unavailable: {exc}")
        return NavigationOutcome.UNCHANGED

    def perform(self, action: NavAction) -> NavigationOutcome:
        if action is NavAction.NEXT:
            return self.next()
        elif action is NavAction.PREV:
            return self.prev()
        elif action is NavAction.FIRST:
            return self.first()
        elif action is NavAction.LAST:
            return self.last()
        elif action is NavAction.FULLSCREEN:
            return self.toggle_fullscreen()
        raise ValueError(f"Unsupported navigation action: {action}")

    def _show(self, target: int) -> None:
        self._display.activate(target)
        self._animate(self._sections[target])
        self._current_index = target
        self._update_widgets()
        self._phase = TransitionPhase.ACTIVATING
        self._scheduler.call_later(self._config.settle_delay, self._settle)

    def _settle(self) -> None:
        self._phase = TransitionPhase.IDLE

    def _animate(self, section: Section) -> None:
        if not section.animated_count:
            return
        self._display.reset_animation(section.index)
        self._display.play_animation(section.index)

    def _update_widgets(self) -> None:
        total = self.section_count
        self._display.set_progress(progress_fraction(self._current_index, total))
        self._display.set_counter_text(counter_text(self._current_index, total))

    def _drop(self, outcome: NavigationOutcome, request: str) -> NavigationOutcome:
        self._trace(f"{request} dropped ({outcome.value})")
        return outcome

    def _trace(self, message: str) -> None:
        if self._config.debug:
            termcolor.cprint(f"[Navigation] {message}", color="magenta")
