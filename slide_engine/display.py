import dataclasses
from typing import Optional, Protocol, Sequence


class FullscreenUnavailable(RuntimeError):
    """Raised when the rendering surface refuses to enter or leave fullscreen."""


@dataclasses.dataclass(frozen=True, slots=True)
class Section:
    """One slide page as discovered on the rendering surface."""

    index: int
    animated_count: int = 0
    element_id: Optional[str] = None


class DisplayPort(Protocol):
    """Protocol for the surface the navigation controller renders onto."""

    def discover_sections(self) -> Sequence[Section]: ...

    def activate(self, index: int) -> None: ...

    def deactivate(self, index: int) -> None: ...

    def set_progress(self, fraction: float) -> None: ...

    def set_counter_text(self, text: str) -> None: ...

    def reset_animation(self, index: int) -> None: ...

    def play_animation(self, index: int) -> None: ...

    def toggle_fullscreen(self) -> None: ...


class HeadlessDisplay:
    """In-memory rendering surface.

    Keeps the same observable state a page would (active flags, progress
    width, counter text, animation replays) so navigation can run without a
    browser.
    """

    def __init__(
        self,
        animated_counts: Sequence[int] = (),
        *,
        has_progress: bool = True,
        has_counter: bool = True,
        fullscreen_allowed: bool = True,
    ) -> None:
        self._sections = [
            Section(index=i, animated_count=count, element_id=f"section-{i + 1}")
            for i, count in enumerate(animated_counts)
        ]
        self._has_progress = has_progress
        self._has_counter = has_counter
        self._fullscreen_allowed = fullscreen_allowed
        self.active: set[int] = set()
        self.progress: Optional[float] = None
        self.counter_text: Optional[str] = None
        self.fullscreen = False
        self.animation_plays: dict[int, int] = {}
        self._reset_pending: set[int] = set()
        self.events: list[tuple[str, object]] = []

    @classmethod
    def with_sections(cls, count: int, animated: int = 1, **kwargs) -> "HeadlessDisplay":
        return cls([animated] * count, **kwargs)

    @property
    def progress_width(self) -> Optional[str]:
        if self.progress is None:
            return None
        return f"{self.progress * 100:g}%"

    def discover_sections(self) -> Sequence[Section]:
        return list(self._sections)

    def activate(self, index: int) -> None:
        self.active.add(index)
        self.events.append(("activate", index))

    def deactivate(self, index: int) -> None:
        self.active.discard(index)
        self.events.append(("deactivate", index))

    def set_progress(self, fraction: float) -> None:
        if not self._has_progress:
            return
        self.progress = fraction
        self.events.append(("progress", fraction))

    def set_counter_text(self, text: str) -> None:
        if not self._has_counter:
            return
        self.counter_text = text
        self.events.append(("counter", text))

    def reset_animation(self, index: int) -> None:
        self._reset_pending.add(index)
        self.events.append(("reset_animation", index))

    def play_animation(self, index: int) -> None:
        # A play only restarts the animation when it follows a reset.
        if index not in self._reset_pending:
            return
        self._reset_pending.discard(index)
        self.animation_plays[index] = self.animation_plays.get(index, 0) + 1
        self.events.append(("play_animation", index))

    def toggle_fullscreen(self) -> None:
        if not self._fullscreen_allowed:
            raise FullscreenUnavailable("fullscreen request was denied")
        self.fullscreen = not self.fullscreen
        self.events.append(("fullscreen", self.fullscreen))
