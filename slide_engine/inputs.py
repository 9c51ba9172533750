import dataclasses
from typing import Any, Mapping, Optional

import termcolor

from .controller import NavAction, NavigationController, NavigationOutcome

# Keys follow the DOM ``KeyboardEvent.key`` names.
KEY_ACTIONS: dict[str, NavAction] = {
    "ArrowRight": NavAction.NEXT,
    "ArrowDown": NavAction.NEXT,
    " ": NavAction.NEXT,
    "PageDown": NavAction.NEXT,
    "ArrowLeft": NavAction.PREV,
    "ArrowUp": NavAction.PREV,
    "PageUp": NavAction.PREV,
    "Home": NavAction.FIRST,
    "End": NavAction.LAST,
    "f": NavAction.FULLSCREEN,
    "F": NavAction.FULLSCREEN,
}

SUPPRESS_DEFAULT_KEYS = frozenset(
    key for key, action in KEY_ACTIONS.items() if action is not NavAction.FULLSCREEN
)

INTERACTIVE_TAGS = frozenset({"a", "button", "input", "select", "textarea"})


@dataclasses.dataclass(frozen=True, slots=True)
class PointerClick:
    x: float
    viewport_width: float
    # Tag names from the click target outwards to the document root.
    path: tuple[str, ...] = ()

    @property
    def on_interactive(self) -> bool:
        return any(tag.lower() in INTERACTIVE_TAGS for tag in self.path)


@dataclasses.dataclass(frozen=True, slots=True)
class TouchPoint:
    x: float
    y: float


class InputBinder:
    """Translates keyboard, pointer and touch input into controller calls."""

    def __init__(self, controller: NavigationController) -> None:
        self._controller = controller
        self._touch_start: Optional[TouchPoint] = None

    def handle_key(self, key: str) -> bool:
        """Returns True when the host should suppress the key's default action."""
        action = KEY_ACTIONS.get(key)
        if action is None:
            return False
        self._controller.perform(action)
        return key in SUPPRESS_DEFAULT_KEYS

    def handle_click(self, click: PointerClick) -> Optional[NavigationOutcome]:
        if click.on_interactive:
            return None
        config = self._controller.config
        if click.x > click.viewport_width * config.advance_zone:
            return self._controller.next()
        elif click.x < click.viewport_width * config.retreat_zone:
            return self._controller.prev()
        return None

    def handle_touch_start(self, point: TouchPoint) -> None:
        self._touch_start = point

    def handle_touch_end(self, point: TouchPoint) -> Optional[NavigationOutcome]:
        start, self._touch_start = self._touch_start, None
        if start is None:
            return None
        diff_x = start.x - point.x
        diff_y = start.y - point.y
        if abs(diff_x) > abs(diff_y) and abs(diff_x) > self._controller.config.swipe_threshold:
            if diff_x > 0:
                return self._controller.next()
            return self._controller.prev()
        return None

    def dispatch(self, payload: Mapping[str, Any]) -> None:
        """Routes an event dict emitted by the in-page bridge."""
        kind = payload.get("type")
        if kind == "key":
            self.handle_key(str(payload.get("key", "")))
        elif kind == "click":
            self.handle_click(
                PointerClick(
                    x=float(payload["x"]),
                    viewport_width=float(payload["width"]),
                    path=tuple(payload.get("path") or ()),
                )
            )
        elif kind == "touchstart":
            self.handle_touch_start(TouchPoint(float(payload["x"]), float(payload["y"])))
        elif kind == "touchend":
            self.handle_touch_end(TouchPoint(float(payload["x"]), float(payload["y"])))
        elif self._controller.config.debug:
            termcolor.cprint(f"[Input] ignored event type: {kind!r}", color="magenta")
