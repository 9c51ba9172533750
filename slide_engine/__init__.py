"""Headless slide navigation: sections, transitions and input handling."""

from .config import NavigationConfig
from .controller import NavAction, NavigationController, NavigationOutcome, TransitionPhase
from .display import DisplayPort, FullscreenUnavailable, HeadlessDisplay, Section
from .inputs import InputBinder, PointerClick, TouchPoint
from .scheduler import ManualScheduler, MonotonicScheduler, Scheduler

__all__ = [
    "DisplayPort",
    "FullscreenUnavailable",
    "HeadlessDisplay",
    "InputBinder",
    "ManualScheduler",
    "MonotonicScheduler",
    "NavAction",
    "NavigationConfig",
    "NavigationController",
    "NavigationOutcome",
    "PointerClick",
    "Scheduler",
    "Section",
    "TouchPoint",
    "TransitionPhase",
]
