"""Single-threaded timers that drive transition phases.

Callbacks never run on a background thread: the host loop (a test, the
presenter poll loop) decides when due callbacks fire.
"""

import abc
import heapq
import itertools
import time
from typing import Callable, Protocol


class Scheduler(Protocol):
    """Protocol for deferring work on the caller's event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None: ...


class _TimerQueue(abc.ABC):
    def __init__(self) -> None:
        self._queue: list[tuple[float, int, Callable[[], None]]] = []
        self._sequence = itertools.count()

    @abc.abstractmethod
    def now(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        if delay < 0:
            raise ValueError("delay cannot be negative")
        heapq.heappush(self._queue, (self.now() + delay, next(self._sequence), callback))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def next_due(self) -> float | None:
        if not self._queue:
            return None
        return self._queue[0][0]

    def run_due(self) -> int:
        """Run every callback whose due time has passed; returns how many ran."""
        ran = 0
        while self._queue and self._queue[0][0] <= self.now():
            _, _, callback = heapq.heappop(self._queue)
            callback()
            ran += 1
        return ran


class ManualScheduler(_TimerQueue):
    """Virtual clock advanced explicitly by the caller."""

    def __init__(self, start: float = 0.0) -> None:
        super().__init__()
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> int:
        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        target = self._now + seconds
        ran = 0
        # Step through due times so callbacks observe the clock at their own deadline.
        while self._queue and self._queue[0][0] <= target:
            self._now = max(self._now, self._queue[0][0])
            ran += self.run_due()
        self._now = target
        return ran

    def run_all(self) -> int:
        ran = 0
        while self._queue:
            ran += self.advance(max(0.0, self._queue[0][0] - self._now))
        return ran


class MonotonicScheduler(_TimerQueue):
    """Wall-clock scheduler polled by a host loop."""

    def now(self) -> float:
        return time.monotonic()
