# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import os
import time
from collections import deque
from typing import Any, Optional

import playwright.sync_api
import termcolor
from playwright.sync_api import sync_playwright

from slide_engine import (
    InputBinder,
    MonotonicScheduler,
    NavigationConfig,
    NavigationController,
)

from .bridge import BRIDGE_BINDING, bridge_script
from .page_display import DomSelectors, PageDisplay

# Decks that bundle js/slide-engine.js declare a top-level `slideEngine`.
_PAGE_ENGINE_SCRIPT = """
() => typeof window.slideEngine !== 'undefined'
    || typeof slideEngine !== 'undefined'
    || typeof SlideEngine !== 'undefined'
"""


class BrowserPresenter:
    """Runs the navigation controller against a deck opened in local Chromium."""

    def __init__(
        self,
        deck_url: str,
        screen_size: tuple[int, int] = (1440, 900),
        config: Optional[NavigationConfig] = None,
        selectors: DomSelectors = DomSelectors(),
        headless: Optional[bool] = None,
        poll_interval: float = 0.05,
    ):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self._deck_url = deck_url
        self._screen_size = screen_size
        self._config = config or NavigationConfig()
        self._selectors = selectors
        if headless is None:
            headless = bool(os.environ.get("PLAYWRIGHT_HEADLESS", False))
        self._headless = headless
        self._poll_interval = poll_interval
        self._events: deque[dict[str, Any]] = deque()
        self._scheduler = MonotonicScheduler()
        self._controller: Optional[NavigationController] = None
        self._binder: Optional[InputBinder] = None
        self._closed = False

    @property
    def controller(self) -> Optional[NavigationController]:
        return self._controller

    def _enqueue(self, payload: dict[str, Any]) -> None:
        # Called from Playwright's dispatcher; the poll loop does the work.
        self._events.append(payload)

    def _on_close(self, _page: playwright.sync_api.Page) -> None:
        self._closed = True

    def _warn_if_page_has_engine(self) -> bool:
        """Warn when the deck runs its own navigation script.

        The presenter targets decks without one; otherwise both engines react
        to every key, click and swipe and their transition locks drift apart.
        """
        if not self._page.evaluate(_PAGE_ENGINE_SCRIPT):
            return False
        termcolor.cprint(
            "Deck loads its own slide engine; remove it or navigation will double-step.",
            color="yellow",
            attrs=["bold"],
        )
        return True

    def __enter__(self):
        print("Creating session...")
        self._playwright = sync_playwright().start()
        self._browser = self._playwright.chromium.launch(
            args=[
                "--disable-extensions",
                "--disable-plugins",
                "--disable-dev-shm-usage",
                "--disable-background-networking",
                "--disable-default-apps",
                "--disable-sync",
            ],
            headless=self._headless,
        )
        self._context = self._browser.new_context(
            viewport={
                "width": self._screen_size[0],
                "height": self._screen_size[1],
            }
        )
        self._page = self._context.new_page()
        self._page.on("close", self._on_close)
        self._page.expose_function(BRIDGE_BINDING, self._enqueue)
        self._page.add_init_script(bridge_script())
        self._page.goto(self._deck_url, wait_until="domcontentloaded")

        self._controller = NavigationController(
            display=PageDisplay(self._page, self._selectors),
            scheduler=self._scheduler,
            config=self._config,
            status_callback=lambda message: termcolor.cprint(
                message, color="green", attrs=["bold"]
            ),
        )
        self._warn_if_page_has_engine()
        self._binder = InputBinder(self._controller)
        self._controller.start()

        termcolor.cprint(
            f"Presenting {self._deck_url}",
            color="green",
            attrs=["bold"],
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._context:
            try:
                self._context.close()
            except playwright.sync_api.Error:
                pass
        try:
            self._browser.close()
        except Exception as e:
            # Browser was already shut down because of SIGINT or such.
            if "Connection closed" in str(e):
                pass
            else:
                raise

        self._playwright.stop()

    def pump(self) -> int:
        """Feed queued page events to the controller and fire due timers."""
        handled = 0
        while self._events:
            payload = self._events.popleft()
            if self._binder is not None:
                self._binder.dispatch(payload)
            handled += 1
        self._scheduler.run_due()
        return handled

    def run(self, duration: Optional[float] = None) -> None:
        """Present until the page is closed, or for ``duration`` seconds."""
        if self._controller is None or self._controller.is_inert:
            return
        deadline = None if duration is None else time.monotonic() + duration
        wait_ms = self._poll_interval * 1000
        while not self._closed:
            if deadline is not None and time.monotonic() >= deadline:
                break
            try:
                # Playwright only dispatches exposed-function calls while we are inside its API.
                self._page.wait_for_timeout(wait_ms)
            except playwright.sync_api.Error:
                break
            self.pump()
        termcolor.cprint("Presentation closed.", color="green")
