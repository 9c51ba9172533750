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
import dataclasses
from typing import Any

from playwright.sync_api import Page

from slide_engine.controller import counter_text, progress_fraction
from slide_engine.display import FullscreenUnavailable, Section


@dataclasses.dataclass(frozen=True, slots=True)
class DomSelectors:
    section: str = ".slide-section"
    animated: str = '.animate-in, [class*="animate-in-delay"]'
    progress: str = ".progress-fill"
    counter: str = ".page-counter"
    active_class: str = "active"

    def as_arg(self) -> dict[str, str]:
        return dataclasses.asdict(self)


_DISCOVER_SCRIPT = """
(sel) => Array.from(document.querySelectorAll(sel.section)).map((section, index) => ({
    index,
    animatedCount: section.querySelectorAll(sel.animated).length,
    elementId: section.id || null,
}))
"""

_SET_ACTIVE_SCRIPT = """
([sel, index, active]) => {
    const section = document.querySelectorAll(sel.section)[index];
    if (!section) return;
    section.classList.toggle(sel.active_class, active);
}
"""

_SET_PROGRESS_SCRIPT = """
([sel, percent]) => {
    const fill = document.querySelector(sel.progress);
    if (!fill) return;
    fill.style.width = percent + '%';
}
"""

_SET_COUNTER_SCRIPT = """
([sel, current, total]) => {
    const counter = document.querySelector(sel.counter);
    if (!counter) return;
    counter.innerHTML = `<span class="current">${current}</span> / ${total}`;
}
"""

_RESET_ANIMATION_SCRIPT = """
([sel, index]) => {
    const section = document.querySelectorAll(sel.section)[index];
    if (!section) return;
    section.querySelectorAll(sel.animated).forEach((el) => { el.style.animation = 'none'; });
}
"""

# Reading offsetHeight forces a synchronous layout so the cleared animation restarts.
_PLAY_ANIMATION_SCRIPT = """
([sel, index]) => {
    const section = document.querySelectorAll(sel.section)[index];
    if (!section) return;
    section.querySelectorAll(sel.animated).forEach((el) => {
        void el.offsetHeight;
        el.style.animation = '';
    });
}
"""

_TOGGLE_FULLSCREEN_SCRIPT = """
async () => {
    try {
        if (!document.fullscreenElement) {
            await document.documentElement.requestFullscreen();
        } else {
            await document.exitFullscreen();
        }
        return null;
    } catch (err) {
        return String(err);
    }
}
"""

_FORCE_SECTION_SCRIPT = """
([sel, index]) => {
    const sections = document.querySelectorAll(sel.section);
    sections.forEach((s) => s.classList.remove(sel.active_class));
    const section = sections[index];
    if (!section) return;
    section.classList.add(sel.active_class);
    section.querySelectorAll(sel.animated).forEach((el) => {
        el.style.animation = 'none';
        el.style.opacity = '1';
        el.style.transform = 'translateY(0)';
    });
}
"""


class PageDisplay:
    """Renders navigation state onto a slide deck loaded in a Playwright page."""

    def __init__(self, page: Page, selectors: DomSelectors = DomSelectors()):
        self._page = page
        self._selectors = selectors
        self._sel = selectors.as_arg()

    @property
    def selectors(self) -> DomSelectors:
        return self._selectors

    def _evaluate(self, script: str, arg: Any = None) -> Any:
        if arg is None:
            return self._page.evaluate(script)
        return self._page.evaluate(script, arg)

    def discover_sections(self) -> list[Section]:
        found = self._evaluate(_DISCOVER_SCRIPT, self._sel) or []
        return [
            Section(
                index=int(item["index"]),
                animated_count=int(item["animatedCount"]),
                element_id=item.get("elementId"),
            )
            for item in found
        ]

    def activate(self, index: int) -> None:
        self._evaluate(_SET_ACTIVE_SCRIPT, [self._sel, index, True])

    def deactivate(self, index: int) -> None:
        self._evaluate(_SET_ACTIVE_SCRIPT, [self._sel, index, False])

    def set_progress(self, fraction: float) -> None:
        self._evaluate(_SET_PROGRESS_SCRIPT, [self._sel, fraction * 100])

    def set_counter_text(self, text: str) -> None:
        current, _, total = text.partition(" / ")
        self._evaluate(_SET_COUNTER_SCRIPT, [self._sel, current, total])

    def reset_animation(self, index: int) -> None:
        self._evaluate(_RESET_ANIMATION_SCRIPT, [self._sel, index])

    def play_animation(self, index: int) -> None:
        self._evaluate(_PLAY_ANIMATION_SCRIPT, [self._sel, index])

    def toggle_fullscreen(self) -> None:
        error = self._evaluate(_TOGGLE_FULLSCREEN_SCRIPT)
        if error:
            raise FullscreenUnavailable(error)

    def force_section(self, index: int, total: int) -> None:
        """Show only ``index`` with its animations already finished."""
        self._evaluate(_FORCE_SECTION_SCRIPT, [self._sel, index])
        self.set_progress(progress_fraction(index, total))
        self.set_counter_text(counter_text(index, total))

    def count_sections(self) -> int:
        return int(
            self._evaluate(
                "(sel) => document.querySelectorAll(sel.section).length", self._sel
            )
        )
