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
from pathlib import Path

import termcolor
from playwright.sync_api import sync_playwright

from browser.page_display import DomSelectors, PageDisplay

from .chapters import ExportConfig


def screenshot_name(base_name: str, index: int) -> str:
    return f"{base_name}_section{index + 1:02d}.png"


class SlideCapturer:
    """Screenshots every section of a slide page in a headless browser."""

    def __init__(self, config: ExportConfig, selectors: DomSelectors = DomSelectors()):
        self._config = config
        self._selectors = selectors

    def __enter__(self):
        self._playwright = sync_playwright().start()
        self._browser = self._playwright.chromium.launch(
            headless=self._config.headless,
            args=["--font-render-hinting=none"],
        )
        self._context = self._browser.new_context(viewport=self._config.viewport)
        self._page = self._context.new_page()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._context:
            self._context.close()
        try:
            self._browser.close()
        except Exception as e:
            # Browser was already shut down because of SIGINT or such.
            if "Connection closed" in str(e):
                pass
            else:
                raise

        self._playwright.stop()

    def capture(self, url: str, base_name: str, out_dir: Path) -> list[Path]:
        """Capture one PNG per section of ``url`` into ``out_dir``, in order."""
        page = self._page
        page.goto(
            url,
            wait_until="networkidle",
            timeout=self._config.navigation_timeout * 1000,
        )
        page.evaluate("() => document.fonts.ready.then(() => true)")
        page.wait_for_timeout(self._config.animation_wait * 1000)

        display = PageDisplay(page, self._selectors)
        section_count = display.count_sections()
        termcolor.cprint(f"    {base_name}: {section_count} sections", color="cyan")

        screenshots: list[Path] = []
        for index in range(section_count):
            display.force_section(index, section_count)
            page.wait_for_timeout(self._config.section_settle * 1000)
            path = Path(out_dir) / screenshot_name(base_name, index)
            page.screenshot(path=str(path), type="png", full_page=False)
            screenshots.append(path)
            if self._config.debug:
                termcolor.cprint(f"      wrote {path.name}", color="magenta")
        return screenshots
