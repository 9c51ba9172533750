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
import argparse
from pathlib import Path
from typing import Optional, Sequence

import termcolor

from browser import BrowserPresenter, DomSelectors
from exporter import ExportConfig, ExportError, export_chapters, load_chapters
from slide_engine import NavigationConfig


PRESENT_SCREEN_SIZE = (1440, 900)
DEFAULT_NAVIGATION = NavigationConfig()
DEFAULT_SELECTORS = DomSelectors()


def _deck_url(deck: str) -> str:
    if deck.startswith(("http://", "https://", "file://")):
        return deck
    return Path(deck).resolve().as_uri()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Present HTML slide decks or export them to PowerPoint."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    present = subparsers.add_parser(
        "present", help="Open a deck in Chromium with keyboard, click and swipe navigation."
    )
    present.add_argument(
        "deck",
        type=str,
        help="Path or URL of the HTML deck to present.",
    )
    present.add_argument(
        "--section-selector",
        type=str,
        default=DEFAULT_SELECTORS.section,
        help="CSS selector matching one slide section.",
    )
    present.add_argument(
        "--fade-out-delay",
        type=float,
        default=DEFAULT_NAVIGATION.fade_out_delay,
        help="Seconds between hiding a section and showing the next one.",
    )
    present.add_argument(
        "--settle-delay",
        type=float,
        default=DEFAULT_NAVIGATION.settle_delay,
        help="Seconds navigation stays locked after a section appears.",
    )
    present.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Stop presenting after this many seconds.",
    )
    present.add_argument(
        "--headless",
        action="store_true",
        default=False,
        help="Run the browser without a window.",
    )
    present.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose logging for navigation.",
    )

    export = subparsers.add_parser(
        "export", help="Screenshot every section and write one .pptx per chapter."
    )
    export.add_argument(
        "manifest",
        type=Path,
        help="JSON manifest listing chapters and their slide files.",
    )
    export.add_argument(
        "--slides-dir",
        type=Path,
        default=None,
        help="Directory served to the browser (defaults to the manifest's directory).",
    )
    export.add_argument(
        "--exports-dir",
        type=Path,
        default=None,
        help="Where decks are written (defaults to <slides-dir>/exports).",
    )
    export.add_argument(
        "--port",
        type=int,
        default=9876,
        help="Port for the local file server (0 picks a free port).",
    )
    export.add_argument(
        "--width",
        type=int,
        default=1920,
        help="Viewport width in pixels.",
    )
    export.add_argument(
        "--height",
        type=int,
        default=1080,
        help="Viewport height in pixels.",
    )
    export.add_argument(
        "--author",
        type=str,
        default="Vibe Coding",
        help="Author recorded in each deck.",
    )
    export.add_argument(
        "--subject",
        type=str,
        default="Course Slides",
        help="Subject recorded in each deck.",
    )
    export.add_argument(
        "--keep-screenshots",
        action="store_true",
        default=False,
        help="Keep the intermediate PNG files.",
    )
    export.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose logging for capture.",
    )
    return parser


def run_present(args: argparse.Namespace) -> int:
    config = NavigationConfig(
        fade_out_delay=args.fade_out_delay,
        settle_delay=args.settle_delay,
        debug=args.debug,
    )
    config.validate()
    presenter = BrowserPresenter(
        deck_url=_deck_url(args.deck),
        screen_size=PRESENT_SCREEN_SIZE,
        config=config,
        selectors=DomSelectors(section=args.section_selector),
        headless=args.headless or None,
    )
    with presenter:
        presenter.run(duration=args.duration)
    return 0


def run_export(args: argparse.Namespace) -> int:
    slides_dir = args.slides_dir or args.manifest.parent
    chapters = load_chapters(args.manifest, slides_dir=slides_dir)
    config = ExportConfig(
        slides_dir=slides_dir,
        chapters=chapters,
        exports_dir=args.exports_dir,
        slide_width=args.width,
        slide_height=args.height,
        port=args.port,
        author=args.author,
        subject=args.subject,
        keep_screenshots=args.keep_screenshots,
        debug=args.debug,
    )
    termcolor.cprint("Exporting HTML slides to PPTX...", color="green", attrs=["bold"])
    export_chapters(config)
    termcolor.cprint(f"Done! Decks saved to: {config.exports_dir}", color="green", attrs=["bold"])
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if args.command == "present":
            return run_present(args)
        return run_export(args)
    except (ExportError, OSError, ValueError) as exc:
        termcolor.cprint(f"Error: {exc}", color="red", attrs=["bold"])
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
