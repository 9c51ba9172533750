import dataclasses
import shutil
from pathlib import Path
from typing import Callable, Optional

import termcolor
from rich.console import Console
from rich.table import Table

from .capture import SlideCapturer
from .chapters import Chapter, ExportConfig
from .deck import build_deck
from .server import StaticFileServer

console = Console()


class ExportError(RuntimeError):
    """Raised when a chapter cannot be captured or written."""


@dataclasses.dataclass(frozen=True, slots=True)
class ChapterResult:
    chapter: Chapter
    output_path: Path
    slide_count: int


def screenshot_base_name(file: str) -> str:
    """Flatten a slide file path into a unique screenshot prefix.

    ``chapter1/intro.html`` becomes ``chapter1_intro`` so same-named files in
    different folders do not overwrite each other.
    """
    return Path(file).with_suffix("").as_posix().replace("/", "_")


def _log_export_summary(results: list[ChapterResult]) -> None:
    summary_table = Table(
        show_header=True,
        header_style="bold cyan",
        title="[bold yellow]Export Summary[/bold yellow]",
        expand=True,
    )
    summary_table.add_column("Chapter", style="cyan")
    summary_table.add_column("Deck")
    summary_table.add_column("Slides", justify="right", style="bold green")
    for result in results:
        summary_table.add_row(
            result.chapter.title,
            result.output_path.name,
            f"{result.slide_count:,}",
        )
    summary_table.add_row(
        "Total", "", f"{sum(r.slide_count for r in results):,}", style="bold"
    )

    console.print()
    console.print(summary_table)
    console.print()


def export_chapters(
    config: ExportConfig,
    *,
    server_factory: Callable[..., StaticFileServer] = StaticFileServer,
    capturer_factory: Callable[[ExportConfig], SlideCapturer] = SlideCapturer,
    deck_builder: Callable[..., Path] = build_deck,
    verbose: bool = True,
) -> list[ChapterResult]:
    """Screenshot every section of every chapter file and write one deck per chapter.

    Parameters
    ----------
    config : ExportConfig
        Validated before any browser or server is started.

    Returns
    -------
    list[ChapterResult]
        One entry per chapter, in manifest order.

    Raises
    ------
    ExportError
        If a page fails to load or capture, or a deck cannot be written. The
        server and browser are shut down either way.
    """
    config.validate()
    config.exports_dir.mkdir(parents=True, exist_ok=True)
    config.screenshots_dir.mkdir(parents=True, exist_ok=True)

    results: list[ChapterResult] = []
    current: Optional[str] = None
    try:
        with server_factory(config.slides_dir, port=config.port, debug=config.debug) as server:
            with capturer_factory(config) as capturer:
                for chapter in config.chapters:
                    termcolor.cprint(f"\n{chapter.title}", color="yellow", attrs=["bold"])
                    screenshots: list[Path] = []
                    for file in chapter.files:
                        current = file
                        screenshots.extend(
                            capturer.capture(
                                server.url_for(file),
                                screenshot_base_name(file),
                                config.screenshots_dir,
                            )
                        )

                    current = chapter.output_name
                    output_path = deck_builder(
                        chapter.title,
                        screenshots,
                        config.exports_dir / chapter.output_name,
                        author=config.author,
                        subject=config.subject,
                        slide_size=(config.slide_width, config.slide_height),
                    )
                    termcolor.cprint(
                        f"  Created: {output_path.name} ({len(screenshots)} slides)",
                        color="green",
                    )
                    results.append(
                        ChapterResult(
                            chapter=chapter,
                            output_path=output_path,
                            slide_count=len(screenshots),
                        )
                    )
    except ExportError:
        raise
    except Exception as exc:
        raise ExportError(f"export failed at {current or 'startup'}: {exc}") from exc
    finally:
        if not config.keep_screenshots:
            shutil.rmtree(config.screenshots_dir, ignore_errors=True)

    if verbose:
        _log_export_summary(results)
    return results
