import dataclasses
import json
import re
from pathlib import Path
from typing import Any


class ChapterManifestError(ValueError):
    """Raised when a chapter manifest cannot be used for export."""


_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


@dataclasses.dataclass(frozen=True, slots=True)
class Chapter:
    """A named group of slide files exported into one deck."""

    name: str
    title: str
    files: tuple[str, ...]

    @property
    def output_name(self) -> str:
        return f"{self.name}.pptx"


@dataclasses.dataclass(slots=True)
class ExportConfig:
    """Settings for exporting chapters of HTML slides to PowerPoint decks."""

    slides_dir: Path
    chapters: list[Chapter]
    exports_dir: Path | None = None
    slide_width: int = 1920
    slide_height: int = 1080
    port: int = 9876
    animation_wait: float = 0.8  # seconds after load before the first capture
    section_settle: float = 0.3  # seconds after forcing a section before its screenshot
    navigation_timeout: float = 30.0
    author: str = "Vibe Coding"
    subject: str = "Course Slides"
    keep_screenshots: bool = False
    headless: bool = True
    debug: bool = False

    def __post_init__(self) -> None:
        self.slides_dir = Path(self.slides_dir)
        if self.exports_dir is None:
            self.exports_dir = self.slides_dir / "exports"
        else:
            self.exports_dir = Path(self.exports_dir)

    @property
    def screenshots_dir(self) -> Path:
        return self.exports_dir / "screenshots"

    @property
    def viewport(self) -> dict[str, int]:
        return {"width": self.slide_width, "height": self.slide_height}

    def validate(self) -> None:
        if not self.slides_dir.is_dir():
            raise ValueError(f"slides_dir does not exist: {self.slides_dir}")
        if not self.chapters:
            raise ValueError("at least one chapter is required")
        if self.slide_width <= 0 or self.slide_height <= 0:
            raise ValueError("slide dimensions must be positive")
        if not 0 <= self.port <= 65535:
            raise ValueError("port must be between 0 and 65535")
        if self.animation_wait < 0 or self.section_settle < 0:
            raise ValueError("wait times cannot be negative")
        if self.navigation_timeout <= 0:
            raise ValueError("navigation_timeout must be positive")


def _parse_chapter(raw: Any, position: int) -> Chapter:
    if not isinstance(raw, dict):
        raise ChapterManifestError(f"chapter #{position} must be an object")
    name = raw.get("name")
    if not isinstance(name, str) or not _NAME_PATTERN.match(name):
        raise ChapterManifestError(
            f"chapter #{position} needs a file-safe 'name' (got {name!r})"
        )
    title = raw.get("title") or name
    if not isinstance(title, str):
        raise ChapterManifestError(f"chapter {name!r} has a non-string title")
    files = raw.get("files")
    if not isinstance(files, list) or not files:
        raise ChapterManifestError(f"chapter {name!r} must list at least one file")
    if not all(isinstance(item, str) and item for item in files):
        raise ChapterManifestError(f"chapter {name!r} has an invalid file entry")
    return Chapter(name=name, title=title, files=tuple(files))


def parse_chapters(data: Any) -> list[Chapter]:
    if isinstance(data, dict):
        data = data.get("chapters")
    if not isinstance(data, list) or not data:
        raise ChapterManifestError("manifest must define a non-empty 'chapters' list")
    chapters = [_parse_chapter(raw, i + 1) for i, raw in enumerate(data)]
    seen: set[str] = set()
    for chapter in chapters:
        if chapter.name in seen:
            raise ChapterManifestError(f"duplicate chapter name: {chapter.name!r}")
        seen.add(chapter.name)
    return chapters


def load_chapters(path: Path, slides_dir: Path | None = None) -> list[Chapter]:
    """Load chapters from a JSON manifest.

    File entries are relative to ``slides_dir`` (the manifest's directory by
    default) and must exist.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ChapterManifestError(f"{path}: invalid JSON ({exc})") from exc
    chapters = parse_chapters(data)

    root = Path(slides_dir) if slides_dir is not None else path.parent
    missing = [
        file
        for chapter in chapters
        for file in chapter.files
        if not (root / file).is_file()
    ]
    if missing:
        raise ChapterManifestError(
            f"{len(missing)} slide file(s) not found under {root}: {', '.join(missing)}"
        )
    return chapters
