"""Export HTML slide chapters to PowerPoint decks, one screenshot per section."""

from .chapters import Chapter, ChapterManifestError, ExportConfig, load_chapters
from .pipeline import ChapterResult, ExportError, export_chapters

__all__ = [
    "Chapter",
    "ChapterManifestError",
    "ChapterResult",
    "ExportConfig",
    "ExportError",
    "export_chapters",
    "load_chapters",
]
