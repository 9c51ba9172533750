"""Playwright adapters for the slide navigation engine."""

from .page_display import DomSelectors, PageDisplay
from .presenter import BrowserPresenter

__all__ = ["BrowserPresenter", "DomSelectors", "PageDisplay"]
