"""Exception hierarchy for the crawler package."""
from __future__ import annotations


class CrawlerError(RuntimeError):
    """Base class for crawler failures."""


class RenderError(CrawlerError):
    """Raised when a page cannot be rendered."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url


class RendererUnavailable(RenderError):
    """Raised when the browser cannot be launched."""

    def __init__(self, message: str) -> None:
        super().__init__("<launch>", message)


class NavigationTimeout(RenderError):
    """Raised when navigation or the selector wait exceeds its timeout."""


class ExtractionError(CrawlerError):
    """Raised when structured data cannot be read from a rendered page."""


class StoreError(CrawlerError):
    """Raised when a collection cannot be written to disk."""


class EmptyCatalogError(CrawlerError):
    """Raised when the catalog phase produced no usable entries."""
