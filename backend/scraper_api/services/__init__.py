"""Service layer helpers for the scraper API."""

from .scrape_service import PipelineFactory, ScrapeAlreadyRunningError, ScrapeService

__all__ = [
    "PipelineFactory",
    "ScrapeService",
    "ScrapeAlreadyRunningError",
]
