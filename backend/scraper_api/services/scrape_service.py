"""Scrape orchestration for the API layer."""
from __future__ import annotations

import logging
import threading
from typing import Callable

from backend.crawler import CrawlerConfig, PipelineResult, ScrapePipeline

logger = logging.getLogger(__name__)

PipelineFactory = Callable[[CrawlerConfig], ScrapePipeline]


class ScrapeAlreadyRunningError(RuntimeError):
    """Raised when a scrape is triggered while another one is still running."""


class ScrapeService:
    """Runs the scrape pipeline, allowing one run per process at a time."""

    def __init__(self, config: CrawlerConfig, *, pipeline_factory: PipelineFactory = ScrapePipeline) -> None:
        self._config = config
        self._pipeline_factory = pipeline_factory
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._lock.locked()

    def run(self, *, max_pages: int | None = None) -> PipelineResult:
        """Execute a full scrape, raising if one is already in progress."""

        if not self._lock.acquire(blocking=False):
            raise ScrapeAlreadyRunningError("A scrape is already running")
        try:
            logger.info("Scrape triggered (max_pages=%s)", max_pages or self._config.max_pages)
            return self._pipeline_factory(self._config).run(max_pages)
        finally:
            self._lock.release()
