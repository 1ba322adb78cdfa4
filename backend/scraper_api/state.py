"""Shared state container for the scraper API."""
from __future__ import annotations

from dataclasses import dataclass

from backend.crawler import CrawlerConfig, DetailRecord, JsonStore, ListingEntry, catalog_store, detail_store

from .services import PipelineFactory, ScrapeService
from .settings import ScraperSettings


@dataclass(slots=True)
class AppState:
    """Encapsulates application state shared across routers."""

    settings: ScraperSettings
    crawler_config: CrawlerConfig
    scrape_service: ScrapeService
    catalog: JsonStore[ListingEntry]
    details: JsonStore[DetailRecord]

    def __init__(self, settings: ScraperSettings, pipeline_factory: PipelineFactory | None = None) -> None:
        self.settings = settings
        self.crawler_config = settings.crawler_config()
        if pipeline_factory is None:
            self.scrape_service = ScrapeService(self.crawler_config)
        else:
            self.scrape_service = ScrapeService(self.crawler_config, pipeline_factory=pipeline_factory)
        self.catalog = catalog_store(self.crawler_config.catalog_path)
        self.details = detail_store(self.crawler_config.details_path)
