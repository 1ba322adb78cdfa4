"""Runtime configuration for the scraper API."""
from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.crawler.config import CrawlerConfig, Timeouts


class ScraperSettings(BaseSettings):
    """Environment-aware settings for the scraper service."""

    catalog_path: str = Field(
        "./data/catalog.json", description="JSON file holding the persisted listing catalog."
    )
    details_path: str = Field(
        "./data/details.json", description="JSON file holding the persisted detail records."
    )
    max_pages: int = Field(default=50, ge=1, description="Default page budget for catalog crawls.")
    page_delay: float = Field(default=1.5, ge=0, description="Seconds to wait between listing pages.")
    item_delay: float = Field(default=2.0, ge=0, description="Seconds to wait between detail pages.")
    listing_navigation_timeout: float = Field(default=100.0, gt=0)
    listing_selector_timeout: float = Field(default=50.0, gt=0)
    detail_navigation_timeout: float = Field(default=60.0, gt=0)
    detail_selector_timeout: float = Field(default=15.0, gt=0)
    headless: bool = Field(default=True, description="Run Chromium without a visible window.")
    host: str = Field(default="0.0.0.0", description="Interface bound by the development server.")
    port: int = Field(default=4000, description="Port bound by the development server.")

    model_config = SettingsConfigDict(
        env_prefix="MIHETOFILMS_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    def crawler_config(self) -> CrawlerConfig:
        """Translate service settings into the crawler's explicit configuration."""

        return CrawlerConfig(
            max_pages=self.max_pages,
            page_delay=self.page_delay,
            item_delay=self.item_delay,
            listing_timeouts=Timeouts(
                navigation=self.listing_navigation_timeout,
                selector=self.listing_selector_timeout,
            ),
            detail_timeouts=Timeouts(
                navigation=self.detail_navigation_timeout,
                selector=self.detail_selector_timeout,
            ),
            headless=self.headless,
            catalog_path=Path(self.catalog_path),
            details_path=Path(self.details_path),
        )
