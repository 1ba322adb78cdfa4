"""
Catalog-then-details scrape used by the API and the CLI.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .catalog import CatalogCrawler
from .config import CrawlerConfig
from .details import DetailCrawler
from .errors import EmptyCatalogError
from .extractors import DetailExtractor, ListingExtractor
from .models import MISSING, ListingEntry, PipelineResult
from .pacing import DelayScheduler
from .renderer import RendererFactory, playwright_factory
from .store import catalog_store, detail_store

logger = logging.getLogger(__name__)


def detail_identifiers(entries: Iterable[ListingEntry]) -> List[str]:
    """Return unique, usable identifiers in catalog order."""

    identifiers: List[str] = []
    seen = set()
    for entry in entries:
        if entry.id == MISSING or entry.id in seen:
            continue
        seen.add(entry.id)
        identifiers.append(entry.id)
    return identifiers


class ScrapePipeline:
    """Runs the catalog crawl, then the detail crawl over the merged catalog."""

    def __init__(
        self,
        config: CrawlerConfig,
        renderer_factory: Optional[RendererFactory] = None,
        *,
        listing_extractor: Optional[ListingExtractor] = None,
        detail_extractor: Optional[DetailExtractor] = None,
        page_scheduler: Optional[DelayScheduler] = None,
        item_scheduler: Optional[DelayScheduler] = None,
    ) -> None:
        self.config = config
        factory = renderer_factory or playwright_factory(config)
        self.catalog_crawler = CatalogCrawler(
            config, factory, extractor=listing_extractor, scheduler=page_scheduler
        )
        self.detail_crawler = DetailCrawler(
            config, factory, extractor=detail_extractor, scheduler=item_scheduler
        )

    def run_catalog(self, max_pages: Optional[int] = None) -> List[ListingEntry]:
        """Update the persisted catalog and return it in full."""

        run = self.catalog_crawler.run(catalog_store(self.config.catalog_path), max_pages)
        logger.info("Catalog holds %d entries (%d new)", len(run.catalog), len(run.new_entries))
        return run.catalog

    def run(self, max_pages: Optional[int] = None) -> PipelineResult:
        """Scrape the catalog and every missing detail page.

        Raises:
            EmptyCatalogError: when no catalog entry has a usable identifier.
        """

        catalog_run = self.catalog_crawler.run(catalog_store(self.config.catalog_path), max_pages)
        identifiers = detail_identifiers(catalog_run.catalog)
        if not identifiers:
            raise EmptyCatalogError(
                f"Catalog has no entries with a usable identifier ({len(catalog_run.catalog)} entries)"
            )

        details = self.detail_crawler.run(detail_store(self.config.details_path), identifiers)

        result = PipelineResult(
            total_processed=len(identifiers),
            total_saved=len(details),
            new_entries=len(catalog_run.new_entries),
            catalog_size=len(catalog_run.catalog),
        )
        logger.info(
            "Scrape complete: %d processed, %d saved, %d new catalog entries",
            result.total_processed,
            result.total_saved,
            result.new_entries,
        )
        return result
