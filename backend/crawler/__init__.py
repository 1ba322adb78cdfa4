"""
Incremental catalog and detail scraper for mihetofilms.web.app.

The crawlers render pages through an injectable renderer, merge results into
JSON collections and persist after every unit of work.
"""

from .catalog import CatalogCrawler
from .config import CrawlerConfig, Timeouts
from .details import DetailCrawler
from .errors import (
    CrawlerError,
    EmptyCatalogError,
    ExtractionError,
    NavigationTimeout,
    RenderError,
    RendererUnavailable,
    StoreError,
)
from .models import DetailRecord, ListingEntry, PipelineResult, VideoLink
from .pacing import DelayScheduler
from .pipeline import ScrapePipeline
from .store import JsonStore, catalog_store, detail_store

__all__ = [
    "CatalogCrawler",
    "CrawlerConfig",
    "CrawlerError",
    "DelayScheduler",
    "DetailCrawler",
    "DetailRecord",
    "EmptyCatalogError",
    "ExtractionError",
    "JsonStore",
    "ListingEntry",
    "NavigationTimeout",
    "PipelineResult",
    "RenderError",
    "RendererUnavailable",
    "ScrapePipeline",
    "StoreError",
    "Timeouts",
    "VideoLink",
    "catalog_store",
    "detail_store",
]
