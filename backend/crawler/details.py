"""
Per-title detail crawl with resume and skip semantics.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .config import CrawlerConfig
from .errors import RenderError, StoreError
from .extractors import DetailExtractor, MihetofilmsDetailExtractor
from .models import DetailRecord
from .pacing import DelayScheduler
from .renderer import RendererFactory
from .store import JsonStore

logger = logging.getLogger(__name__)


class DetailCrawler:
    """Fetches detail pages one at a time, persisting after every success."""

    def __init__(
        self,
        config: CrawlerConfig,
        renderer_factory: RendererFactory,
        *,
        extractor: Optional[DetailExtractor] = None,
        scheduler: Optional[DelayScheduler] = None,
    ) -> None:
        self.config = config
        self._renderer_factory = renderer_factory
        self._extractor = extractor or MihetofilmsDetailExtractor()
        self._scheduler = scheduler or DelayScheduler(config.item_delay)

    def fetch_detail(self, identifier: str) -> Optional[DetailRecord]:
        """Render and extract a single detail page in its own browser.

        Returns ``None`` when the page cannot be rendered or read.
        """

        url = self.config.detail_url(identifier)
        try:
            renderer = self._renderer_factory()
        except Exception as exc:
            logger.error("Could not start renderer for %s: %s", identifier, exc)
            return None

        try:
            document = renderer.render(
                url,
                wait_for=self.config.detail_selector,
                timeouts=self.config.detail_timeouts,
            )
            return self._extractor(document, identifier)
        except RenderError as exc:
            logger.warning("Skipping %s, primary content not available: %s", identifier, exc)
            return None
        except Exception:
            logger.exception("Skipping %s, extraction failed", identifier)
            return None
        finally:
            try:
                renderer.close()
            except Exception as exc:
                logger.warning("Renderer close failed for %s: %s", identifier, exc)

    def crawl_details(
        self,
        identifiers: Iterable[str],
        existing: Sequence[DetailRecord] = (),
        *,
        store: Optional[JsonStore[DetailRecord]] = None,
    ) -> List[DetailRecord]:
        """Return ``existing`` followed by the records fetched for missing identifiers.

        When ``store`` is given the full collection is saved after each new record.
        """

        collection: List[DetailRecord] = list(existing)
        known_ids = {record.id for record in collection}
        fetched = 0
        skipped = 0
        failed = 0

        for identifier in identifiers:
            if identifier in known_ids:
                logger.info("Skipping %s (already scraped)", identifier)
                skipped += 1
                continue

            if fetched or failed:
                self._scheduler.wait()

            logger.info("Starting scrape for %s", identifier)
            record = self.fetch_detail(identifier)
            if record is None:
                failed += 1
                continue

            collection.append(record)
            known_ids.add(identifier)
            fetched += 1
            logger.info("Fetched %s (%d new this run)", identifier, fetched)

            if store is not None:
                try:
                    store.save(collection)
                except StoreError as exc:
                    logger.error("Could not save details after %s: %s", identifier, exc)

        logger.info(
            "Detail crawl complete: %d fetched, %d skipped, %d failed, %d total",
            fetched,
            skipped,
            failed,
            len(collection),
        )
        return collection

    def run(self, store: JsonStore[DetailRecord], identifiers: Iterable[str]) -> List[DetailRecord]:
        """Resume from ``store`` and fetch the identifiers it does not contain."""

        existing = store.load()
        logger.info("Loaded %d existing detail records from %s", len(existing), store.path)
        return self.crawl_details(identifiers, existing, store=store)
