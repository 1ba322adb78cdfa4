"""
Paginated crawl of the browse listing.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Sequence

from .config import CrawlerConfig
from .errors import RenderError, StoreError
from .extractors import ListingExtractor, MihetofilmsListingExtractor
from .models import CatalogRun, EndOfResults, ListingEntry, PageEntries, PageFailure, PageResult
from .pacing import DelayScheduler
from .renderer import PageRenderer, RendererFactory
from .store import JsonStore

logger = logging.getLogger(__name__)

PageCallback = Callable[[List[ListingEntry]], None]


class CatalogCrawler:
    """Walks listing pages and collects entries not yet in the catalog.

    Entries are deduplicated by ``title``; two distinct titles sharing the same
    display name collapse into one catalog entry.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        renderer_factory: RendererFactory,
        *,
        extractor: Optional[ListingExtractor] = None,
        scheduler: Optional[DelayScheduler] = None,
    ) -> None:
        self.config = config
        self._renderer_factory = renderer_factory
        self._extractor = extractor or MihetofilmsListingExtractor(config.listing_selector)
        self._scheduler = scheduler or DelayScheduler(config.page_delay)

    def fetch_page(self, renderer: PageRenderer, page: int) -> PageResult:
        """Render and extract one listing page."""

        url = self.config.listing_url(page)
        try:
            document = renderer.render(
                url,
                wait_for=self.config.listing_selector,
                timeouts=self.config.listing_timeouts,
            )
            entries = self._extractor(document)
        except RenderError as exc:
            return PageFailure(page=page, reason=str(exc))
        except Exception as exc:
            logger.exception("Extraction failed on listing page %d", page)
            return PageFailure(page=page, reason=f"extraction failed: {exc}")

        if not entries:
            return EndOfResults(page=page)
        return PageEntries(page=page, entries=list(entries))

    def crawl(
        self,
        max_pages: Optional[int] = None,
        existing: Iterable[ListingEntry] = (),
        *,
        on_page: Optional[PageCallback] = None,
    ) -> List[ListingEntry]:
        """Return the entries discovered in this run that are not in ``existing``.

        ``on_page`` is called with each page's accepted entries before the next
        page is fetched.
        """

        budget = max_pages if max_pages is not None else self.config.max_pages
        if budget < 1:
            raise ValueError(f"max_pages must be positive, got {budget}")

        try:
            return self._crawl(budget, existing, on_page)
        except Exception:
            logger.exception("Catalog crawl aborted")
            return []

    def _crawl(
        self,
        budget: int,
        existing: Iterable[ListingEntry],
        on_page: Optional[PageCallback],
    ) -> List[ListingEntry]:
        seen_titles = {entry.title for entry in existing}
        discovered: List[ListingEntry] = []

        renderer = self._renderer_factory()
        try:
            for page in range(1, budget + 1):
                result = self.fetch_page(renderer, page)

                if isinstance(result, PageFailure):
                    logger.warning("Listing page %d failed, ending crawl: %s", page, result.reason)
                    break
                if isinstance(result, EndOfResults):
                    logger.info("No entries on page %d, assuming end of results", page)
                    break

                accepted = []
                for entry in result.entries:
                    if entry.title in seen_titles:
                        continue
                    seen_titles.add(entry.title)
                    accepted.append(entry)

                discovered.extend(accepted)
                logger.info(
                    "Page %d scraped: %d entries, %d new. Total new: %d",
                    page,
                    len(result.entries),
                    len(accepted),
                    len(discovered),
                )
                if accepted and on_page is not None:
                    on_page(accepted)

                if page < budget:
                    self._scheduler.wait()
        finally:
            renderer.close()

        logger.info("Catalog crawl complete: %d new entries", len(discovered))
        return discovered

    def run(self, store: JsonStore[ListingEntry], max_pages: Optional[int] = None) -> CatalogRun:
        """Crawl and merge into ``store``, saving the full catalog after each page."""

        catalog: List[ListingEntry] = store.load()
        prior_count = len(catalog)
        logger.info("Loaded %d existing catalog entries from %s", len(catalog), store.path)

        def _persist(accepted: Sequence[ListingEntry]) -> None:
            catalog.extend(accepted)
            try:
                store.save(catalog)
            except StoreError as exc:
                logger.error("Catalog save failed, keeping %d entries in memory: %s", len(catalog), exc)

        self.crawl(max_pages, list(catalog), on_page=_persist)
        return CatalogRun(catalog=catalog, new_entries=catalog[prior_count:])
