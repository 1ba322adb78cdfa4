"""Tests for the paginated catalog crawl."""
from __future__ import annotations

from typing import Sequence

import pytest

from backend.crawler import (
    CatalogCrawler,
    CrawlerConfig,
    DelayScheduler,
    JsonStore,
    ListingEntry,
    RendererUnavailable,
    StoreError,
    catalog_store,
)
from backend.crawler.extractors import listing_entry_from_raw
from backend.crawler.models import EndOfResults, PageEntries, PageFailure

from conftest import FakeSite, RecordingSleep, card, listing_url, uid


class RecordingStore(JsonStore[ListingEntry]):
    """Catalog store remembering the size of every saved snapshot."""

    def __init__(self, path) -> None:
        super().__init__(path, ListingEntry)
        self.saved_sizes: list[int] = []

    def save(self, records: Sequence[ListingEntry]) -> None:
        self.saved_sizes.append(len(records))
        super().save(records)


class BrokenStore(JsonStore[ListingEntry]):
    """Catalog store that can read but never write."""

    def __init__(self, path) -> None:
        super().__init__(path, ListingEntry)
        self.attempts = 0

    def save(self, records: Sequence[ListingEntry]) -> None:
        self.attempts += 1
        raise StoreError("read-only filesystem")


def _crawler(config: CrawlerConfig, site: FakeSite, **kwargs) -> CatalogCrawler:
    return CatalogCrawler(config, site.factory, **kwargs)


def test_returns_only_titles_missing_from_existing_catalog(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("Intare", 1), card("Umuhigo", 2), card("Igikomere", 3)])
    existing = [listing_entry_from_raw(card("Umuhigo", 2))]

    new_entries = _crawler(config, site).crawl(max_pages=1, existing=existing)

    assert [entry.title for entry in new_entries] == ["Intare", "Igikomere"]
    assert site.render_calls == [listing_url(1)]


def test_empty_first_page_ends_crawl_without_error(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [])
    site.add_listing(2, [card("Never reached", 9)])

    assert _crawler(config, site).crawl(max_pages=5) == []
    assert site.render_calls == [listing_url(1)]


def test_stops_at_first_empty_page(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("A", 1), card("B", 2)])
    site.add_listing(2, [card("C", 3)])
    site.add_listing(3, [])
    site.add_listing(4, [card("D", 4)])

    new_entries = _crawler(config, site).crawl(max_pages=10)

    assert [entry.title for entry in new_entries] == ["A", "B", "C"]
    assert site.render_calls == [listing_url(1), listing_url(2), listing_url(3)]


def test_respects_page_budget(config: CrawlerConfig, site: FakeSite) -> None:
    for page in range(1, 5):
        site.add_listing(page, [card(f"Title {page}", page)])

    new_entries = _crawler(config, site).crawl(max_pages=2)

    assert len(new_entries) == 2
    assert site.render_calls == [listing_url(1), listing_url(2)]


def test_uses_configured_budget_by_default(config: CrawlerConfig, site: FakeSite) -> None:
    config.max_pages = 3
    for page in range(1, 6):
        site.add_listing(page, [card(f"Title {page}", page)])

    _crawler(config, site).crawl()

    assert len(site.render_calls) == 3


def test_rejects_non_positive_budget(config: CrawlerConfig, site: FakeSite) -> None:
    with pytest.raises(ValueError):
        _crawler(config, site).crawl(max_pages=0)


def test_navigation_failure_keeps_entries_from_earlier_pages(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("A", 1), card("B", 2)])
    # page 2 is not registered, so the fake renderer times out

    new_entries = _crawler(config, site).crawl(max_pages=5)

    assert [entry.title for entry in new_entries] == ["A", "B"]
    assert site.render_calls == [listing_url(1), listing_url(2)]


def test_failure_on_first_page_returns_empty(config: CrawlerConfig, site: FakeSite) -> None:
    assert _crawler(config, site).crawl(max_pages=3) == []
    assert site.renderers[0].closed is True


def test_deduplicates_titles_across_pages_of_one_run(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("A", 1), card("B", 2)])
    site.add_listing(2, [card("B", 2), card("C", 3), card("C", 4)])
    site.add_listing(3, [])

    new_entries = _crawler(config, site).crawl(max_pages=5)

    assert [entry.title for entry in new_entries] == ["A", "B", "C"]
    assert new_entries[2].id == uid(3)


def test_entries_without_identifier_are_kept(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("No link"), card("Linked", 1)])

    new_entries = _crawler(config, site).crawl(max_pages=1)

    assert [(entry.title, entry.id) for entry in new_entries] == [("No link", "N/A"), ("Linked", uid(1))]


def test_renderer_is_acquired_once_and_closed(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("A", 1)])
    site.add_listing(2, [card("B", 2)])
    site.add_listing(3, [])

    _crawler(config, site).crawl(max_pages=5)

    assert len(site.renderers) == 1
    assert site.renderers[0].closed is True


def test_waits_for_listing_grid_with_listing_timeouts(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [])

    _crawler(config, site).crawl(max_pages=1)

    ((selector, timeouts),) = site.renderers[0].waits
    assert selector == config.listing_selector
    assert timeouts == config.listing_timeouts


def test_renderer_launch_failure_yields_empty_result(config: CrawlerConfig) -> None:
    site = FakeSite(launch_error=RendererUnavailable("Executable doesn't exist"))

    assert _crawler(config, site).crawl(max_pages=3) == []


def test_extraction_error_is_treated_as_page_failure(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("A", 1)])
    site.add_listing(2, [card("B", 2)])

    def flaky_extractor(document):
        if document.url == listing_url(2):
            raise KeyError("title")
        return [listing_entry_from_raw(raw) for raw in document.payload]

    new_entries = _crawler(config, site, extractor=flaky_extractor).crawl(max_pages=5)

    assert [entry.title for entry in new_entries] == ["A"]
    assert site.renderers[0].closed is True


def test_fetch_page_reports_tagged_outcomes(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("A", 1)])
    site.add_listing(2, [])
    crawler = _crawler(config, site)
    renderer = site.factory()

    first = crawler.fetch_page(renderer, 1)
    second = crawler.fetch_page(renderer, 2)
    third = crawler.fetch_page(renderer, 3)

    assert isinstance(first, PageEntries) and [e.title for e in first.entries] == ["A"]
    assert second == EndOfResults(page=2)
    assert isinstance(third, PageFailure) and third.page == 3
    assert listing_url(3) in third.reason


def test_paces_between_pages_only(config: CrawlerConfig, site: FakeSite) -> None:
    for page in range(1, 4):
        site.add_listing(page, [card(f"Title {page}", page)])
    sleep = RecordingSleep()
    scheduler = DelayScheduler(1.5, sleep=sleep)

    _crawler(config, site, scheduler=scheduler).crawl(max_pages=3)

    assert sleep.calls == [1.5, 1.5]
    assert scheduler.waits == 2


def test_zero_delay_counts_waits_without_sleeping(config: CrawlerConfig, site: FakeSite) -> None:
    for page in range(1, 3):
        site.add_listing(page, [card(f"Title {page}", page)])
    sleep = RecordingSleep()
    scheduler = DelayScheduler(0, sleep=sleep)

    _crawler(config, site, scheduler=scheduler).crawl(max_pages=2)

    assert scheduler.waits == 1
    assert sleep.calls == []


def test_second_run_finds_nothing_new(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("A", 1), card("B", 2)])
    site.add_listing(2, [card("C", 3)])
    site.add_listing(3, [])
    store = catalog_store(config.catalog_path)
    crawler = _crawler(config, site)

    first = crawler.run(store)
    second = crawler.run(store)

    assert len(first.new_entries) == 3
    assert second.new_entries == []
    assert [entry.title for entry in store.load()] == ["A", "B", "C"]


def test_run_saves_full_catalog_after_each_page(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("A", 1), card("B", 2)])
    site.add_listing(2, [card("C", 3), card("D", 4)])
    site.add_listing(3, [])
    store = RecordingStore(config.catalog_path)
    store.save([listing_entry_from_raw(card("Old", 99))])
    store.saved_sizes.clear()

    run = _crawler(config, site).run(store)

    assert store.saved_sizes == [3, 5]
    assert [entry.title for entry in run.catalog] == ["Old", "A", "B", "C", "D"]
    assert store.load() == run.catalog


def test_run_preserves_saved_pages_when_a_later_page_fails(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("A", 1)])
    store = catalog_store(config.catalog_path)

    run = _crawler(config, site).run(store, max_pages=4)

    assert [entry.title for entry in store.load()] == ["A"]
    assert [entry.title for entry in run.new_entries] == ["A"]


def test_merge_invariant_holds(config: CrawlerConfig, site: FakeSite) -> None:
    site.add_listing(1, [card("A", 1), card("Known", 2), card("B", 3)])
    site.add_listing(2, [card("C", 4), card("A", 5)])
    site.add_listing(3, [])
    store = catalog_store(config.catalog_path)
    store.save([listing_entry_from_raw(card("Known", 2)), listing_entry_from_raw(card("Other", 8))])
    prior = store.load()

    run = _crawler(config, site).run(store)
    final = store.load()

    titles = [entry.title for entry in final]
    assert len(final) == len(prior) + len(run.new_entries)
    assert len(titles) == len(set(titles))
    assert final[: len(prior)] == prior


def test_run_continues_when_catalog_save_fails(
    config: CrawlerConfig, site: FakeSite, caplog: pytest.LogCaptureFixture
) -> None:
    site.add_listing(1, [card("A", 1)])
    site.add_listing(2, [card("B", 2)])
    site.add_listing(3, [])
    store = BrokenStore(config.catalog_path)

    with caplog.at_level("ERROR", logger="backend.crawler.catalog"):
        run = _crawler(config, site).run(store)

    assert store.attempts == 2
    assert site.render_calls == [listing_url(1), listing_url(2), listing_url(3)]
    assert [entry.title for entry in run.catalog] == ["A", "B"]
    assert [entry.title for entry in run.new_entries] == ["A", "B"]
    assert "Catalog save failed" in caplog.text
    assert not config.catalog_path.exists()
