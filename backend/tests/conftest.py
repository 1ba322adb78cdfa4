"""Shared fixtures and fakes for the scraper test-suite."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.crawler import CrawlerConfig, NavigationTimeout, Timeouts  # noqa: E402

LISTING_URL = "https://films.test/browse?genre=All&page={page}"
DETAIL_URL = "https://films.test/details/{id}"


def uid(number: int) -> str:
    """Return a UUID-shaped identifier matching the detail URL pattern."""

    return f"00000000-0000-4000-8000-{number:012d}"


def card(title: str, number: int | None = None, **overrides: Any) -> dict[str, Any]:
    """Raw listing card as returned by the browser-side listing script."""

    payload: dict[str, Any] = {
        "title": title,
        "imageUrl": f"https://cdn.films.test/{title.lower().replace(' ', '-')}.jpg",
        "href": f"/details/{uid(number)}" if number is not None else None,
        "uploadedTime": "2 days ago",
        "subber": "Rocky Kimomo",
    }
    payload.update(overrides)
    return payload


def detail(title: str, **overrides: Any) -> dict[str, Any]:
    """Raw detail payload as returned by the browser-side detail script."""

    payload: dict[str, Any] = {
        "title": title,
        "posterUrl": f"https://cdn.films.test/posters/{title.lower().replace(' ', '-')}.jpg",
        "info": {"Country": "Rwanda", "Narrator": "Sankara", "Videos": "2"},
        "description": f"{title} description",
        "trailerFound": True,
        "trailerText": "No trailer available",
        "videos": [
            {
                "episode": "Episode 1",
                "thumbnailUrl": "https://cdn.films.test/ep1.jpg",
                "downloadLink": "https://dl.films.test/ep1.mp4",
            },
            {
                "episode": "Episode 2",
                "thumbnailUrl": "https://cdn.films.test/ep2.jpg",
                "downloadLink": "https://dl.films.test/ep2.mp4",
            },
        ],
        "comments": {"count": 1, "emptyText": "No comments yet"},
    }
    payload.update(overrides)
    return payload


def listing_url(page: int) -> str:
    return LISTING_URL.format(page=page)


def detail_url(identifier: str) -> str:
    return DETAIL_URL.format(id=identifier)


class FakeDocument:
    """Rendered page stand-in returning a canned payload from ``evaluate``."""

    def __init__(self, url: str, payload: Any) -> None:
        self.url = url
        self.payload = payload
        self.evaluate_args: list[Any] = []

    def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.evaluate_args.append(arg)
        return self.payload


class FakeRenderer:
    """Renderer serving pages from a :class:`FakeSite`."""

    def __init__(self, site: "FakeSite") -> None:
        self._site = site
        self.closed = False
        self.waits: list[tuple[str, Timeouts]] = []

    def render(self, url: str, *, wait_for: str, timeouts: Timeouts) -> FakeDocument:
        if self.closed:
            raise RuntimeError("render called on a closed renderer")
        self._site.render_calls.append(url)
        self.waits.append((wait_for, timeouts))
        outcome = self._site.pages.get(url)
        if isinstance(outcome, Exception):
            raise outcome
        if outcome is None:
            raise NavigationTimeout(url, "Timeout exceeded while waiting for selector")
        return FakeDocument(url, outcome)

    def close(self) -> None:
        self.closed = True


class FakeSite:
    """Canned responses keyed by URL, recording every renderer and render call.

    URLs without a registered payload behave like a navigation timeout.
    """

    def __init__(self, pages: dict[str, Any] | None = None, *, launch_error: Exception | None = None) -> None:
        self.pages: dict[str, Any] = dict(pages or {})
        self.launch_error = launch_error
        self.render_calls: list[str] = []
        self.renderers: list[FakeRenderer] = []

    def factory(self) -> FakeRenderer:
        if self.launch_error is not None:
            raise self.launch_error
        renderer = FakeRenderer(self)
        self.renderers.append(renderer)
        return renderer

    def add_listing(self, page: int, cards: list[dict[str, Any]]) -> None:
        self.pages[listing_url(page)] = cards

    def add_detail(self, identifier: str, payload: Any) -> None:
        self.pages[detail_url(identifier)] = payload


class RecordingSleep:
    """Sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture()
def config(tmp_path: Path) -> CrawlerConfig:
    """Crawler configuration pointing at the fake site and an isolated data directory."""

    return CrawlerConfig(
        listing_url_template=LISTING_URL,
        detail_url_template=DETAIL_URL,
        max_pages=5,
        page_delay=0,
        item_delay=0,
        catalog_path=tmp_path / "data" / "catalog.json",
        details_path=tmp_path / "data" / "details.json",
    )


@pytest.fixture()
def site() -> FakeSite:
    return FakeSite()
