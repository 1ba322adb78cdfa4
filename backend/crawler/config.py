"""
Configuration dataclasses for the catalog and detail crawlers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

BASE_URL = "https://mihetofilms.web.app"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass
class Timeouts:
    """Bounded waits, in seconds, applied to a single page render."""
    navigation: float = 60.0
    selector: float = 15.0


@dataclass
class CrawlerConfig:
    """Settings passed explicitly into every crawler."""
    # Listing phase
    listing_url_template: str = f"{BASE_URL}/browse?genre=All&page={{page}}"
    listing_selector: str = ".grid.grid-cols-3.md\\:grid-cols-4.lg\\:grid-cols-6.gap-4"
    listing_timeouts: Timeouts = field(default_factory=lambda: Timeouts(navigation=100.0, selector=50.0))
    max_pages: int = 50
    page_delay: float = 1.5

    # Detail phase
    detail_url_template: str = f"{BASE_URL}/details/{{id}}"
    detail_selector: str = 'section[aria-label="Movie Info and Media"] div.card'
    detail_timeouts: Timeouts = field(default_factory=Timeouts)
    item_delay: float = 2.0

    # Browser
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    wait_until: str = "networkidle"

    # Storage
    catalog_path: Path = Path("data/catalog.json")
    details_path: Path = Path("data/details.json")

    def listing_url(self, page: int) -> str:
        return self.listing_url_template.format(page=page)

    def detail_url(self, identifier: str) -> str:
        return self.detail_url_template.format(id=identifier)
