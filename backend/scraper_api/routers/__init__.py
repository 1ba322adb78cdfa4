"""Router exports for the scraper API."""
from . import health, library, scrape

__all__ = ["health", "library", "scrape"]
