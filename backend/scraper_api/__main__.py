"""CLI entry point for launching the scraper API with Uvicorn."""
import logging

import uvicorn

from .app import create_app
from .settings import ScraperSettings


def main() -> None:
    """Start a development server for the scraper API."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = ScraperSettings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
