"""FastAPI service exposing the mihetofilms scrape pipeline."""

from .app import create_app

__all__ = ["create_app"]
