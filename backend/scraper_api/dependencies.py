"""FastAPI dependencies for the scraper API."""
from fastapi import Depends, Request

from backend.crawler import DetailRecord, JsonStore, ListingEntry

from .services import ScrapeService
from .state import AppState


def get_app_state(request: Request) -> AppState:
    """Resolve the shared application state from the FastAPI request."""
    return request.app.state.app_state


def get_scrape_service(app_state: AppState = Depends(get_app_state)) -> ScrapeService:
    """Return the scrape service dependency."""
    return app_state.scrape_service


def get_catalog_store(app_state: AppState = Depends(get_app_state)) -> JsonStore[ListingEntry]:
    return app_state.catalog


def get_detail_store(app_state: AppState = Depends(get_app_state)) -> JsonStore[DetailRecord]:
    return app_state.details
