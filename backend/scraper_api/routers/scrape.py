"""Scrape trigger endpoint."""
from fastapi import APIRouter, Depends, HTTPException, Query

from backend.crawler import EmptyCatalogError

from ..dependencies import get_scrape_service
from ..schemas import ScrapeSummary
from ..services import ScrapeAlreadyRunningError, ScrapeService

router = APIRouter(prefix="/api", tags=["scrape"])


@router.get("/scrape", response_model=ScrapeSummary)
def scrape(
    pages: int | None = Query(
        default=None,
        ge=1,
        description="Maximum number of listing pages to crawl. Defaults to the configured budget.",
    ),
    service: ScrapeService = Depends(get_scrape_service),
) -> ScrapeSummary:
    """Crawl the catalog, then every missing detail page, and report counts."""

    try:
        result = service.run(max_pages=pages)
    except ScrapeAlreadyRunningError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except EmptyCatalogError as exc:
        raise HTTPException(status_code=500, detail=f"Scraping failed: {exc}") from exc

    return ScrapeSummary(
        total_processed=result.total_processed,
        total_saved=result.total_saved,
        new_entries=result.new_entries,
    )
