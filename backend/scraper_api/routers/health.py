"""Health endpoints."""
from fastapi import APIRouter, Depends

from ..dependencies import get_scrape_service
from ..schemas import HealthStatus
from ..services import ScrapeService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
def get_health(service: ScrapeService = Depends(get_scrape_service)) -> HealthStatus:
    """Return service heartbeat information."""

    return HealthStatus(scrape_running=service.running)
