"""Application factory for the scraper API."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .routers import health, library, scrape
from .services import PipelineFactory
from .settings import ScraperSettings
from .state import AppState

WELCOME_MESSAGE = "Welcome to the Movie Scraper API! Send a GET request to /api/scrape to start scraping."


def create_app(
    settings: ScraperSettings | None = None,
    *,
    pipeline_factory: PipelineFactory | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application."""

    resolved_settings = settings or ScraperSettings()
    app_state = AppState(settings=resolved_settings, pipeline_factory=pipeline_factory)

    app = FastAPI(title="Mihetofilms Scraper API", version="0.1.0")
    app.state.app_state = app_state
    app.state.settings = app_state.settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def index() -> str:
        return WELCOME_MESSAGE

    for router in (health.router, scrape.router, library.router):
        app.include_router(router)

    return app
