"""Pydantic models exposed by the scraper API."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HealthStatus(BaseModel):
    """Service health payload."""

    status: Literal["ok"] = Field(default="ok")
    version: str = Field(default="0.1.0", description="Semantic version of the API service.")
    scrape_running: bool = Field(
        default=False, description="Whether a scrape is currently in progress."
    )


class ScrapeSummary(BaseModel):
    """Counts reported after a scrape run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_processed: int = Field(description="Identifiers handed to the detail crawler.")
    total_saved: int = Field(description="Detail records persisted after the run.")
    new_entries: int = Field(default=0, description="Catalog entries discovered in this run.")
