"""Data models shared by the catalog and detail crawlers."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MISSING = "N/A"
DETAIL_ID_PATTERN = re.compile(r"/details/([a-f0-9-]+)")


def extract_listing_id(relative_url: str | None) -> str:
    """Return the title identifier embedded in a detail page URL."""

    if not relative_url:
        return MISSING
    match = DETAIL_ID_PATTERN.search(relative_url)
    return match.group(1) if match else MISSING


class _CamelModel(BaseModel):
    """Base model persisting snake_case attributes under camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ListingEntry(_CamelModel):
    """One card of the paginated browse view."""

    id: str = Field(default=MISSING, description="Identifier parsed from the detail URL.")
    title: str = Field(default=MISSING)
    image_url: str = Field(default=MISSING)
    detail_page_relative_url: str = Field(default=MISSING)
    uploaded_time: str = Field(default=MISSING, description="Relative upload time, e.g. '2 days ago'.")
    subber: str = Field(default=MISSING, description="Name of the translator credited on the card.")


class VideoLink(_CamelModel):
    """A single episode entry listed on a detail page."""

    episode: str = Field(default=MISSING)
    thumbnail_url: str = Field(default=MISSING)
    download_link: str = Field(default=MISSING)


class DetailRecord(_CamelModel):
    """Full data extracted from a title's dedicated page."""

    id: str
    title: str = Field(default=MISSING)
    poster_url: str = Field(default=MISSING)
    country: str | None = None
    narrator: str | None = None
    number_of_videos: int | None = None
    description: str = Field(default=MISSING)
    trailer_available: bool = False
    trailer_text: str = Field(default="Not found")
    videos: list[VideoLink] = Field(default_factory=list)
    comments_available: bool = False


# --------------------------------------------------------------------------- #
# Listing page outcomes
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class PageEntries:
    """A listing page rendered and yielded at least one entry."""

    page: int
    entries: list[ListingEntry] = field(default_factory=list)


@dataclass(frozen=True)
class EndOfResults:
    """A listing page rendered but contained no entries."""

    page: int


@dataclass(frozen=True)
class PageFailure:
    """A listing page could not be rendered or extracted."""

    page: int
    reason: str


PageResult = Union[PageEntries, EndOfResults, PageFailure]


@dataclass
class CatalogRun:
    """Outcome of a catalog crawl merged into the persisted catalog."""

    catalog: list[ListingEntry]
    new_entries: list[ListingEntry]


@dataclass
class PipelineResult:
    """Counts reported after a full catalog and detail scrape."""

    total_processed: int
    total_saved: int
    new_entries: int
    catalog_size: int
