"""Read access to the persisted catalog and detail collections."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.crawler import DetailRecord, JsonStore, ListingEntry

from ..dependencies import get_catalog_store, get_detail_store

router = APIRouter(prefix="/api", tags=["library"])


@router.get("/catalog", summary="Persisted listing catalog")
def list_catalog(
    limit: int | None = Query(default=None, ge=1, description="Return at most this many entries."),
    store: JsonStore[ListingEntry] = Depends(get_catalog_store),
) -> list[dict[str, Any]]:
    """Return catalog entries in persisted order."""

    entries = store.load()
    if limit is not None:
        entries = entries[:limit]
    return [entry.to_json_dict() for entry in entries]


@router.get("/details", summary="Persisted detail records")
def list_details(store: JsonStore[DetailRecord] = Depends(get_detail_store)) -> list[dict[str, Any]]:
    """Return every detail record in persisted order."""

    return [record.to_json_dict() for record in store.load()]


@router.get("/details/{title_id}", summary="Single detail record")
def get_detail(
    title_id: str,
    store: JsonStore[DetailRecord] = Depends(get_detail_store),
) -> dict[str, Any]:
    """Return the detail record for ``title_id``, raising if missing."""

    for record in store.load():
        if record.id == title_id:
            return record.to_json_dict()
    raise HTTPException(status_code=404, detail="Title not found")
