"""
JSON persistence for the catalog and detail collections.

Both collections are stored as a pretty-printed JSON array that is rewritten
wholesale on every save.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Generic, Sequence, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import StoreError
from .models import DetailRecord, ListingEntry

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class JsonStore(Generic[RecordT]):
    """Read-merge-write store for a single JSON collection file."""

    def __init__(self, path: Path, record_type: Type[RecordT]) -> None:
        self.path = Path(path)
        self._adapter = TypeAdapter(list[record_type])  # type: ignore[valid-type]

    def load(self) -> list[RecordT]:
        """Return the persisted collection, or an empty list if it cannot be read."""

        if not self.path.exists():
            return []
        try:
            return list(self._adapter.validate_json(self.path.read_bytes()))
        except (OSError, ValidationError) as exc:
            logger.error("Unable to load %s, starting from an empty collection: %s", self.path, exc)
            return []

    def save(self, records: Sequence[RecordT]) -> None:
        """Overwrite the file with the full collection."""

        payload = [record.model_dump(mode="json", by_alias=True, exclude_none=True) for record in records]
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as exc:
            raise StoreError(f"Failed to write {self.path}: {exc}") from exc


def catalog_store(path: Path) -> JsonStore[ListingEntry]:
    return JsonStore(path, ListingEntry)


def detail_store(path: Path) -> JsonStore[DetailRecord]:
    return JsonStore(path, DetailRecord)
