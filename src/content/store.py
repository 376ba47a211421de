"""JSON-backed content store.

Persists ContentRecords in a single JSON file, loaded on init and saved
after every write. Inserts run the ``BEFORE_INSERT`` filters first, the
way a CMS runs its save hooks.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from titleslug.content.models import BEFORE_INSERT, ContentRecord

if TYPE_CHECKING:
    from titleslug.slug.hooks import HookDispatcher

logger = logging.getLogger(__name__)

STORE_FILENAME = ".titleslug-content.json"

# Alias to avoid shadowing by ContentStore.list method
_list = list


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    records: list[ContentRecord] = Field(default_factory=list)


class ContentStore:
    """JSON-backed store for content records, keyed by id."""

    def __init__(self, output_dir: Path) -> None:
        self._path = Path(output_dir) / STORE_FILENAME
        self._data = self._load()

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError, KeyError):
            logger.warning("Corrupt content store at %s, starting fresh", self._path)
            return _StoreData()

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            self._data.model_dump_json(indent=2),
            encoding="utf-8",
        )

    def _next_id(self) -> int:
        return max((r.id or 0 for r in self._data.records), default=0) + 1

    # ── Write operations ─────────────────────────────────────────

    def insert(
        self, record: ContentRecord, dispatcher: HookDispatcher | None = None
    ) -> ContentRecord:
        """Run the before-insert filters, then persist the record.

        New records (no id) get the next free id. A record whose id is
        already stored replaces the stored version. An update submitted
        without a slug keeps the stored slug.

        Returns:
            The record as persisted.
        """
        if record.id is not None and not record.slug:
            stored = self.get(record.id)
            if stored is not None and stored.slug:
                record = record.model_copy(update={"slug": stored.slug})

        if dispatcher is not None:
            record = dispatcher.apply_filters(BEFORE_INSERT, record, {"id": record.id})

        if record.id is None:
            record = record.model_copy(update={"id": self._next_id()})

        self._data.records = [r for r in self._data.records if r.id != record.id]
        self._data.records.append(record)
        self._save()
        logger.debug("Stored content %s with slug %r", record.id, record.slug)
        return record

    # ── Read operations ──────────────────────────────────────────

    def get(self, content_id: int) -> ContentRecord | None:
        """Return a record by id, or None if not found."""
        for record in self._data.records:
            if record.id == content_id:
                return record
        return None

    def get_persisted_slug(self, content_id: int) -> str:
        """Slug stored for ``content_id``; empty when unknown or unset."""
        record = self.get(content_id)
        return record.slug if record is not None else ""

    def list(self, content_type: str | None = None) -> _list[ContentRecord]:
        """Return records, optionally filtered by content type."""
        results = self._data.records
        if content_type is not None:
            results = [r for r in results if r.content_type == content_type]
        return _list(results)
