"""
Generic collection store over a key-value backend.

Each collection is stored under its own name as a JSON array of records.
Every operation reads the whole collection, mutates it in memory and writes
it back, so concurrent writers race and the last write wins.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from clubsite.defaults import DEFAULT_CONTENT, default_items
from clubsite.errors import SerializationError, ValidationError
from clubsite.kv import KeyValueStore

logger = logging.getLogger(__name__)

COLLECTION_NAMES = ("events", "programs", "posts", "announcements", "products")

ID_PREFIXES = {
    "events": "evt",
    "programs": "prg",
    "posts": "post",
    "announcements": "ann",
    "products": "prod",
}

# Fields a caller may not overwrite through update().
IMMUTABLE_FIELDS = ("id", "createdAt")


def validate_collection(name: Any) -> str:
    if not name or name not in COLLECTION_NAMES:
        raise ValidationError("Invalid type. Use: " + ", ".join(COLLECTION_NAMES))
    return name


def utc_now_iso() -> str:
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def generate_id(collection: str) -> str:
    return f"{ID_PREFIXES[collection]}-{int(time.time() * 1000)}-{uuid.uuid4().hex}"


def is_visible(record: dict) -> bool:
    """Records without a ``visible`` field count as visible."""
    return record.get("visible") is not False


def new_record(collection: str, data: dict) -> dict:
    return {**data, "id": generate_id(collection), "createdAt": utc_now_iso()}


def merge_record(existing: dict, data: dict) -> dict:
    changes = {k: v for k, v in data.items() if k not in IMMUTABLE_FIELDS}
    return {**existing, **changes, "updatedAt": utc_now_iso()}


def find_index(items: list[dict], record_id: str) -> int:
    for index, item in enumerate(items):
        if item.get("id") == record_id:
            return index
    return -1


class ContentStore(Protocol):
    """Operations the typed facades need from a collection store."""

    def get_all(self, collection: str) -> list[dict]:
        ...

    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        ...

    def create(self, collection: str, data: dict) -> dict:
        ...

    def update(self, collection: str, record_id: str, data: dict) -> Optional[dict]:
        ...

    def delete(self, collection: str, record_id: str) -> bool:
        ...

    def toggle_visibility(self, collection: str, record_id: str) -> Optional[dict]:
        ...

    def replace_all(self, collection: str, items: list[dict]) -> None:
        ...


class CollectionStore:
    """Local-only store: every call reads and writes the backend synchronously."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def _read(self, collection: str) -> list[dict]:
        raw = self.kv.get(validate_collection(collection))
        if raw is None:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SerializationError(
                f"Stored data for {collection} is not valid JSON"
            ) from exc
        if not isinstance(items, list):
            raise SerializationError(f"Stored data for {collection} is not a list")
        return items

    def _write(self, collection: str, items: list[dict]) -> None:
        self.kv.put(collection, json.dumps(items))

    def has_collection(self, collection: str) -> bool:
        return self.kv.get(validate_collection(collection)) is not None

    def get_all(self, collection: str) -> list[dict]:
        return self._read(collection)

    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        items = self._read(collection)
        index = find_index(items, record_id)
        return items[index] if index != -1 else None

    def create(self, collection: str, data: dict) -> dict:
        items = self._read(collection)
        record = new_record(collection, data)
        items.insert(0, record)
        self._write(collection, items)
        logger.info("Created %s record %s", collection, record["id"])
        return record

    def update(self, collection: str, record_id: str, data: dict) -> Optional[dict]:
        items = self._read(collection)
        index = find_index(items, record_id)
        if index == -1:
            return None
        items[index] = merge_record(items[index], data)
        self._write(collection, items)
        return items[index]

    def delete(self, collection: str, record_id: str) -> bool:
        items = self._read(collection)
        remaining = [item for item in items if item.get("id") != record_id]
        if len(remaining) == len(items):
            return False
        self._write(collection, remaining)
        logger.info("Deleted %s record %s", collection, record_id)
        return True

    def toggle_visibility(self, collection: str, record_id: str) -> Optional[dict]:
        record = self.get_by_id(collection, record_id)
        if record is None:
            return None
        return self.update(collection, record_id, {"visible": not is_visible(record)})

    def replace_all(self, collection: str, items: list[dict]) -> None:
        validate_collection(collection)
        if not isinstance(items, list):
            raise ValidationError("Data must be an array")
        self._write(collection, items)

    def ensure_defaults(self) -> list[str]:
        """Write default content for every collection that is absent."""
        written = []
        for collection in COLLECTION_NAMES:
            if not self.has_collection(collection):
                self._write(collection, default_items(collection))
                written.append(collection)
        if written:
            logger.info("Initialized default content for %s", ", ".join(written))
        return written

    def seed(self) -> bool:
        """Seed every collection, but only when ``events`` has never been written."""
        if self.has_collection("events"):
            return False
        for collection in DEFAULT_CONTENT:
            self._write(collection, default_items(collection))
        logger.info("Default data seeded")
        return True

    def reset_all(self) -> None:
        for collection in COLLECTION_NAMES:
            self._write(collection, default_items(collection))
        logger.warning("All collections reset to defaults")


def export_all(store: ContentStore) -> str:
    """Serialize every collection as ``{name: [records]}`` pretty-printed JSON."""
    data = {collection: store.get_all(collection) for collection in COLLECTION_NAMES}
    return json.dumps(data, indent=2)


def import_all(store: ContentStore, payload: str) -> bool:
    """
    Replace collections from an export. Unknown keys are ignored; a
    malformed payload is logged and reported as ``False``.
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        logger.exception("Import failed: payload is not valid JSON")
        return False
    if not isinstance(data, dict):
        logger.error("Import failed: expected an object keyed by collection name")
        return False
    for collection in COLLECTION_NAMES:
        items = data.get(collection)
        if isinstance(items, list):
            store.replace_all(collection, items)
    return True
