# app/store/base.py
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Iterable, Optional

# Every entity collection; slot pools live in their own collections (see app.slots)
VEHICLES = "vehicles"
CLIENTS = "clients"
OWNERS = "owners"
REPAIRS = "repairs"
REPAIR_COMPLETIONS = "repair_completions"
PARTS = "parts"
PART_TYPES = "part_types"
VEHICLE_TYPES = "vehicle_types"
PAYMENTS = "payments"
NOTIFICATIONS = "notifications"

ENTITY_COLLECTIONS = (
    VEHICLES,
    CLIENTS,
    OWNERS,
    REPAIRS,
    REPAIR_COMPLETIONS,
    PARTS,
    PART_TYPES,
    VEHICLE_TYPES,
    PAYMENTS,
    NOTIFICATIONS,
)

METADATA_DOC_ID = "_metadata"


def format_sequential_id(prefix: str, number: int, width: int = 3) -> str:
    return f"{prefix}{number:0{width}d}"


def max_suffix(ids: Iterable[str], prefix: str) -> int:
    """Highest numeric suffix among ids shaped like ``<prefix><digits>``, 0 if none."""
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    highest = 0
    for doc_id in ids:
        m = pattern.match(str(doc_id))
        if m:
            highest = max(highest, int(m.group(1)))
    return highest


def resolve_path(doc: dict, field_path: str) -> tuple[bool, Any]:
    """
    Walk a dotted field path ("vehicle.id") through nested dicts.
    Returns (found, value) so a missing field is distinguishable from None.
    """
    current: Any = doc
    for part in field_path.split("."):
        if not isinstance(current, dict) or part not in current:
            return False, None
        current = current[part]
    return True, current


def to_plain(value: Any) -> Any:
    """Convert store values into JSON-friendly ones (datetimes become ISO strings)."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


class DocumentRepository(ABC):
    """
    Key/document interface shared by the Firestore store and the JSON file fallback.

    Documents come back as plain dicts with their id under ``"id"``.
    Timestamps are returned as ISO-8601 strings whatever the backend.
    """

    #: "firestore" or "json", reported by /api/health
    mode: str = ""
    #: Slot pools and document-store-only writes need this
    is_document_store: bool = False

    @abstractmethod
    def list(self, collection: str) -> list[dict]: ...

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[dict]: ...

    @abstractmethod
    def add(self, collection: str, data: dict) -> dict:
        """Insert under a generated id."""

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: dict, merge: bool = False) -> dict:
        """Create or replace (or merge into) the document at ``doc_id``."""

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: dict) -> Optional[dict]:
        """Merge fields into an existing document; None when it does not exist."""

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Delete; a missing document is not an error."""

    @abstractmethod
    def delete_many(self, collection: str, doc_ids: list[str]) -> int:
        """Delete several documents in write batches and return how many were targeted."""

    @abstractmethod
    def update_all(self, collection: str, fields: dict) -> int:
        """Apply the same field update to every document in write batches."""

    @abstractmethod
    def filter_by(self, collection: str, field_path: str, value: Any) -> list[dict]:
        """Equality filter; documents lacking the field never match."""

    @abstractmethod
    def next_sequential_id(self, collection: str, prefix: str, width: int = 3) -> str: ...

    def list_ids(self, collection: str) -> list[str]:
        return [doc["id"] for doc in self.list(collection)]

    def clear(self, collection: str) -> int:
        """Delete every document of a collection in write batches."""
        return self.delete_many(collection, self.list_ids(collection))

    def count(self, collection: str) -> int:
        return len(self.list(collection))

    def counts(self, collections: Iterable[str] = ENTITY_COLLECTIONS) -> dict[str, int]:
        return {name: self.count(name) for name in collections}
