# app/store/json_file.py
from __future__ import annotations

import copy
import json
import logging
import threading
import uuid
from typing import Any, Optional

from .base import (
    ENTITY_COLLECTIONS,
    DocumentRepository,
    format_sequential_id,
    resolve_path,
    to_plain,
)

logger = logging.getLogger(__name__)


def load_dataset(path: Optional[str]) -> dict[str, list[dict]]:
    """
    Read the seed file. A missing or unreadable file yields an empty dataset
    so the API still starts (and every list is empty).
    """
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError:
        logger.error("Seed data file %s not found; starting with an empty dataset", path)
        return {}
    except (OSError, ValueError) as e:
        logger.error("Could not read seed data file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.error("Seed data file %s is not a JSON object; ignoring it", path)
        return {}
    logger.info("Loaded seed data from %s", path)
    return {k: v for k, v in data.items() if isinstance(v, list)}


class JsonFileRepository(DocumentRepository):
    """
    In-memory dataset mirrored to one JSON file.

    The dataset is owned here: reads copy it and mutations rewrite the whole
    file, both while holding ``_lock``.
    """

    mode = "json"
    is_document_store = False

    def __init__(self, path: Optional[str] = None, data: Optional[dict] = None):
        self.path = path
        self._lock = threading.RLock()
        self._data: dict[str, list[dict]] = data if data is not None else load_dataset(path)
        for name in ENTITY_COLLECTIONS:
            self._data.setdefault(name, [])

    # --- internals ---
    def _docs(self, collection: str) -> list[dict]:
        return self._data.setdefault(collection, [])

    def _find(self, collection: str, doc_id: str) -> Optional[dict]:
        for doc in self._docs(collection):
            if str(doc.get("id")) == str(doc_id):
                return doc
        return None

    def _flush(self) -> None:
        if not self.path:
            return
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(self._data, fh, indent=2, ensure_ascii=False)

    # --- reads ---
    def list(self, collection: str) -> list[dict]:
        with self._lock:
            return copy.deepcopy(self._data.get(collection, []))

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        with self._lock:
            doc = self._find(collection, doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def filter_by(self, collection: str, field_path: str, value: Any) -> list[dict]:
        out = []
        with self._lock:
            for doc in self._data.get(collection, []):
                found, current = resolve_path(doc, field_path)
                # Firestore never equates booleans with numbers
                if isinstance(current, bool) != isinstance(value, bool):
                    continue
                if found and current == value:
                    out.append(copy.deepcopy(doc))
        return out

    def next_sequential_id(self, collection: str, prefix: str, width: int = 3) -> str:
        # Count-based: can repeat an existing id once documents were deleted
        with self._lock:
            count = len(self._data.get(collection, []))
        return format_sequential_id(prefix, count + 1, width)

    # --- writes ---
    def add(self, collection: str, data: dict) -> dict:
        return self.set(collection, uuid.uuid4().hex[:20], data)

    def set(self, collection: str, doc_id: str, data: dict, merge: bool = False) -> dict:
        doc_id = str(doc_id)
        with self._lock:
            existing = self._find(collection, doc_id)
            plain = to_plain(dict(data))
            if existing is not None and merge:
                existing.update(plain)
                existing["id"] = doc_id
                result = existing
            elif existing is not None:
                existing.clear()
                existing.update({"id": doc_id, **plain})
                result = existing
            else:
                result = {"id": doc_id, **plain}
                self._docs(collection).append(result)
            self._flush()
            return copy.deepcopy(result)

    def update(self, collection: str, doc_id: str, fields: dict) -> Optional[dict]:
        with self._lock:
            doc = self._find(collection, doc_id)
            if doc is None:
                return None
            doc.update(to_plain(dict(fields)))
            self._flush()
            return copy.deepcopy(doc)

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            docs = self._docs(collection)
            kept = [d for d in docs if str(d.get("id")) != str(doc_id)]
            if len(kept) != len(docs):
                self._data[collection] = kept
                self._flush()

    def delete_many(self, collection: str, doc_ids: list[str]) -> int:
        targets = {str(i) for i in doc_ids}
        with self._lock:
            docs = self._docs(collection)
            self._data[collection] = [d for d in docs if str(d.get("id")) not in targets]
            self._flush()
        return len(targets)

    def clear(self, collection: str) -> int:
        with self._lock:
            removed = len(self._docs(collection))
            self._data[collection] = []
            self._flush()
        logger.info("Cleared %d documents from %s", removed, collection)
        return removed

    def update_all(self, collection: str, fields: dict) -> int:
        plain = to_plain(dict(fields))
        with self._lock:
            docs = self._docs(collection)
            for doc in docs:
                doc.update(plain)
            self._flush()
            return len(docs)
