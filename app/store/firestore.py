# app/store/firestore.py
from __future__ import annotations

import logging
from typing import Any, Optional

from google.api_core.exceptions import NotFound as FirestoreNotFound
from google.cloud.firestore_v1.base_query import FieldFilter

from .base import DocumentRepository, format_sequential_id, max_suffix, to_plain

logger = logging.getLogger(__name__)

# Firestore rejects a write batch holding more than this many writes
MAX_BATCH_WRITES = 500


def _snapshot_to_dict(snap) -> dict:
    data = to_plain(snap.to_dict() or {})
    data["id"] = snap.id
    return data


class FirestoreRepository(DocumentRepository):
    """DocumentRepository over a ``google.cloud.firestore.Client``."""

    mode = "firestore"
    is_document_store = True

    def __init__(self, client):
        self.client = client

    def _col(self, collection: str):
        return self.client.collection(collection)

    def list(self, collection: str) -> list[dict]:
        return [_snapshot_to_dict(s) for s in self._col(collection).stream()]

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        snap = self._col(collection).document(str(doc_id)).get()
        if not snap.exists:
            return None
        return _snapshot_to_dict(snap)

    def add(self, collection: str, data: dict) -> dict:
        _, ref = self._col(collection).add(dict(data))
        return _snapshot_to_dict(ref.get())

    def set(self, collection: str, doc_id: str, data: dict, merge: bool = False) -> dict:
        ref = self._col(collection).document(str(doc_id))
        ref.set(dict(data), merge=merge)
        return _snapshot_to_dict(ref.get())

    def update(self, collection: str, doc_id: str, fields: dict) -> Optional[dict]:
        ref = self._col(collection).document(str(doc_id))
        try:
            ref.update(dict(fields))
        except FirestoreNotFound:
            return None
        return _snapshot_to_dict(ref.get())

    def delete(self, collection: str, doc_id: str) -> None:
        self._col(collection).document(str(doc_id)).delete()

    def _commit_in_batches(self, refs: list, op) -> None:
        """
        Apply ``op(batch, ref)`` to every reference, committing every
        MAX_BATCH_WRITES writes. Each batch is atomic; the whole run is not.
        """
        for start in range(0, len(refs), MAX_BATCH_WRITES):
            batch = self.client.batch()
            for ref in refs[start:start + MAX_BATCH_WRITES]:
                op(batch, ref)
            batch.commit()

    def delete_many(self, collection: str, doc_ids: list[str]) -> int:
        if not doc_ids:
            return 0
        col = self._col(collection)
        refs = [col.document(str(doc_id)) for doc_id in doc_ids]
        self._commit_in_batches(refs, lambda batch, ref: batch.delete(ref))
        logger.info("Batch-deleted %d documents from %s", len(doc_ids), collection)
        return len(doc_ids)

    def update_all(self, collection: str, fields: dict) -> int:
        snaps = list(self._col(collection).stream())
        if not snaps:
            return 0
        refs = [snap.reference for snap in snaps]
        self._commit_in_batches(refs, lambda batch, ref: batch.update(ref, dict(fields)))
        return len(snaps)

    def filter_by(self, collection: str, field_path: str, value: Any) -> list[dict]:
        query = self._col(collection).where(filter=FieldFilter(field_path, "==", value))
        return [_snapshot_to_dict(s) for s in query.stream()]

    def list_ids(self, collection: str) -> list[str]:
        # list_documents also yields ids of "missing" parents, which is what reset needs
        return [ref.id for ref in self._col(collection).list_documents()]

    def next_sequential_id(self, collection: str, prefix: str, width: int = 3) -> str:
        ids = [s.id for s in self._col(collection).stream()]
        return format_sequential_id(prefix, max_suffix(ids, prefix) + 1, width)
