# app/slots.py
"""
Fixed-capacity slot pools: repair bays and waiting places.

Each slot is one document in the pool's collection, keyed by its number
("1", "2", ...). A slot is free when its document is missing or its
``repair_id`` is empty. Claims scan the pool in ascending order and take the
first free slot.

The scan and the write are two separate round trips and nothing locks the
pool in between, so two concurrent claims can pick the same slot; the last
write wins.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .errors import NotFound, PoolExhausted, StoreUnavailable
from .store.base import METADATA_DOC_ID, DocumentRepository

logger = logging.getLogger(__name__)

REPAIR_SLOTS = "slotReparation"
WAITING_SLOTS = "slotAttente"


@dataclass(frozen=True)
class SlotPool:
    name: str
    collection: str
    slot_ids: tuple[int, ...]
    # HTTP status when every slot is taken
    exhausted_status: int = 409
    exhausted_message: str = "No free slot in pool"

    @classmethod
    def of_size(cls, name: str, collection: str, size: int, **kwargs) -> "SlotPool":
        if size < 1:
            raise ValueError(f"Slot pool {name!r} needs at least one slot, got {size}")
        return cls(name=name, collection=collection, slot_ids=tuple(range(1, size + 1)), **kwargs)

    @property
    def capacity(self) -> int:
        return len(self.slot_ids)


def repair_pool(size: int = 2) -> SlotPool:
    return SlotPool.of_size(
        "repair",
        REPAIR_SLOTS,
        size,
        exhausted_status=400,
        exhausted_message="All repair slots are already occupied",
    )


def waiting_pool(size: int = 2) -> SlotPool:
    return SlotPool.of_size(
        "waiting",
        WAITING_SLOTS,
        size,
        exhausted_status=409,
        exhausted_message="No waiting slot available",
    )


def is_free(slot: Optional[dict]) -> bool:
    return slot is None or not slot.get("repair_id")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Assignment:
    slot_id: int
    repair_id: str
    created: bool

    def to_dict(self) -> dict:
        return {"slot_number": self.slot_id, "slot_id": str(self.slot_id), "repair_id": self.repair_id}


class SlotManager:
    def __init__(self, repository: DocumentRepository, pool: SlotPool):
        self.repository = repository
        self.pool = pool

    @property
    def available(self) -> bool:
        return self.repository.is_document_store

    def _require_store(self) -> None:
        if not self.available:
            raise StoreUnavailable()

    def list(self) -> list[dict]:
        if not self.available:
            return []
        return [s for s in self.repository.list(self.pool.collection) if s["id"] != METADATA_DOC_ID]

    def _check_slot_id(self, slot_id) -> str:
        slot_id = str(slot_id)
        # the pool metadata document shares the collection but is never a slot
        if slot_id == METADATA_DOC_ID:
            raise NotFound("Slot not found")
        return slot_id

    def get(self, slot_id) -> dict:
        self._require_store()
        slot = self.repository.get(self.pool.collection, self._check_slot_id(slot_id))
        if slot is None:
            raise NotFound("Slot not found")
        return slot

    def create(self, repair_id: str, start_time: datetime) -> dict:
        """Add a slot document under a generated id, outside the canonical numbering."""
        self._require_store()
        return self.repository.add(
            self.pool.collection,
            {"repair_id": repair_id, "start_time": start_time, "created_at": _now()},
        )

    def find_free(self) -> Optional[tuple[int, bool]]:
        """
        First free slot in ascending order, as (slot_id, document_exists).
        None when the pool is full.
        """
        self._require_store()
        for slot_id in self.pool.slot_ids:
            slot = self.repository.get(self.pool.collection, str(slot_id))
            if is_free(slot):
                return slot_id, slot is not None
        return None

    def claim(self, slot_id: int, repair_id: str, start_time: Optional[datetime] = None,
              exists: bool = True) -> Assignment:
        """Write the occupant into a slot (create-or-merge). Does not re-check that it is free."""
        self._require_store()
        now = _now()
        data = {
            "repair_id": repair_id,
            "start_time": start_time or now,
            "slot_id": slot_id,
        }
        if not exists:
            data["created_at"] = now
        self.repository.set(self.pool.collection, str(slot_id), data, merge=True)
        logger.info("Slot %s/%s claimed by %s", self.pool.name, slot_id, repair_id)
        return Assignment(slot_id=slot_id, repair_id=repair_id, created=not exists)

    def assign(self, repair_id: str, start_time: Optional[datetime] = None) -> Assignment:
        found = self.find_free()
        if found is None:
            logger.info("Slot pool %s exhausted, %s not assigned", self.pool.name, repair_id)
            raise PoolExhausted(self.pool.exhausted_message, self.pool.exhausted_status)
        slot_id, exists = found
        return self.claim(slot_id, repair_id, start_time=start_time, exists=exists)

    def release(self, slot_id) -> None:
        self._require_store()
        self.repository.delete(self.pool.collection, self._check_slot_id(slot_id))
        logger.info("Slot %s/%s released", self.pool.name, slot_id)

    def reset(self) -> int:
        """Delete every slot in write batches. A no-op on the JSON fallback, which keeps no slots."""
        if not self.available:
            return 0
        ids = [i for i in self.repository.list_ids(self.pool.collection) if i != METADATA_DOC_ID]
        deleted = self.repository.delete_many(self.pool.collection, ids)
        logger.info("Slot pool %s reset, %d slots deleted", self.pool.name, deleted)
        return deleted

    def write_metadata(self) -> dict:
        self._require_store()
        return self.repository.set(
            self.pool.collection,
            METADATA_DOC_ID,
            {"pool": self.pool.name, "capacity": self.pool.capacity, "slot_ids": list(self.pool.slot_ids)},
        )
