"""
In‑process fallback store.

Used when the SQLite database cannot be opened.  All three collections
live in one ``_MemoryState`` object guarded by a single shared/exclusive
lock.  Values are copied on the way in and on the way out so callers
never hold a reference into the store.

The store is seeded at construction with a small demo dataset (two
razors, two blades and one usage record) so a fresh process has
something to show.  Razors cannot be updated or deleted here.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional, Tuple

from ..core.exceptions import BackendUnavailableError, NotFoundError
from ..schemas.blade import BladeCreate, BladeRead
from ..schemas.common import Statistics
from ..schemas.razor import RazorCreate, RazorRead
from ..schemas.usage_record import UsageRecordCreate, UsageRecordRead
from .base import StorageBackend, normalize_timestamp, update_stamp, utc_now
from .locking import ReadWriteLock


logger = logging.getLogger(__name__)


@dataclass
class _MemoryState:
    razors: List[RazorRead] = field(default_factory=list)
    blades: List[BladeRead] = field(default_factory=list)
    usage_records: List[UsageRecordRead] = field(default_factory=list)
    next_razor_id: int = 1
    next_blade_id: int = 1
    next_usage_record_id: int = 1


def _recency_key(record: UsageRecordRead):
    return (record.usage_time, record.id)


class MemoryBackend(StorageBackend):
    """Lock‑guarded list storage with per‑type ID counters."""

    name = "memory"
    supports_razor_mutation = False

    def __init__(self, seed: bool = True) -> None:
        self._lock = ReadWriteLock()
        self._state = _MemoryState()
        if seed:
            self._seed_demo_data()

    def _seed_demo_data(self) -> None:
        now = utc_now()
        with self._lock.write():
            state = self._state
            state.razors = [
                RazorRead(
                    id=1,
                    brand="Gillette",
                    model="Fusion 5",
                    purchase_date=now,
                    price=89.9,
                    notes="Classic five blade razor",
                    created_at=now,
                    updated_at=now,
                ),
                RazorRead(
                    id=2,
                    brand="Philips",
                    model="OneBlade Pro",
                    purchase_date=now,
                    price=299.0,
                    notes="Electric razor, wet and dry",
                    created_at=now,
                    updated_at=now,
                ),
            ]
            state.blades = [
                BladeRead(
                    id=1,
                    brand="Gillette",
                    model="Fusion 5 cartridge",
                    compatible_razors="[1]",
                    unit_price=15.9,
                    total_quantity=10,
                    remaining_quantity=8,
                    notes="Original replacement cartridges",
                    created_at=now,
                    updated_at=now,
                ),
                BladeRead(
                    id=2,
                    brand="Philips",
                    model="OneBlade cartridge",
                    compatible_razors="[2]",
                    unit_price=25.0,
                    total_quantity=5,
                    remaining_quantity=4,
                    notes="OneBlade replacement blade",
                    created_at=now,
                    updated_at=now,
                ),
            ]
            state.usage_records = [
                UsageRecordRead(
                    id=1,
                    usage_time=now - timedelta(hours=24),
                    razor_id=1,
                    blade_id=1,
                    blade_usage_count=5,
                    rating=4,
                    experience_text="Clean shave, comfortable",
                    need_blade_change=False,
                    created_at=now,
                    updated_at=now,
                ),
            ]
            state.next_razor_id = 3
            state.next_blade_id = 3
            state.next_usage_record_id = 2
        logger.info("Seeded in-memory store with demo data")

    # Helpers; callers must hold the lock.

    @staticmethod
    def _find(items: list, entity_id: int):
        for item in items:
            if item.id == entity_id:
                return item
        return None

    @staticmethod
    def _index_of(items: list, entity_id: int) -> Optional[int]:
        for index, item in enumerate(items):
            if item.id == entity_id:
                return index
        return None

    @staticmethod
    def _page(items: list, offset: int, limit: int) -> list:
        offset = max(offset, 0)
        if limit <= 0 or offset >= len(items):
            return []
        return [item.model_copy(deep=True) for item in items[offset : offset + limit]]

    def _hydrate(self, record: UsageRecordRead) -> UsageRecordRead:
        razor = self._find(self._state.razors, record.razor_id)
        blade = self._find(self._state.blades, record.blade_id)
        return record.model_copy(
            update={
                "razor": razor.model_copy(deep=True) if razor else None,
                "blade": blade.model_copy(deep=True) if blade else None,
            },
            deep=True,
        )

    def _records_by_recency(self) -> List[UsageRecordRead]:
        return sorted(self._state.usage_records, key=_recency_key, reverse=True)

    # Razors

    def create_razor(self, data: RazorCreate) -> RazorRead:
        now = utc_now()
        with self._lock.write():
            razor = RazorRead(
                id=self._state.next_razor_id,
                **data.model_dump(exclude={"purchase_date"}),
                purchase_date=normalize_timestamp(data.purchase_date),
                created_at=now,
                updated_at=now,
            )
            self._state.next_razor_id += 1
            self._state.razors.append(razor)
            return razor.model_copy(deep=True)

    def get_razor(self, razor_id: int) -> RazorRead:
        with self._lock.read():
            razor = self._find(self._state.razors, razor_id)
            if razor is None:
                raise NotFoundError(f"Razor {razor_id} not found")
            return razor.model_copy(deep=True)

    def list_razors(self, offset: int, limit: int) -> Tuple[List[RazorRead], int]:
        with self._lock.read():
            return self._page(self._state.razors, offset, limit), len(self._state.razors)

    def update_razor(self, razor: RazorRead) -> RazorRead:
        raise BackendUnavailableError("Updating razors requires the database")

    def delete_razor(self, razor_id: int) -> None:
        raise BackendUnavailableError("Deleting razors requires the database")

    # Blades

    def create_blade(self, data: BladeCreate) -> BladeRead:
        now = utc_now()
        with self._lock.write():
            blade = BladeRead(
                id=self._state.next_blade_id,
                **data.model_dump(exclude={"purchase_date"}),
                purchase_date=normalize_timestamp(data.purchase_date),
                created_at=now,
                updated_at=now,
            )
            self._state.next_blade_id += 1
            self._state.blades.append(blade)
            return blade.model_copy(deep=True)

    def get_blade(self, blade_id: int) -> BladeRead:
        with self._lock.read():
            blade = self._find(self._state.blades, blade_id)
            if blade is None:
                raise NotFoundError(f"Blade {blade_id} not found")
            return blade.model_copy(deep=True)

    def list_blades(self, offset: int, limit: int) -> Tuple[List[BladeRead], int]:
        with self._lock.read():
            return self._page(self._state.blades, offset, limit), len(self._state.blades)

    def update_blade(self, blade: BladeRead) -> BladeRead:
        with self._lock.write():
            index = self._index_of(self._state.blades, blade.id)
            if index is None:
                raise NotFoundError(f"Blade {blade.id} not found")
            current = self._state.blades[index]
            updated = blade.model_copy(
                update={
                    "purchase_date": normalize_timestamp(blade.purchase_date),
                    "created_at": current.created_at,
                    "updated_at": update_stamp(current.updated_at),
                },
                deep=True,
            )
            self._state.blades[index] = updated
            return updated.model_copy(deep=True)

    def delete_blade(self, blade_id: int) -> None:
        with self._lock.write():
            index = self._index_of(self._state.blades, blade_id)
            if index is None:
                raise NotFoundError(f"Blade {blade_id} not found")
            del self._state.blades[index]

    # Usage records

    def create_usage_record(self, data: UsageRecordCreate) -> UsageRecordRead:
        now = utc_now()
        with self._lock.write():
            record = UsageRecordRead(
                id=self._state.next_usage_record_id,
                **data.model_dump(exclude={"usage_time"}),
                usage_time=normalize_timestamp(data.usage_time),
                created_at=now,
                updated_at=now,
            )
            self._state.next_usage_record_id += 1
            self._state.usage_records.append(record)
            return self._hydrate(record)

    def get_usage_record(self, record_id: int) -> UsageRecordRead:
        with self._lock.read():
            record = self._find(self._state.usage_records, record_id)
            if record is None:
                raise NotFoundError(f"Usage record {record_id} not found")
            return self._hydrate(record)

    def list_usage_records(self, offset: int, limit: int) -> Tuple[List[UsageRecordRead], int]:
        with self._lock.read():
            page = self._page(self._records_by_recency(), offset, limit)
            return [self._hydrate(record) for record in page], len(self._state.usage_records)

    def update_usage_record(self, record: UsageRecordRead) -> UsageRecordRead:
        with self._lock.write():
            index = self._index_of(self._state.usage_records, record.id)
            if index is None:
                raise NotFoundError(f"Usage record {record.id} not found")
            current = self._state.usage_records[index]
            updated = record.model_copy(
                update={
                    "usage_time": normalize_timestamp(record.usage_time),
                    "created_at": current.created_at,
                    "updated_at": update_stamp(current.updated_at),
                    "razor": None,
                    "blade": None,
                },
                deep=True,
            )
            self._state.usage_records[index] = updated
            return self._hydrate(updated)

    def delete_usage_record(self, record_id: int) -> None:
        with self._lock.write():
            index = self._index_of(self._state.usage_records, record_id)
            if index is None:
                raise NotFoundError(f"Usage record {record_id} not found")
            del self._state.usage_records[index]

    # Aggregates

    def statistics(self) -> Statistics:
        with self._lock.read():
            ratings = [r.rating for r in self._state.usage_records if r.rating is not None]
            return Statistics(
                total_usage=len(self._state.usage_records),
                razor_count=len(self._state.razors),
                blade_count=len(self._state.blades),
                average_rating=sum(ratings) / len(ratings) if ratings else 0.0,
            )

    def recent_usage_records(self, limit: int) -> List[UsageRecordRead]:
        if limit <= 0:
            return []
        with self._lock.read():
            return [self._hydrate(record) for record in self._records_by_recency()[:limit]]
