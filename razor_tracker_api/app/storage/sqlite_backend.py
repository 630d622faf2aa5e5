"""
Durable SQLite backend.

Every call opens a short‑lived connection through ``core.db`` and runs
one or a few single statements; there are no multi‑statement
transactions.  Any ``sqlite3.Error`` is logged and re‑raised as
``BackendUnavailableError`` without retrying.

SQLite integers are signed 64‑bit.  IDs outside that range cannot
exist, so lookups on them report ``NotFoundError`` without a query,
and offsets past it yield an empty page.

Timestamps are written as fixed‑width ISO‑8601 UTC text so that
ordering by the text column equals ordering by time.
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional, Tuple

from ..core.db import get_cursor, get_database_path, init_db
from ..core.exceptions import BackendUnavailableError, NotFoundError, ValidationFailureError
from ..schemas.blade import BladeCreate, BladeRead
from ..schemas.common import Statistics
from ..schemas.limits import MAX_INTEGER, MIN_INTEGER
from ..schemas.razor import RazorCreate, RazorRead
from ..schemas.usage_record import UsageRecordCreate, UsageRecordRead
from .base import StorageBackend, normalize_timestamp, update_stamp, utc_now


logger = logging.getLogger(__name__)


def _ts(value: Optional[datetime]) -> Optional[str]:
    value = normalize_timestamp(value)
    return value.isoformat(timespec="microseconds") if value is not None else None


_RECENCY_ORDER = "ORDER BY usage_time DESC, id DESC"


def _storable(value: int) -> bool:
    return MIN_INTEGER <= value <= MAX_INTEGER


class SQLiteBackend(StorageBackend):
    """Storage backed by a SQLite database file."""

    name = "sqlite"
    supports_razor_mutation = True

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path or get_database_path()

    def migrate(self) -> int:
        """Create or upgrade the schema and return its version."""
        try:
            return init_db(self.db_path)
        except sqlite3.Error as exc:
            raise BackendUnavailableError(f"Database migration failed: {exc}") from exc

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        try:
            with get_cursor(self.db_path) as cursor:
                yield cursor
        except sqlite3.Error as exc:
            logger.error("Database error on %s: %s", self.db_path, exc)
            raise BackendUnavailableError(f"Database error: {exc}") from exc
        except OverflowError as exc:
            raise ValidationFailureError("Integer value out of range") from exc

    # Row helpers

    @staticmethod
    def _fetch_razor(cursor: sqlite3.Cursor, razor_id: int) -> Optional[RazorRead]:
        if not _storable(razor_id):
            return None
        row = cursor.execute("SELECT * FROM razors WHERE id = ?", (razor_id,)).fetchone()
        return RazorRead.model_validate(dict(row)) if row else None

    @staticmethod
    def _fetch_blade(cursor: sqlite3.Cursor, blade_id: int) -> Optional[BladeRead]:
        if not _storable(blade_id):
            return None
        row = cursor.execute("SELECT * FROM blades WHERE id = ?", (blade_id,)).fetchone()
        return BladeRead.model_validate(dict(row)) if row else None

    def _hydrate(self, cursor: sqlite3.Cursor, row: sqlite3.Row) -> UsageRecordRead:
        record = UsageRecordRead.model_validate(dict(row))
        record.razor = self._fetch_razor(cursor, record.razor_id)
        record.blade = self._fetch_blade(cursor, record.blade_id)
        return record

    @staticmethod
    def _count(cursor: sqlite3.Cursor, table: str) -> int:
        return cursor.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]

    @staticmethod
    def _window(offset: int, limit: int) -> Optional[Tuple[int, int]]:
        """``(limit, offset)`` query parameters, or ``None`` for an empty page."""
        offset = max(offset, 0)
        if limit <= 0 or offset > MAX_INTEGER:
            return None
        return min(limit, MAX_INTEGER), offset

    @staticmethod
    def _stored_stamp(cursor: sqlite3.Cursor, table: str, entity_id: int) -> Optional[datetime]:
        """Stored ``updated_at`` of a row, ``None`` when it does not exist."""
        if not _storable(entity_id):
            return None
        row = cursor.execute(
            f"SELECT updated_at FROM {table} WHERE id = ?", (entity_id,)
        ).fetchone()
        return datetime.fromisoformat(row["updated_at"]) if row else None

    def _delete(self, table: str, entity_id: int, label: str) -> None:
        if _storable(entity_id):
            with self._cursor() as cursor:
                cursor.execute(f"DELETE FROM {table} WHERE id = ?", (entity_id,))
                if cursor.rowcount:
                    return
        raise NotFoundError(f"{label} {entity_id} not found")

    # Razors

    def create_razor(self, data: RazorCreate) -> RazorRead:
        now = _ts(utc_now())
        with self._cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO razors (brand, model, purchase_date, price, notes, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (data.brand, data.model, _ts(data.purchase_date), data.price, data.notes, now, now),
            )
            return self._fetch_razor(cursor, cursor.lastrowid)

    def get_razor(self, razor_id: int) -> RazorRead:
        with self._cursor() as cursor:
            razor = self._fetch_razor(cursor, razor_id)
        if razor is None:
            raise NotFoundError(f"Razor {razor_id} not found")
        return razor

    def list_razors(self, offset: int, limit: int) -> Tuple[List[RazorRead], int]:
        window = self._window(offset, limit)
        if window is None:
            return [], self._total("razors")
        with self._cursor() as cursor:
            total = self._count(cursor, "razors")
            rows = cursor.execute(
                "SELECT * FROM razors ORDER BY id ASC LIMIT ? OFFSET ?", window
            ).fetchall()
        return [RazorRead.model_validate(dict(row)) for row in rows], total

    def update_razor(self, razor: RazorRead) -> RazorRead:
        with self._cursor() as cursor:
            stored = self._stored_stamp(cursor, "razors", razor.id)
            if stored is None:
                raise NotFoundError(f"Razor {razor.id} not found")
            cursor.execute(
                """
                UPDATE razors
                SET brand = ?, model = ?, purchase_date = ?, price = ?, notes = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    razor.brand,
                    razor.model,
                    _ts(razor.purchase_date),
                    razor.price,
                    razor.notes,
                    _ts(update_stamp(stored)),
                    razor.id,
                ),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Razor {razor.id} not found")
            return self._fetch_razor(cursor, razor.id)

    def delete_razor(self, razor_id: int) -> None:
        self._delete("razors", razor_id, "Razor")

    # Blades

    def create_blade(self, data: BladeCreate) -> BladeRead:
        now = _ts(utc_now())
        with self._cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO blades (brand, model, compatible_razors, purchase_date, unit_price,
                                    total_quantity, remaining_quantity, notes, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data.brand,
                    data.model,
                    data.compatible_razors,
                    _ts(data.purchase_date),
                    data.unit_price,
                    data.total_quantity,
                    data.remaining_quantity,
                    data.notes,
                    now,
                    now,
                ),
            )
            return self._fetch_blade(cursor, cursor.lastrowid)

    def get_blade(self, blade_id: int) -> BladeRead:
        with self._cursor() as cursor:
            blade = self._fetch_blade(cursor, blade_id)
        if blade is None:
            raise NotFoundError(f"Blade {blade_id} not found")
        return blade

    def list_blades(self, offset: int, limit: int) -> Tuple[List[BladeRead], int]:
        window = self._window(offset, limit)
        if window is None:
            return [], self._total("blades")
        with self._cursor() as cursor:
            total = self._count(cursor, "blades")
            rows = cursor.execute(
                "SELECT * FROM blades ORDER BY id ASC LIMIT ? OFFSET ?", window
            ).fetchall()
        return [BladeRead.model_validate(dict(row)) for row in rows], total

    def update_blade(self, blade: BladeRead) -> BladeRead:
        with self._cursor() as cursor:
            stored = self._stored_stamp(cursor, "blades", blade.id)
            if stored is None:
                raise NotFoundError(f"Blade {blade.id} not found")
            cursor.execute(
                """
                UPDATE blades
                SET brand = ?, model = ?, compatible_razors = ?, purchase_date = ?, unit_price = ?,
                    total_quantity = ?, remaining_quantity = ?, notes = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    blade.brand,
                    blade.model,
                    blade.compatible_razors,
                    _ts(blade.purchase_date),
                    blade.unit_price,
                    blade.total_quantity,
                    blade.remaining_quantity,
                    blade.notes,
                    _ts(update_stamp(stored)),
                    blade.id,
                ),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Blade {blade.id} not found")
            return self._fetch_blade(cursor, blade.id)

    def delete_blade(self, blade_id: int) -> None:
        self._delete("blades", blade_id, "Blade")

    # Usage records

    def create_usage_record(self, data: UsageRecordCreate) -> UsageRecordRead:
        now = _ts(utc_now())
        with self._cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO usage_records (usage_time, razor_id, blade_id, blade_usage_count, rating,
                                           experience_text, need_blade_change, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    _ts(data.usage_time),
                    data.razor_id,
                    data.blade_id,
                    data.blade_usage_count,
                    data.rating,
                    data.experience_text,
                    int(data.need_blade_change),
                    now,
                    now,
                ),
            )
            row = cursor.execute(
                "SELECT * FROM usage_records WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
            return self._hydrate(cursor, row)

    def get_usage_record(self, record_id: int) -> UsageRecordRead:
        if not _storable(record_id):
            raise NotFoundError(f"Usage record {record_id} not found")
        with self._cursor() as cursor:
            row = cursor.execute(
                "SELECT * FROM usage_records WHERE id = ?", (record_id,)
            ).fetchone()
            if row is None:
                raise NotFoundError(f"Usage record {record_id} not found")
            return self._hydrate(cursor, row)

    def list_usage_records(self, offset: int, limit: int) -> Tuple[List[UsageRecordRead], int]:
        window = self._window(offset, limit)
        if window is None:
            return [], self._total("usage_records")
        with self._cursor() as cursor:
            total = self._count(cursor, "usage_records")
            rows = cursor.execute(
                f"SELECT * FROM usage_records {_RECENCY_ORDER} LIMIT ? OFFSET ?", window
            ).fetchall()
            return [self._hydrate(cursor, row) for row in rows], total

    def update_usage_record(self, record: UsageRecordRead) -> UsageRecordRead:
        with self._cursor() as cursor:
            stored = self._stored_stamp(cursor, "usage_records", record.id)
            if stored is None:
                raise NotFoundError(f"Usage record {record.id} not found")
            cursor.execute(
                """
                UPDATE usage_records
                SET usage_time = ?, razor_id = ?, blade_id = ?, blade_usage_count = ?, rating = ?,
                    experience_text = ?, need_blade_change = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    _ts(record.usage_time),
                    record.razor_id,
                    record.blade_id,
                    record.blade_usage_count,
                    record.rating,
                    record.experience_text,
                    int(record.need_blade_change),
                    _ts(update_stamp(stored)),
                    record.id,
                ),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Usage record {record.id} not found")
            row = cursor.execute(
                "SELECT * FROM usage_records WHERE id = ?", (record.id,)
            ).fetchone()
            return self._hydrate(cursor, row)

    def delete_usage_record(self, record_id: int) -> None:
        self._delete("usage_records", record_id, "Usage record")

    # Aggregates

    def _total(self, table: str) -> int:
        with self._cursor() as cursor:
            return self._count(cursor, table)

    def statistics(self) -> Statistics:
        with self._cursor() as cursor:
            total_usage = self._count(cursor, "usage_records")
            razor_count = self._count(cursor, "razors")
            blade_count = self._count(cursor, "blades")
            average = cursor.execute(
                "SELECT AVG(rating) FROM usage_records WHERE rating IS NOT NULL"
            ).fetchone()[0]
        return Statistics(
            total_usage=total_usage,
            razor_count=razor_count,
            blade_count=blade_count,
            average_rating=float(average or 0.0),
        )

    def recent_usage_records(self, limit: int) -> List[UsageRecordRead]:
        if limit <= 0:
            return []
        with self._cursor() as cursor:
            rows = cursor.execute(
                f"SELECT * FROM usage_records {_RECENCY_ORDER} LIMIT ?",
                (min(limit, MAX_INTEGER),),
            ).fetchall()
            return [self._hydrate(cursor, row) for row in rows]
