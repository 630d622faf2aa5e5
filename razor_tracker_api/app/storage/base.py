"""
The storage contract shared by both backends.

Both implementations must be indistinguishable to the services: the
same IDs, the same ordering, the same errors.  The one documented
difference is ``supports_razor_mutation``: the in‑memory store cannot
update or delete razors and raises ``BackendUnavailableError`` instead.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from ..schemas.blade import BladeCreate, BladeRead
from ..schemas.common import Statistics
from ..schemas.razor import RazorCreate, RazorRead
from ..schemas.usage_record import UsageRecordCreate, UsageRecordRead


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_timestamp(value: Optional[datetime]) -> Optional[datetime]:
    """Convert a datetime to aware UTC; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def update_stamp(previous: Optional[datetime]) -> datetime:
    """Timestamp for a mutation that never precedes ``previous``."""
    now = utc_now()
    previous = normalize_timestamp(previous)
    if previous is not None and previous > now:
        return previous
    return now


class StorageBackend(ABC):
    """CRUD, pagination and aggregate queries over the three entity types.

    ``list_*`` methods return ``(items, total)`` where ``total`` is the
    size of the whole collection.  An offset past the end yields an
    empty page, as does any offset too large to store.  An ID that no
    entity can have raises ``NotFoundError`` like any other missing ID.
    Usage records are always returned with their razor and blade
    snapshots attached.

    ``update_*`` methods replace the stored entity with the one given.
    ``created_at`` is kept, and ``updated_at`` is derived from the
    *stored* stamp, never from the value the caller passes in.
    """

    name: str = "abstract"
    supports_razor_mutation: bool = True

    # Razors

    @abstractmethod
    def create_razor(self, data: RazorCreate) -> RazorRead: ...

    @abstractmethod
    def get_razor(self, razor_id: int) -> RazorRead: ...

    @abstractmethod
    def list_razors(self, offset: int, limit: int) -> Tuple[List[RazorRead], int]: ...

    @abstractmethod
    def update_razor(self, razor: RazorRead) -> RazorRead: ...

    @abstractmethod
    def delete_razor(self, razor_id: int) -> None: ...

    # Blades

    @abstractmethod
    def create_blade(self, data: BladeCreate) -> BladeRead: ...

    @abstractmethod
    def get_blade(self, blade_id: int) -> BladeRead: ...

    @abstractmethod
    def list_blades(self, offset: int, limit: int) -> Tuple[List[BladeRead], int]: ...

    @abstractmethod
    def update_blade(self, blade: BladeRead) -> BladeRead: ...

    @abstractmethod
    def delete_blade(self, blade_id: int) -> None: ...

    # Usage records

    @abstractmethod
    def create_usage_record(self, data: UsageRecordCreate) -> UsageRecordRead: ...

    @abstractmethod
    def get_usage_record(self, record_id: int) -> UsageRecordRead: ...

    @abstractmethod
    def list_usage_records(self, offset: int, limit: int) -> Tuple[List[UsageRecordRead], int]:
        """Page through usage records, newest ``usage_time`` first."""

    @abstractmethod
    def update_usage_record(self, record: UsageRecordRead) -> UsageRecordRead: ...

    @abstractmethod
    def delete_usage_record(self, record_id: int) -> None: ...

    # Aggregates

    @abstractmethod
    def statistics(self) -> Statistics: ...

    @abstractmethod
    def recent_usage_records(self, limit: int) -> List[UsageRecordRead]:
        """Return at most ``limit`` records, newest ``usage_time`` first.

        Ties on ``usage_time`` are broken by the higher ID first.
        """
