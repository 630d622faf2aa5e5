"""
Business logic for usage records.

A usage record may only be written while both the razor and the blade
it references exist in the active backend.  Deleting a razor or blade
later is not prevented, so stored records can still end up orphaned.
"""

import logging

from ..core.exceptions import DanglingReferenceError, NotFoundError
from ..schemas.common import Page
from ..schemas.usage_record import UsageRecordCreate, UsageRecordRead, UsageRecordUpdate
from ..storage.base import StorageBackend
from .pagination import resolve_page


logger = logging.getLogger(__name__)


class UsageRecordService:
    """Create, read, update and delete usage records."""

    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    def _check_references(self, razor_id: int, blade_id: int) -> None:
        try:
            self.backend.get_razor(razor_id)
        except NotFoundError as exc:
            raise DanglingReferenceError(f"Razor {razor_id} does not exist") from exc
        try:
            self.backend.get_blade(blade_id)
        except NotFoundError as exc:
            raise DanglingReferenceError(f"Blade {blade_id} does not exist") from exc

    def create_usage_record(self, data: UsageRecordCreate) -> UsageRecordRead:
        self._check_references(data.razor_id, data.blade_id)
        if data.blade_usage_count == 0:
            data = data.model_copy(update={"blade_usage_count": 1})
        record = self.backend.create_usage_record(data)
        logger.info(
            "Created usage record %s (razor %s, blade %s)",
            record.id,
            record.razor_id,
            record.blade_id,
        )
        return record

    def get_usage_record(self, record_id: int) -> UsageRecordRead:
        return self.backend.get_usage_record(record_id)

    def list_usage_records(self, page: int = 0, page_size: int = 0) -> Page:
        page, page_size, offset = resolve_page(page, page_size)
        records, total = self.backend.list_usage_records(offset, page_size)
        return Page.build(records, page, page_size, total)

    def update_usage_record(self, record_id: int, data: UsageRecordUpdate) -> UsageRecordRead:
        """Apply a partial update and re‑check the references.

        ``usage_time``, ``razor_id``, ``blade_id`` and ``rating`` change only
        when provided (IDs also when non‑zero).  ``blade_usage_count``,
        ``experience_text`` and ``need_blade_change`` are always replaced;
        a count of zero is stored as 1.
        """
        record = self.backend.get_usage_record(record_id)
        if data.usage_time is not None:
            record.usage_time = data.usage_time
        if data.razor_id:
            record.razor_id = data.razor_id
        if data.blade_id:
            record.blade_id = data.blade_id
        if data.rating is not None:
            record.rating = data.rating
        record.blade_usage_count = data.blade_usage_count or 1
        record.experience_text = data.experience_text
        record.need_blade_change = data.need_blade_change

        self._check_references(record.razor_id, record.blade_id)
        updated = self.backend.update_usage_record(record)
        logger.info("Updated usage record %s", record_id)
        return updated

    def delete_usage_record(self, record_id: int) -> None:
        self.backend.get_usage_record(record_id)
        self.backend.delete_usage_record(record_id)
        logger.info("Deleted usage record %s", record_id)
