"""
Business logic for blades.
"""

import logging

from ..core.exceptions import ValidationFailureError
from ..schemas.blade import BladeCreate, BladeRead, BladeUpdate
from ..schemas.common import Page
from ..storage.base import StorageBackend
from .pagination import resolve_page


logger = logging.getLogger(__name__)


class BladeService:
    """Create, read, update and delete blade stock entries."""

    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    def create_blade(self, data: BladeCreate) -> BladeRead:
        if not data.brand.strip() or not data.model.strip():
            raise ValidationFailureError("brand and model must not be blank")
        blade = self.backend.create_blade(data)
        logger.info("Created blade %s (%s %s)", blade.id, blade.brand, blade.model)
        return blade

    def get_blade(self, blade_id: int) -> BladeRead:
        return self.backend.get_blade(blade_id)

    def list_blades(self, page: int = 0, page_size: int = 0) -> Page:
        page, page_size, offset = resolve_page(page, page_size)
        blades, total = self.backend.list_blades(offset, page_size)
        return Page.build(blades, page, page_size, total)

    def update_blade(self, blade_id: int, data: BladeUpdate) -> BladeRead:
        """Apply a partial update.

        Only ``brand``, ``model``, ``purchase_date`` and ``unit_price`` can
        be left unchanged (by sending them blank or null).  Compatibility,
        quantities and notes are always replaced.
        """
        blade = self.backend.get_blade(blade_id)
        if data.brand.strip():
            blade.brand = data.brand
        if data.model.strip():
            blade.model = data.model
        blade.compatible_razors = data.compatible_razors
        if data.purchase_date is not None:
            blade.purchase_date = data.purchase_date
        if data.unit_price is not None:
            blade.unit_price = data.unit_price
        blade.total_quantity = data.total_quantity
        blade.remaining_quantity = data.remaining_quantity
        blade.notes = data.notes

        updated = self.backend.update_blade(blade)
        logger.info("Updated blade %s", blade_id)
        return updated

    def delete_blade(self, blade_id: int) -> None:
        self.backend.get_blade(blade_id)
        self.backend.delete_blade(blade_id)
        logger.info("Deleted blade %s", blade_id)
