"""
Business logic for razors.
"""

import logging

from ..core.exceptions import ValidationFailureError
from ..schemas.common import Page
from ..schemas.razor import RazorCreate, RazorRead, RazorUpdate
from ..storage.base import StorageBackend
from .pagination import resolve_page


logger = logging.getLogger(__name__)


class RazorService:
    """Create, read, update and delete razors."""

    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    def create_razor(self, data: RazorCreate) -> RazorRead:
        if not data.brand.strip() or not data.model.strip():
            raise ValidationFailureError("brand and model must not be blank")
        razor = self.backend.create_razor(data)
        logger.info("Created razor %s (%s %s)", razor.id, razor.brand, razor.model)
        return razor

    def get_razor(self, razor_id: int) -> RazorRead:
        return self.backend.get_razor(razor_id)

    def list_razors(self, page: int = 0, page_size: int = 0) -> Page:
        page, page_size, offset = resolve_page(page, page_size)
        razors, total = self.backend.list_razors(offset, page_size)
        return Page.build(razors, page, page_size, total)

    def update_razor(self, razor_id: int, data: RazorUpdate) -> RazorRead:
        """Apply a partial update.

        Blank ``brand``/``model`` and null ``purchase_date``/``price`` keep
        the stored values; ``notes`` is always replaced.
        """
        razor = self.backend.get_razor(razor_id)
        if data.brand.strip():
            razor.brand = data.brand
        if data.model.strip():
            razor.model = data.model
        if data.purchase_date is not None:
            razor.purchase_date = data.purchase_date
        if data.price is not None:
            razor.price = data.price
        razor.notes = data.notes

        updated = self.backend.update_razor(razor)
        logger.info("Updated razor %s", razor_id)
        return updated

    def delete_razor(self, razor_id: int) -> None:
        # Usage records pointing at the razor are left in place.
        self.backend.get_razor(razor_id)
        self.backend.delete_razor(razor_id)
        logger.info("Deleted razor %s", razor_id)
