"""
Shared response shapes: the envelope, pagination and statistics.
"""

import math
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from .usage_record import UsageRecordRead


DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


class APIResponse(BaseModel):
    """Envelope wrapped around every response body.

    ``data`` and ``error`` are omitted from the JSON when absent.
    """

    success: bool
    data: Optional[Any] = None
    message: str
    error: Optional[str] = None


class Page(BaseModel):
    """One page of a paginated listing."""

    items: List[Any]
    page: int
    page_size: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, items: List[Any], page: int, page_size: int, total: int) -> "Page":
        return cls(
            items=items,
            page=page,
            page_size=page_size,
            total=total,
            total_pages=math.ceil(total / page_size) if page_size else 0,
        )


class Statistics(BaseModel):
    """Aggregate counters for the dashboard.

    ``average_rating`` covers only records that have a rating and is 0
    when none do.
    """

    total_usage: int = Field(0, description="Number of usage records")
    razor_count: int = 0
    blade_count: int = 0
    average_rating: float = 0.0


class Dashboard(BaseModel):
    statistics: Statistics
    recent_records: List[UsageRecordRead]
