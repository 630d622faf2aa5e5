"""
Service layer for statistics and the dashboard.

Counting and averaging are delegated to the backend so the durable
store can use SQL aggregates.  Both backends order recent records by
``usage_time`` (newest first), which keeps the dashboard identical
whichever backend is active.
"""

import logging
from typing import List

from ..schemas.common import Dashboard, Statistics
from ..schemas.usage_record import UsageRecordRead
from ..storage.base import StorageBackend


logger = logging.getLogger(__name__)


DEFAULT_RECENT_LIMIT = 5


class StatisticsService:
    """Aggregated figures for the dashboard."""

    def __init__(self, backend: StorageBackend, recent_limit: int = DEFAULT_RECENT_LIMIT) -> None:
        self.backend = backend
        self.recent_limit = recent_limit

    def statistics(self) -> Statistics:
        """Return counts and the average rating over rated records."""
        return self.backend.statistics()

    def recent_usage(self, limit: int) -> List[UsageRecordRead]:
        """Return at most ``limit`` usage records, newest first."""
        return self.backend.recent_usage_records(limit)

    def dashboard(self) -> Dashboard:
        stats = self.statistics()
        recent = self.recent_usage(self.recent_limit)
        logger.debug("Dashboard: %s records total, %s recent", stats.total_usage, len(recent))
        return Dashboard(statistics=stats, recent_records=recent)
