"""
Service layer.

Each service wraps a ``StorageBackend`` and owns the rules that sit on
top of plain storage: partial updates, reference checks on usage
records, pagination defaults and the dashboard aggregates.
"""

from .blade_service import BladeService
from .razor_service import RazorService
from .statistics_service import StatisticsService
from .usage_record_service import UsageRecordService

__all__ = ["RazorService", "BladeService", "UsageRecordService", "StatisticsService"]
