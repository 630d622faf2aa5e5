"""
FastAPI dependencies that hand each request its service objects.

Services are cheap wrappers, so one is built per request around the
backend selected at start‑up and stored on ``app.state``.
"""

from fastapi import Request

from razor_tracker_api.app.core.exceptions import BackendUnavailableError
from razor_tracker_api.app.services import (
    BladeService,
    RazorService,
    StatisticsService,
    UsageRecordService,
)
from razor_tracker_api.app.storage import StorageBackend


def get_backend(request: Request) -> StorageBackend:
    backend = getattr(request.app.state, "backend", None)
    if backend is None:
        raise BackendUnavailableError("Storage backend is not initialised")
    return backend


def get_razor_service(request: Request) -> RazorService:
    return RazorService(get_backend(request))


def get_blade_service(request: Request) -> BladeService:
    return BladeService(get_backend(request))


def get_usage_record_service(request: Request) -> UsageRecordService:
    return UsageRecordService(get_backend(request))


def get_statistics_service(request: Request) -> StatisticsService:
    return StatisticsService(
        get_backend(request),
        recent_limit=request.app.state.settings.dashboard_recent_limit,
    )
