"""
Dashboard and statistics endpoints for API v1.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from razor_tracker_api.app.api.v1.deps import get_statistics_service
from razor_tracker_api.app.api.v1.responses import success_response
from razor_tracker_api.app.services.statistics_service import StatisticsService


router = APIRouter()


@router.get("/dashboard")
def get_dashboard(
    service: StatisticsService = Depends(get_statistics_service),
) -> Dict[str, Any]:
    """Return the statistics together with the most recent usage records."""
    return success_response(service.dashboard(), "Dashboard retrieved")


@router.get("/statistics")
def get_statistics(
    service: StatisticsService = Depends(get_statistics_service),
) -> Dict[str, Any]:
    """Return usage counts and the average rating."""
    return success_response(service.statistics(), "Statistics retrieved")
