"""
Blade endpoints for API v1.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Path, Query, status

from razor_tracker_api.app.api.v1.deps import get_blade_service
from razor_tracker_api.app.api.v1.responses import success_response
from razor_tracker_api.app.schemas.blade import BladeCreate, BladeUpdate
from razor_tracker_api.app.schemas.limits import MAX_INTEGER, MIN_INTEGER
from razor_tracker_api.app.services.blade_service import BladeService


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_blade(
    blade: BladeCreate,
    service: BladeService = Depends(get_blade_service),
) -> Dict[str, Any]:
    return success_response(service.create_blade(blade), "Blade created")


@router.get("")
def list_blades(
    page: int = Query(0, ge=0, le=MAX_INTEGER),
    page_size: int = Query(0, ge=0, le=100),
    service: BladeService = Depends(get_blade_service),
) -> Dict[str, Any]:
    return success_response(service.list_blades(page, page_size), "Blades retrieved")


@router.get("/{blade_id}")
def get_blade(
    blade_id: int = Path(..., ge=MIN_INTEGER, le=MAX_INTEGER),
    service: BladeService = Depends(get_blade_service),
) -> Dict[str, Any]:
    return success_response(service.get_blade(blade_id), "Blade retrieved")


@router.put("/{blade_id}")
def update_blade(
    updates: BladeUpdate,
    blade_id: int = Path(..., ge=MIN_INTEGER, le=MAX_INTEGER),
    service: BladeService = Depends(get_blade_service),
) -> Dict[str, Any]:
    """Update a blade.

    Quantities, compatibility and notes are always overwritten, so send
    the current values to keep them.
    """
    return success_response(service.update_blade(blade_id, updates), "Blade updated")


@router.delete("/{blade_id}")
def delete_blade(
    blade_id: int = Path(..., ge=MIN_INTEGER, le=MAX_INTEGER),
    service: BladeService = Depends(get_blade_service),
) -> Dict[str, Any]:
    service.delete_blade(blade_id)
    return success_response(None, "Blade deleted")
