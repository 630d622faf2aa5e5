"""
Razor endpoints for API v1.

Handlers are plain functions so FastAPI runs them in its worker
thread pool; the storage layer is synchronous.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Path, Query, status

from razor_tracker_api.app.api.v1.deps import get_razor_service
from razor_tracker_api.app.api.v1.responses import success_response
from razor_tracker_api.app.schemas.limits import MAX_INTEGER, MIN_INTEGER
from razor_tracker_api.app.schemas.razor import RazorCreate, RazorUpdate
from razor_tracker_api.app.services.razor_service import RazorService


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_razor(
    razor: RazorCreate,
    service: RazorService = Depends(get_razor_service),
) -> Dict[str, Any]:
    """Create a new razor."""
    return success_response(service.create_razor(razor), "Razor created")


@router.get("")
def list_razors(
    page: int = Query(0, ge=0, le=MAX_INTEGER),
    page_size: int = Query(0, ge=0, le=100),
    service: RazorService = Depends(get_razor_service),
) -> Dict[str, Any]:
    """Return one page of razors; zero selects page 1 / 10 per page."""
    return success_response(service.list_razors(page, page_size), "Razors retrieved")


@router.get("/{razor_id}")
def get_razor(
    razor_id: int = Path(..., ge=MIN_INTEGER, le=MAX_INTEGER),
    service: RazorService = Depends(get_razor_service),
) -> Dict[str, Any]:
    return success_response(service.get_razor(razor_id), "Razor retrieved")


@router.put("/{razor_id}")
def update_razor(
    updates: RazorUpdate,
    razor_id: int = Path(..., ge=MIN_INTEGER, le=MAX_INTEGER),
    service: RazorService = Depends(get_razor_service),
) -> Dict[str, Any]:
    """Update a razor.

    Empty ``brand``/``model`` and null ``purchase_date``/``price`` keep
    their stored values; ``notes`` is always replaced.
    """
    return success_response(service.update_razor(razor_id, updates), "Razor updated")


@router.delete("/{razor_id}")
def delete_razor(
    razor_id: int = Path(..., ge=MIN_INTEGER, le=MAX_INTEGER),
    service: RazorService = Depends(get_razor_service),
) -> Dict[str, Any]:
    """Delete a razor.  Usage records referencing it are kept."""
    service.delete_razor(razor_id)
    return success_response(None, "Razor deleted")
