"""
Usage record endpoints for API v1.

Creating or updating a record fails with 400 when the referenced razor
or blade does not exist.  Records are listed newest ``usage_time``
first and always include their razor and blade snapshots.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Path, Query, status

from razor_tracker_api.app.api.v1.deps import get_usage_record_service
from razor_tracker_api.app.api.v1.responses import success_response
from razor_tracker_api.app.schemas.limits import MAX_INTEGER, MIN_INTEGER
from razor_tracker_api.app.schemas.usage_record import UsageRecordCreate, UsageRecordUpdate
from razor_tracker_api.app.services.usage_record_service import UsageRecordService


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_usage_record(
    record: UsageRecordCreate,
    service: UsageRecordService = Depends(get_usage_record_service),
) -> Dict[str, Any]:
    return success_response(service.create_usage_record(record), "Usage record created")


@router.get("")
def list_usage_records(
    page: int = Query(0, ge=0, le=MAX_INTEGER),
    page_size: int = Query(0, ge=0, le=100),
    service: UsageRecordService = Depends(get_usage_record_service),
) -> Dict[str, Any]:
    return success_response(
        service.list_usage_records(page, page_size), "Usage records retrieved"
    )


@router.get("/{record_id}")
def get_usage_record(
    record_id: int = Path(..., ge=MIN_INTEGER, le=MAX_INTEGER),
    service: UsageRecordService = Depends(get_usage_record_service),
) -> Dict[str, Any]:
    return success_response(service.get_usage_record(record_id), "Usage record retrieved")


@router.put("/{record_id}")
def update_usage_record(
    updates: UsageRecordUpdate,
    record_id: int = Path(..., ge=MIN_INTEGER, le=MAX_INTEGER),
    service: UsageRecordService = Depends(get_usage_record_service),
) -> Dict[str, Any]:
    return success_response(
        service.update_usage_record(record_id, updates), "Usage record updated"
    )


@router.delete("/{record_id}")
def delete_usage_record(
    record_id: int = Path(..., ge=MIN_INTEGER, le=MAX_INTEGER),
    service: UsageRecordService = Depends(get_usage_record_service),
) -> Dict[str, Any]:
    service.delete_usage_record(record_id)
    return success_response(None, "Usage record deleted")
