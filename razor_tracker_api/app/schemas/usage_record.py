"""
Pydantic models for usage records.

A usage record links one razor and one blade at a point in time.  When
read back it carries snapshots of the referenced razor and blade; a
snapshot is ``None`` when the referenced entity has since been deleted.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .blade import BladeRead
from .limits import MAX_INTEGER, MIN_INTEGER
from .razor import RazorRead


class UsageRecordCreate(BaseModel):
    """Schema for creating a usage record.

    ``blade_usage_count`` of zero (or omitted) is stored as 1.  The
    rating is meant to be 1–5 but any 64-bit integer is accepted.
    """
    usage_time: datetime = Field(..., examples=["2024-05-01T07:30:00Z"])
    razor_id: int = Field(..., gt=0, le=MAX_INTEGER, examples=[1])
    blade_id: int = Field(..., gt=0, le=MAX_INTEGER, examples=[1])
    blade_usage_count: int = Field(0, ge=0, le=MAX_INTEGER, examples=[1])
    rating: Optional[int] = Field(None, ge=MIN_INTEGER, le=MAX_INTEGER, examples=[4])
    experience_text: str = ""
    need_blade_change: bool = False


class UsageRecordUpdate(BaseModel):
    """Schema for updating a usage record.

    ``usage_time``, ``razor_id``, ``blade_id`` and ``rating`` are applied
    only when provided.  The other fields are always written.
    """
    usage_time: Optional[datetime] = None
    razor_id: Optional[int] = Field(None, ge=0, le=MAX_INTEGER)
    blade_id: Optional[int] = Field(None, ge=0, le=MAX_INTEGER)
    blade_usage_count: int = Field(0, ge=0, le=MAX_INTEGER)
    rating: Optional[int] = Field(None, ge=MIN_INTEGER, le=MAX_INTEGER)
    experience_text: str = ""
    need_blade_change: bool = False


class UsageRecordRead(BaseModel):
    """A stored usage record with its razor and blade snapshots."""

    id: int
    usage_time: datetime
    razor_id: int
    blade_id: int
    blade_usage_count: int
    rating: Optional[int] = None
    experience_text: str = ""
    need_blade_change: bool = False
    created_at: datetime
    updated_at: datetime
    razor: Optional[RazorRead] = None
    blade: Optional[BladeRead] = None

    model_config = {
        "from_attributes": True,
    }
