"""
Pydantic models for blades.

``compatible_razors`` is an opaque text value (the clients store a JSON
list of razor IDs in it); the service never parses or checks it.
``remaining_quantity`` is expected to stay at or below
``total_quantity`` but this is not enforced.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .limits import MAX_INTEGER


class BladeBase(BaseModel):
    brand: str = Field(..., min_length=1, examples=["Gillette"])
    model: str = Field(..., min_length=1, examples=["Fusion 5 cartridge"])
    compatible_razors: str = Field("", examples=["[1]"])
    purchase_date: Optional[datetime] = None
    unit_price: Optional[float] = Field(None, ge=0, examples=[15.9])
    total_quantity: int = Field(0, ge=0, le=MAX_INTEGER, examples=[10])
    remaining_quantity: int = Field(0, ge=0, le=MAX_INTEGER, examples=[8])
    notes: str = ""


class BladeCreate(BladeBase):
    """Schema for creating a blade stock entry."""
    pass


class BladeUpdate(BaseModel):
    """Schema for updating a blade.

    ``brand`` and ``model`` are applied only when not blank,
    ``purchase_date`` and ``unit_price`` only when non‑null.  The
    remaining fields are always written, including zero values.
    """
    brand: str = ""
    model: str = ""
    compatible_razors: str = ""
    purchase_date: Optional[datetime] = None
    unit_price: Optional[float] = Field(None, ge=0)
    total_quantity: int = Field(0, ge=0, le=MAX_INTEGER)
    remaining_quantity: int = Field(0, ge=0, le=MAX_INTEGER)
    notes: str = ""


class BladeRead(BladeBase):
    """A stored blade."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
    }
