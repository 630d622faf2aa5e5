"""
Pydantic models for razors.

``RazorCreate`` is the creation payload, ``RazorUpdate`` the partial
update payload and ``RazorRead`` the stored entity with its
store‑assigned ID and timestamps.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RazorBase(BaseModel):
    brand: str = Field(..., min_length=1, examples=["Gillette"])
    model: str = Field(..., min_length=1, examples=["Fusion 5"])
    purchase_date: Optional[datetime] = Field(None, examples=["2024-03-01T00:00:00Z"])
    price: Optional[float] = Field(None, ge=0, examples=[89.9])
    notes: str = Field("", examples=["Five blade cartridge razor"])


class RazorCreate(RazorBase):
    """Schema for creating a razor."""
    pass


class RazorUpdate(BaseModel):
    """Schema for updating a razor.

    A blank ``brand`` or ``model`` and a null ``purchase_date`` or
    ``price`` leave the stored value unchanged.  ``notes`` is always
    written, so sending an empty string clears it.
    """
    brand: str = ""
    model: str = ""
    purchase_date: Optional[datetime] = None
    price: Optional[float] = Field(None, ge=0)
    notes: str = ""


class RazorRead(RazorBase):
    """A stored razor."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
    }
