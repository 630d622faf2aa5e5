"""Builders for test entities."""

from datetime import datetime, timedelta, timezone

from razor_tracker_api.app.schemas.blade import BladeCreate
from razor_tracker_api.app.schemas.razor import RazorCreate
from razor_tracker_api.app.schemas.usage_record import UsageRecordCreate


BASE_TIME = datetime(2024, 5, 1, 7, 30, tzinfo=timezone.utc)


def make_razor(brand="Gillette", model="Fusion 5", **kwargs) -> RazorCreate:
    return RazorCreate(brand=brand, model=model, **kwargs)


def make_blade(brand="Gillette", model="Fusion 5 cartridge", **kwargs) -> BladeCreate:
    kwargs.setdefault("total_quantity", 10)
    kwargs.setdefault("remaining_quantity", 8)
    return BladeCreate(brand=brand, model=model, **kwargs)


def make_usage(razor_id=1, blade_id=1, hours=0, **kwargs) -> UsageRecordCreate:
    kwargs.setdefault("blade_usage_count", 1)
    return UsageRecordCreate(
        usage_time=BASE_TIME + timedelta(hours=hours),
        razor_id=razor_id,
        blade_id=blade_id,
        **kwargs,
    )


def populate(backend) -> None:
    """Add two razors and two blades (IDs 1 and 2 of each)."""
    backend.create_razor(make_razor("Gillette", "Fusion 5", price=89.9))
    backend.create_razor(make_razor("Philips", "OneBlade Pro", price=299.0))
    backend.create_blade(make_blade("Gillette", "Fusion 5 cartridge", compatible_razors="[1]"))
    backend.create_blade(make_blade("Philips", "OneBlade cartridge", compatible_razors="[2]"))
