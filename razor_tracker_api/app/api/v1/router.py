"""
Top‑level router for version 1 of the API.
"""

from fastapi import APIRouter

from .endpoints import blades, razors, statistics, usage_records

router = APIRouter()

router.include_router(razors.router, prefix="/razors", tags=["razors"])
router.include_router(blades.router, prefix="/blades", tags=["blades"])
router.include_router(usage_records.router, prefix="/usage-records", tags=["usage-records"])
# Dashboard and statistics sit directly under /api/v1.
router.include_router(statistics.router, tags=["statistics"])
