"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from waybill.app.api.v1.endpoints import drivers, facilities, logs, trips, trucks

router = APIRouter()

# Trip lifecycle
router.include_router(trips.router)

# Fleet records
router.include_router(drivers.router)
router.include_router(trucks.router)
router.include_router(facilities.router)

# Fuel, maintenance and incident logs
router.include_router(logs.router)
