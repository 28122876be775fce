"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hostel allocation core
"""
import logging

from fastapi import APIRouter

from app.api.v1 import attendance, complaints, fees, leaves, rooms, students, wardens

logger = logging.getLogger(__name__)

router = APIRouter(
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
    }
)

for module in (rooms, students, fees, attendance, leaves, wardens, complaints):
    router.include_router(module.router)

logger.debug("API v1 router assembled with %d routes", len(router.routes))


@router.get("/health", tags=["Health"])
def health() -> dict:
    return {"status": "ok"}
