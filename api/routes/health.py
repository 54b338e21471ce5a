"""Health check routes"""

from fastapi import APIRouter
import logging

from adapters import mongo_adapter
from api.responses import HealthResponse
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("darents.api.health")


@router.get("/health-check", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint, including database reachability"""
    database = "ok" if mongo_adapter.ping() else "unavailable"
    return HealthResponse(
        status="ok",
        service=settings.app_name,
        version=settings.app_version,
        database=database,
    )
