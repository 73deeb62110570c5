"""
Health check endpoints for the City Operations Engine.
"""

from datetime import datetime
from typing import Dict, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import structlog

from api.dependencies import get_data_source_registry
from core.config import get_settings, Settings
from core.zones import ZONES
from services.data_source_registry import DataSourceRegistry
from services.error_handler import list_error_handlers

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """
    Health check endpoint (liveness probe).
    Returns basic service health status.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "service": "City Operations Engine",
        "city": settings.CITY_NAME,
        "version": "1.0.0"
    }


@router.get("/ready")
async def readiness_check(
    settings: Settings = Depends(get_settings),
    registry: DataSourceRegistry = Depends(get_data_source_registry),
) -> JSONResponse:
    """
    Readiness check endpoint.
    Verifies that the static reference data is loaded.
    """
    checks = {}
    overall_ready = True

    if ZONES:
        checks["zones"] = {"status": "ready", "details": f"{len(ZONES)} zones loaded"}
    else:
        checks["zones"] = {"status": "not_ready", "error": "Zone reference list is empty"}
        overall_ready = False

    source_count = len(registry.sources)
    if source_count:
        checks["data_sources"] = {"status": "ready", "details": f"{source_count} sources configured"}
    else:
        checks["data_sources"] = {"status": "not_ready", "error": "No data sources configured"}
        overall_ready = False

    # Live feeds are optional
    checks["live_feeds"] = {
        "status": "ready",
        "details": f"Open-Meteo with {settings.FETCH_TIMEOUT_SECONDS}s timeout"
    }

    response_data = {
        "status": "ready" if overall_ready else "not_ready",
        "timestamp": datetime.utcnow().isoformat(),
        "checks": checks
    }
    return JSONResponse(content=response_data, status_code=200 if overall_ready else 503)


@router.get("/errors")
async def error_statistics() -> Dict[str, Any]:
    """Recorded error statistics per service."""
    return {
        "timestamp": datetime.utcnow().isoformat(),
        "services": {
            name: handler.get_error_statistics()
            for name, handler in list_error_handlers().items()
        }
    }
