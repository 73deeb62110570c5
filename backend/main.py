"""
City Operations Engine - Main FastAPI Application

Entry point for the city operations dashboard backend: synthetic domain
models, live Open-Meteo feeds, scenario simulation and the composite
city health index.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from core.config import get_settings
from api.dependencies import get_city_data_service
from api.health import router as health_router
from api.city import router as city_router
from api.scenarios import router as scenarios_router
from api.metrics import router as metrics_router


settings = get_settings()

if settings.DEBUG:
    # Development: human-readable console output
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=True)
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

else:
    # Production: JSON output
    logging.basicConfig(level=logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting City Operations Engine API",
                city=settings.CITY_NAME,
                timezone=settings.CITY_TIMEZONE,
                debug_mode=settings.DEBUG,
                host=settings.HOST,
                port=settings.PORT)

    if settings.DEBUG:
        logger.info("Configuration loaded",
                    allowed_origins=settings.allowed_origins_list,
                    fetch_timeout=settings.FETCH_TIMEOUT_SECONDS,
                    data_sources=str(settings.DATA_SOURCES_CONFIG_PATH))

    yield

    logger.info("Shutting down City Operations Engine API")
    await get_city_data_service().close()


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="City Operations Engine",
        description="Synthetic city domain models, live environmental feeds and what-if scenario simulation",
        version="1.0.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info("Registering API routes")
    app.include_router(health_router, prefix="/api", tags=["health"])
    app.include_router(city_router, prefix="/api", tags=["city"])
    app.include_router(scenarios_router, prefix="/api")
    app.include_router(metrics_router, prefix="/api")

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Global exception handler with structured logging."""
        logger.error(
            "Unhandled exception",
            exc_info=exc,
            path=request.url.path,
            method=request.method,
            client_ip=request.client.host if request.client else "unknown"
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if settings.DEBUG else "An unexpected error occurred"
            }
        )

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": "City Operations Engine",
            "city": settings.CITY_NAME,
            "version": "1.0.0",
            "status": "operational",
            "features": [
                "domain_models",
                "scenario_simulation",
                "city_health_index",
                "dashboard_kpis",
                "live_air_quality"
            ]
        }

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info" if settings.DEBUG else "warning",
        access_log=True
    )
