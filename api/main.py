"""
FastAPI application initialization
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from api.routes import health, ingest
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.logging import setup_logging
from ingestion.scheduler import IngestionScheduler
import logging

setup_logging()
logger = logging.getLogger(__name__)

scheduler = IngestionScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown"""
    logger.info("Starting Catalog Ingest API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else 'configured'}")

    if settings.SCHEDULER_ENABLED:
        scheduler.start()

    yield

    logger.info("Shutting down Catalog Ingest API")
    if settings.SCHEDULER_ENABLED:
        scheduler.stop()


# Create FastAPI app
app = FastAPI(
    title="Catalog Ingest API",
    description="Ingests the IGDB games and TMDB TV show and movie catalogs into PostgreSQL",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(RequestContextMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(ingest.router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Catalog Ingest API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "games": "/games/update",
            "tv_shows": "/tvshows/update",
            "movies": "/movies/update"
        }
    }
