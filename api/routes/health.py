"""
Health check endpoint with database and ingestion status
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, text
from core.database import DB_ERRORS
from api.dependencies import get_db
from schemas.api import HealthCheckResponse, IngestionRunSummary
from models.base import SourceType
from models.ingestion_run import IngestionRun
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint.

    Returns:
    - Database connectivity status
    - The latest recorded ingestion run for each source
    """
    try:
        await db.execute(text("SELECT 1"))
    except DB_ERRORS as e:
        logger.error(f"Database connection failed: {str(e)}")
        return HealthCheckResponse(database_connected=False)

    latest_runs = []
    try:
        for source_type in SourceType:
            result = await db.execute(
                select(IngestionRun)
                .where(IngestionRun.source_type == source_type)
                .order_by(IngestionRun.started_at.desc())
                .limit(1)
            )
            run = result.scalar_one_or_none()
            if run is not None:
                latest_runs.append(IngestionRunSummary.from_run(run))
    except DB_ERRORS as e:
        logger.error(f"Failed to fetch ingestion runs: {str(e)}")

    return HealthCheckResponse(database_connected=True, latest_runs=latest_runs)
