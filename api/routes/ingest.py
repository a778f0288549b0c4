"""
Ingestion trigger endpoints.

Each endpoint runs one full pass synchronously and answers with a plain
message once it finished, whether some pages, records or batches were
skipped or the run failed outright. Details land in the logs and the
``ingestion_runs`` table.
"""

from fastapi import APIRouter
from core.exceptions import IngestionException
from models.base import SourceType
from ingestion import runner
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Ingestion"])


async def _update(source_type: SourceType, label: str) -> str:
    logger.info(f"Update requested for {source_type.value}")
    try:
        result = await runner.run_ingestion(source_type)
        logger.info(f"Update of {source_type.value} finished: {result['status']}")
    except IngestionException as e:
        logger.error(
            f"Update of {source_type.value} failed - {e}",
            extra={"error_context": e.to_dict()}
        )
    except Exception:
        # The failed run is already recorded in ingestion_runs
        logger.exception(f"Update of {source_type.value} failed")
    return f"Finished updating {label} DB"


@router.get("/games/update", response_model=str)
async def update_games():
    return await _update(SourceType.GAMES, "games")


@router.get("/tvshows/update", response_model=str)
async def update_tv_shows():
    return await _update(SourceType.TV_SHOWS, "tv shows")


@router.get("/movies/update", response_model=str)
async def update_movies():
    return await _update(SourceType.MOVIES, "movies")
