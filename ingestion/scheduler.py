import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from core.config import settings
from core.exceptions import IngestionException
from models.base import SourceType
from ingestion.runner import run_ingestion

logger = logging.getLogger(__name__)


class IngestionScheduler:
    """Runs every catalog source on a fixed interval."""

    def __init__(self, interval_minutes: int = None, run_source=run_ingestion):
        self.scheduler = AsyncIOScheduler()
        self.interval_minutes = interval_minutes or settings.SCHEDULER_INTERVAL_MINUTES
        self.run_source = run_source

    async def run_ingestion_job(self):
        """Job to run one pass per source, one source at a time"""
        logger.info("Scheduler: Starting ingestion job")
        for source_type in SourceType:
            try:
                result = await self.run_source(source_type)
                logger.info(f"Scheduler: {source_type.value} finished with status {result['status']}")
            except IngestionException as e:
                logger.error(
                    f"Scheduler: {source_type.value} ingestion failed - {e}",
                    extra={"error_context": e.to_dict()}
                )
            except Exception:
                # Next source still runs; the failed run is already recorded
                logger.exception(f"Scheduler: {source_type.value} ingestion failed")

    def start(self):
        """Start the scheduler"""
        self.scheduler.add_job(
            self.run_ingestion_job,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id="ingestion_job",
            replace_existing=True,
            max_instances=1,
            coalesce=True
        )
        self.scheduler.start()
        logger.info(f"Ingestion scheduler started (every {self.interval_minutes} minutes)")

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown()
        logger.info("Ingestion scheduler stopped")
