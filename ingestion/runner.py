# ============================================================================
# File: ingestion/runner.py
# Description: Phased ingestion orchestrator
# ============================================================================
"""
Ingestion Runner - Orchestrates fetch, normalize, route and phased write.

This module provides the run loop shared by every catalog source:
- One fetch task per work unit, gated by the run's token bucket
- Normalized rows routed to one queue per entity
- Writers drained in dependency phases with a barrier between phases
- Partial failure support: a failed page, ID, record or batch is logged,
  counted and skipped; the run carries on
- One IngestionRun row per run with the final statistics
"""

import asyncio
import time
from datetime import datetime, timezone
from typing import Any, Dict, Hashable, Optional
import logging

import httpx

from core.config import settings
from core.database import DB_ERRORS, async_session_maker
from core.exceptions import (
    DatabaseError,
    ExtractionError,
    TransformationError,
)
from ingestion.base import DataSource
from ingestion.context import RunContext
from ingestion.entities import Phase, entities_in_phase
from ingestion.loaders.batch_writer import BatchWriter
from ingestion.loaders.postgres_loader import PostgresLoader
from ingestion.rate_limiter import TokenBucket
from ingestion.router import EntityRouter
from ingestion.sources import build_source
from models.base import RunStatus, SourceType
from models.ingestion_run import IngestionRun

logger = logging.getLogger(__name__)


class IngestionRunner:
    """
    Ingestion Orchestrator

    Responsibilities:
    - Build the run context (limiter, router, cancel event, statistics)
    - Run producers concurrently with the root and reference writers
    - Start child, nested child and join writers only after the previous
      phase committed
    - Record run metrics

    Args:
        loader: Object with ``async upsert(descriptor, rows) -> int``
        session_maker: Session factory for IngestionRun bookkeeping; None
            disables bookkeeping
    """

    def __init__(self, loader, session_maker=None):
        self.loader = loader
        self.session_maker = session_maker

    async def run(self, source: DataSource) -> Dict[str, Any]:
        """
        Run one full ingestion pass for a source.

        Returns:
            Dictionary with run statistics:
            - status: "success", "partial" or "failed"
            - units_discovered / units_fetched
            - fetch_errors / parse_errors / records_failed
            - rows_written / rows_failed / batches_failed
            - entities: per-entity write statistics

        Raises:
            Exception: Only for failures outside the per-unit, per-record and
                per-batch error scopes (the run is recorded as failed first)
        """
        context = RunContext(
            limiter=TokenBucket(source.requests_per_second, burst=1),
            router=EntityRouter(source.entities),
        )
        writer = BatchWriter(self.loader, source.batch_size)

        logger.info(f"Starting ingestion for {source.source_name}")
        started = time.monotonic()
        run_pk = await self._start_run(source)

        try:
            # --------------------------------------------------
            # PHASE 1: PRODUCERS + ROOT AND REFERENCE WRITERS
            # --------------------------------------------------
            async with asyncio.TaskGroup() as tg:
                tg.create_task(self._produce(source, context))
                self._start_writers(tg, writer, source, context, Phase.ROOT)

            # --------------------------------------------------
            # PHASES 2-4: CHILD, NESTED CHILD, JOIN
            # --------------------------------------------------
            for phase in (Phase.CHILD, Phase.NESTED_CHILD, Phase.JOIN):
                async with asyncio.TaskGroup() as tg:
                    self._start_writers(tg, writer, source, context, phase)

        except Exception as e:
            logger.exception(f"Ingestion failed for {source.source_name}")
            await self._finish_run(run_pk, context, RunStatus.FAILED, started, error_message=str(e))
            raise

        stats = context.stats
        status = RunStatus.PARTIAL if stats.skipped_anything else RunStatus.SUCCESS
        error_message = None
        if status == RunStatus.PARTIAL:
            error_message = (
                f"{stats.fetch_errors} fetch errors, {stats.parse_errors} parse errors, "
                f"{stats.records_failed} records failed, {stats.batches_failed} batches failed"
            )
        await self._finish_run(run_pk, context, status, started, error_message=error_message)

        result = {
            "status": status.value,
            "source": source.source_name,
            "duration_seconds": round(time.monotonic() - started, 3),
            "units_discovered": stats.units_discovered,
            "units_fetched": stats.units_fetched,
            "fetch_errors": stats.fetch_errors,
            "parse_errors": stats.parse_errors,
            "records_normalized": stats.records_normalized,
            "records_failed": stats.records_failed,
            "rows_written": stats.rows_written,
            "rows_failed": stats.rows_failed,
            "batches_failed": stats.batches_failed,
            "entities": stats.entity_stats(),
        }

        logger.info(
            f"Ingestion completed for {source.source_name}: {result['status']} - "
            f"Units: {stats.units_fetched}/{stats.units_discovered}, "
            f"Records: {stats.records_normalized}, Rows: {stats.rows_written}"
        )
        return result

    # ------------------------------------------------------------------
    # Producers
    # ------------------------------------------------------------------

    async def _produce(self, source: DataSource, context: RunContext) -> None:
        try:
            units = await source.discover(context)
            context.stats.units_discovered = len(units)
            logger.info(f"{source.source_name}: {len(units)} work units")

            async with asyncio.TaskGroup() as tg:
                for unit in units:
                    tg.create_task(self._process_unit(source, unit, context))
        finally:
            # Writers end only once every queue is closed
            context.router.close()

    async def _process_unit(self, source: DataSource, unit: Hashable, context: RunContext) -> None:
        try:
            records = await source.fetch_records(unit, context)
        except ExtractionError as e:
            context.stats.record_extraction_error(e)
            logger.warning(
                f"Skipping {source.source_name} unit {unit}: {e}",
                extra={"error_context": e.to_dict()}
            )
            return

        context.stats.units_fetched += 1

        for record in records:
            try:
                rows = source.normalize(record)
            except TransformationError as e:
                context.stats.records_failed += 1
                logger.warning(
                    f"Skipping {source.source_name} record in unit {unit}: {e}",
                    extra={"error_context": e.to_dict()}
                )
                continue
            context.router.dispatch(rows)
            context.stats.records_normalized += 1

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------

    def _start_writers(self, tg, writer: BatchWriter, source: DataSource, context: RunContext, phase: Phase):
        descriptors = entities_in_phase(source.entities, phase)
        logger.debug(f"{source.source_name}: phase {phase.name} with {len(descriptors)} writers")
        return [
            tg.create_task(self._write_entity(writer, descriptor, context))
            for descriptor in descriptors
        ]

    async def _write_entity(self, writer: BatchWriter, descriptor, context: RunContext) -> None:
        stats = await writer.drain(descriptor, context.router.queue_for(descriptor))
        context.stats.entities[descriptor.name] = stats

    # ------------------------------------------------------------------
    # Run bookkeeping
    # ------------------------------------------------------------------

    async def _start_run(self, source: DataSource) -> Optional[int]:
        if self.session_maker is None:
            return None
        try:
            async with self.session_maker() as session:
                run = IngestionRun(source_type=source.source_type, status=RunStatus.RUNNING)
                session.add(run)
                await session.commit()
                return run.id
        except DB_ERRORS as e:
            error = DatabaseError(
                "Failed to record ingestion run start",
                context={"operation": "INSERT", "table_name": "ingestion_runs"},
                original_exception=e
            )
            logger.error(str(error), extra={"error_context": error.to_dict()})
            return None

    async def _finish_run(
        self,
        run_pk: Optional[int],
        context: RunContext,
        status: RunStatus,
        started: float,
        error_message: Optional[str] = None
    ) -> None:
        if self.session_maker is None or run_pk is None:
            return
        stats = context.stats
        try:
            async with self.session_maker() as session:
                run = await session.get(IngestionRun, run_pk)
                if run is None:
                    return
                run.status = status
                run.completed_at = datetime.now(timezone.utc)
                run.duration_seconds = time.monotonic() - started
                run.units_discovered = stats.units_discovered
                run.units_fetched = stats.units_fetched
                run.fetch_errors = stats.fetch_errors
                run.parse_errors = stats.parse_errors
                run.records_normalized = stats.records_normalized
                run.records_failed = stats.records_failed
                run.rows_written = stats.rows_written
                run.rows_failed = stats.rows_failed
                run.batches_failed = stats.batches_failed
                run.error_message = error_message
                run.entity_stats = stats.entity_stats()
                await session.commit()
        except DB_ERRORS as e:
            error = DatabaseError(
                "Failed to record ingestion run completion",
                context={"operation": "UPDATE", "table_name": "ingestion_runs", "run_pk": run_pk},
                original_exception=e
            )
            logger.error(str(error), extra={"error_context": error.to_dict()})


async def run_ingestion(source_type: SourceType) -> Dict[str, Any]:
    """
    Run one pass for a source with production wiring: a fresh HTTP client,
    the shared database session factory and IngestionRun bookkeeping.
    """
    loader = PostgresLoader(async_session_maker)
    runner = IngestionRunner(loader, session_maker=async_session_maker)
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        source = build_source(source_type, client)
        return await runner.run(source)
