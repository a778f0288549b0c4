"""
Drain one entity queue into fixed-size upsert batches.
"""

from typing import List
from ingestion.context import WriteStats
from ingestion.entities import EntityDescriptor
from ingestion.router import EntityQueue
from schemas.base import RowSchema
from core.exceptions import LoadError
import logging

logger = logging.getLogger(__name__)


class BatchWriter:
    """
    Generic writer shared by every entity.

    Rows are flushed when the batch reaches ``batch_size`` and once more when
    the queue is exhausted. A failed batch is logged, counted and dropped;
    earlier batches stay committed and the writer keeps draining.
    """

    def __init__(self, loader, batch_size: int):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.loader = loader
        self.batch_size = batch_size

    async def drain(self, descriptor: EntityDescriptor, queue: EntityQueue) -> WriteStats:
        stats = WriteStats()
        batch: List[RowSchema] = []

        async for row in queue:
            batch.append(row)
            if len(batch) >= self.batch_size:
                await self._flush(descriptor, batch, stats)
                batch = []

        if batch:
            await self._flush(descriptor, batch, stats)

        logger.info(
            f"{descriptor.name}: wrote {stats.rows_written} rows in {stats.batches_written} batches"
            + (f", {stats.batches_failed} batches failed" if stats.batches_failed else "")
        )
        return stats

    async def _flush(self, descriptor: EntityDescriptor, batch: List[RowSchema], stats: WriteStats) -> None:
        try:
            written = await self.loader.upsert(descriptor, batch)
        except LoadError as e:
            stats.rows_failed += len(batch)
            stats.batches_failed += 1
            logger.error(
                f"Dropping batch of {len(batch)} {descriptor.name} rows: {e}",
                extra={"error_context": e.to_dict()}
            )
            return
        stats.rows_written += written
        stats.batches_written += 1
