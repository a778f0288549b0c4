"""
Load normalized rows into PostgreSQL with upsert logic (idempotency)
"""

from typing import Dict, List, Sequence
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.dialects.postgresql import insert
from ingestion.entities import ConflictPolicy, EntityDescriptor
from schemas.base import RowSchema
from core.database import DB_ERRORS
from core.exceptions import UpsertError
import logging

logger = logging.getLogger(__name__)


def collapse_duplicates(descriptor: EntityDescriptor, rows: Sequence[RowSchema]) -> List[RowSchema]:
    """
    Keep one row per key.

    PostgreSQL rejects an ``ON CONFLICT DO UPDATE`` statement that touches the
    same row twice. The survivor is the newest by the version column where
    both rows carry one, otherwise the last one seen.
    """
    survivors: Dict[tuple, RowSchema] = {}
    version = descriptor.version_column
    for row in rows:
        key = descriptor.key_of(row)
        current = survivors.get(key)
        if current is not None and version:
            incoming_version = getattr(row, version)
            current_version = getattr(current, version)
            if (
                incoming_version is not None
                and current_version is not None
                and incoming_version < current_version
            ):
                continue
        survivors[key] = row
    return list(survivors.values())


class PostgresLoader:
    """
    Load rows into PostgreSQL with idempotent upsert operations.

    Ensures:
    - One transaction per batch, opened from the shared session factory
    - No duplicate rows on repeated runs
    - UPDATE_ALL rows overwrite every non-key column, unless the stored row
      carries a newer version
    - DO_NOTHING rows never modify a stored row
    """

    def __init__(self, session_maker: async_sessionmaker):
        self.session_maker = session_maker

    @staticmethod
    def build_statement(descriptor: EntityDescriptor):
        """
        PostgreSQL INSERT ... ON CONFLICT for the entity's table and policy.

        The statement carries no values; rows are bound at execution time.
        """
        table = descriptor.table
        stmt = insert(table)
        key_columns = list(descriptor.key_columns)

        if descriptor.policy == ConflictPolicy.DO_NOTHING:
            return stmt.on_conflict_do_nothing(index_elements=key_columns)

        set_ = {
            column.name: stmt.excluded[column.name]
            for column in table.columns
            if not column.primary_key
        }

        where = None
        if descriptor.version_column:
            stored = table.c[descriptor.version_column]
            incoming = stmt.excluded[descriptor.version_column]
            where = or_(stored.is_(None), incoming.is_(None), stored <= incoming)

        return stmt.on_conflict_do_update(index_elements=key_columns, set_=set_, where=where)

    async def upsert(self, descriptor: EntityDescriptor, rows: Sequence[RowSchema]) -> int:
        """
        Write one batch in its own transaction.

        Args:
            descriptor: Target entity
            rows: Rows of ``descriptor.schema``

        Returns:
            Number of rows submitted after in-batch deduplication

        Raises:
            UpsertError: The transaction failed and was rolled back
        """
        if not rows:
            return 0

        if descriptor.policy == ConflictPolicy.UPDATE_ALL:
            rows = collapse_duplicates(descriptor, rows)

        params = [row.model_dump() for row in rows]
        stmt = self.build_statement(descriptor)

        try:
            async with self.session_maker() as session:
                async with session.begin():
                    await session.execute(stmt, params)
        except DB_ERRORS as e:
            raise UpsertError(
                f"Batch upsert into {descriptor.name} failed",
                context={
                    "table_name": descriptor.name,
                    "conflict_policy": descriptor.policy.value,
                    "batch_size": len(params),
                },
                original_exception=e
            )

        logger.debug(f"Upserted {len(params)} rows into {descriptor.name}")
        return len(params)
