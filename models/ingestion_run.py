from sqlalchemy import Column, BigInteger, Enum, DateTime, Float, Integer, Text, Index
from sqlalchemy.dialects.postgresql import UUID, JSONB
from datetime import datetime, timezone
import uuid
from models.base import Base, SourceType, RunStatus


def _utcnow():
    return datetime.now(timezone.utc)


class IngestionRun(Base):
    """
    Tracks metadata for each ingestion pass.

    Purpose:
    - Audit trail of all runs, including partial ones
    - Counts of every unit, record and batch that was skipped
    - Per-entity write statistics for debugging under-ingestion
    """
    __tablename__ = "ingestion_runs"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    run_id = Column(UUID(as_uuid=True), default=uuid.uuid4, unique=True, nullable=False, index=True)

    source_type = Column(Enum(SourceType), nullable=False, index=True)
    status = Column(Enum(RunStatus), default=RunStatus.RUNNING, nullable=False, index=True)

    # Timestamps
    started_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    duration_seconds = Column(Float, nullable=True)

    # Fetch statistics
    units_discovered = Column(Integer, default=0)
    units_fetched = Column(Integer, default=0)
    fetch_errors = Column(Integer, default=0)
    parse_errors = Column(Integer, default=0)

    # Normalization statistics
    records_normalized = Column(Integer, default=0)
    records_failed = Column(Integer, default=0)

    # Write statistics
    rows_written = Column(BigInteger, default=0)
    rows_failed = Column(BigInteger, default=0)
    batches_failed = Column(Integer, default=0)

    error_message = Column(Text, nullable=True)
    entity_stats = Column(JSONB, nullable=True)  # {entity_name: {rows_written, rows_failed, ...}}

    __table_args__ = (
        Index("idx_ingestion_run_source_started", "source_type", "started_at"),
    )
