"""
Run-scoped state shared by the fetch tasks and writers of one ingestion pass.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict

from core.exceptions import ParseError
from ingestion.rate_limiter import TokenBucket
from ingestion.router import EntityRouter


@dataclass
class WriteStats:
    rows_written: int = 0
    rows_failed: int = 0
    batches_written: int = 0
    batches_failed: int = 0


@dataclass
class RunStats:
    units_discovered: int = 0
    units_fetched: int = 0
    fetch_errors: int = 0
    parse_errors: int = 0
    records_normalized: int = 0
    records_failed: int = 0
    entities: Dict[str, WriteStats] = field(default_factory=dict)

    def record_extraction_error(self, exc: Exception) -> None:
        if isinstance(exc, ParseError):
            self.parse_errors += 1
        else:
            self.fetch_errors += 1

    @property
    def rows_written(self) -> int:
        return sum(s.rows_written for s in self.entities.values())

    @property
    def rows_failed(self) -> int:
        return sum(s.rows_failed for s in self.entities.values())

    @property
    def batches_failed(self) -> int:
        return sum(s.batches_failed for s in self.entities.values())

    @property
    def skipped_anything(self) -> bool:
        return bool(
            self.fetch_errors
            or self.parse_errors
            or self.records_failed
            or self.batches_failed
        )

    def entity_stats(self) -> Dict[str, Dict[str, Any]]:
        return {
            name: {
                "rows_written": s.rows_written,
                "rows_failed": s.rows_failed,
                "batches_written": s.batches_written,
                "batches_failed": s.batches_failed,
            }
            for name, s in self.entities.items()
        }


@dataclass
class RunContext:
    """
    Everything one run needs besides the source itself.

    Created fresh per invocation; nothing here outlives the run.
    """
    limiter: TokenBucket
    router: EntityRouter
    cancel_event: asyncio.Event = field(default_factory=asyncio.Event)
    stats: RunStats = field(default_factory=RunStats)
