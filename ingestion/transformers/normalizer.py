"""
Shared pieces of the record normalizers: the row collection they return and
the value parsers every source needs.
"""

from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Type
from core.exceptions import NormalizationError
from schemas.base import RowSchema
import logging

logger = logging.getLogger(__name__)


class NormalizedRows:
    """Rows decomposed from one root record, grouped by row schema."""

    def __init__(self):
        self._rows: Dict[Type[RowSchema], List[RowSchema]] = defaultdict(list)
        self._count = 0

    def add(self, row: RowSchema) -> None:
        self._rows[type(row)].append(row)
        self._count += 1

    def of(self, schema: Type[RowSchema]) -> List[RowSchema]:
        return list(self._rows.get(schema, ()))

    def __iter__(self) -> Iterator[RowSchema]:
        for rows in self._rows.values():
            yield from rows

    def __len__(self) -> int:
        return self._count


class RecordNormalizer:
    """
    Base for source-specific normalizers.

    Subclasses implement ``_normalize(record, record_id)``; this class checks
    the record shape and root ID and wraps field errors in
    ``NormalizationError`` so that only the offending record is skipped.
    """

    source_name = "unknown"

    def normalize(self, record: Dict[str, Any]) -> NormalizedRows:
        if not isinstance(record, dict):
            raise NormalizationError(
                f"Expected a JSON object, got {type(record).__name__}",
                context={"source_name": self.source_name}
            )
        record_id = record.get("id")
        if record_id is None:
            raise NormalizationError(
                "Record has no id",
                context={"source_name": self.source_name, "keys": sorted(record)[:20]}
            )
        try:
            return self._normalize(record, record_id)
        except NormalizationError:
            raise
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            raise NormalizationError(
                f"Failed to normalize record {record_id}",
                context={"source_name": self.source_name, "record_id": record_id},
                original_exception=e
            )

    def _normalize(self, record: Dict[str, Any], record_id: int) -> NormalizedRows:
        raise NotImplementedError


def epoch_to_datetime(value: Any) -> Optional[datetime]:
    """Unix epoch seconds to an aware UTC datetime; None stays None."""
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


def parse_date(value: Any) -> Optional[date]:
    """``YYYY-MM-DD`` to a date; empty strings and None become None."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def id_list(values: Any) -> List[int]:
    """Plain ID list, tolerating null and expanded ``{"id": ...}`` objects."""
    if not values:
        return []
    ids = []
    for value in values:
        if isinstance(value, dict):
            value = value.get("id")
        if value is not None:
            ids.append(int(value))
    return ids


def objects(values: Any) -> List[Dict[str, Any]]:
    """Embedded objects of a plural field; unexpanded bare IDs are dropped."""
    if not values:
        return []
    return [value for value in values if isinstance(value, dict) and value.get("id") is not None]
