"""
Abstract base class for catalog sources
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, List, Sequence
from ingestion.entities import EntityDescriptor
from models.base import SourceType
import logging

logger = logging.getLogger(__name__)


class DataSource(ABC):
    """
    Abstract base class for all catalog sources.

    A source knows how to enumerate its work units, fetch the records of one
    unit, and decompose a record into rows. It holds no run state; anything
    scoped to a run arrives through the ``RunContext`` argument.

    Class attributes:
        source_type: Which catalog this source fills
        entities: Every entity the source's normalizer can emit
    """

    source_type: SourceType
    entities: Sequence[EntityDescriptor] = ()

    def __init__(self, batch_size: int, requests_per_second: float):
        self.batch_size = batch_size
        self.requests_per_second = requests_per_second

    @property
    def source_name(self) -> str:
        return self.source_type.value

    @abstractmethod
    async def discover(self, context) -> List[Hashable]:
        """
        Enumerate the work units of one run.

        Returns:
            Page numbers or record IDs; each becomes one fetch task
        """
        pass

    @abstractmethod
    async def fetch_records(self, unit: Hashable, context) -> List[Dict[str, Any]]:
        """
        Fetch the raw records of one work unit.

        Raises:
            FetchError: The request failed or returned a non-2xx status
            ParseError: The response body was not the expected JSON
        """
        pass

    @abstractmethod
    def normalize(self, record: Dict[str, Any]):
        """
        Decompose one raw record into rows.

        Returns:
            NormalizedRows holding exactly one root row

        Raises:
            NormalizationError: The record cannot be decomposed
        """
        pass
