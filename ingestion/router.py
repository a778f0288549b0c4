"""
Per-entity queues connecting fetch tasks to batch writers.
"""

import asyncio
import logging
from collections import deque
from typing import Dict, Iterable

from core.exceptions import RoutingError
from ingestion.entities import EntityDescriptor
from schemas.base import RowSchema

logger = logging.getLogger(__name__)


class EntityQueue:
    """
    Unbounded, closable queue with many producers and one consumer.

    ``put()`` never blocks. Iterating with ``async for`` yields rows until
    the queue has been closed and drained.
    """

    def __init__(self, name: str):
        self.name = name
        self._items = deque()
        self._changed = asyncio.Event()
        self._closed = False

    def put(self, row: RowSchema) -> None:
        if self._closed:
            raise RoutingError(
                f"Queue {self.name} is closed",
                context={"entity": self.name}
            )
        self._items.append(row)
        self._changed.set()

    def close(self) -> None:
        self._closed = True
        self._changed.set()

    def __aiter__(self):
        return self

    async def __anext__(self) -> RowSchema:
        while True:
            if self._items:
                return self._items.popleft()
            if self._closed:
                raise StopAsyncIteration
            self._changed.clear()
            await self._changed.wait()


class EntityRouter:
    """Routes normalized rows to the queue of their entity, keyed by row type."""

    def __init__(self, descriptors: Iterable[EntityDescriptor]):
        self._queues: Dict[type, EntityQueue] = {}
        for descriptor in descriptors:
            self._queues[descriptor.schema] = EntityQueue(descriptor.name)

    def queue_for(self, descriptor: EntityDescriptor) -> EntityQueue:
        return self._queues[descriptor.schema]

    def route(self, row: RowSchema) -> None:
        queue = self._queues.get(type(row))
        if queue is None:
            raise RoutingError(
                f"No queue registered for {type(row).__name__}",
                context={"row_type": type(row).__name__}
            )
        queue.put(row)

    def dispatch(self, rows: Iterable[RowSchema]) -> int:
        """Route every row; returns the number routed."""
        count = 0
        for row in rows:
            self.route(row)
            count += 1
        return count

    def close(self) -> None:
        for queue in self._queues.values():
            queue.close()
        logger.debug(f"Closed {len(self._queues)} entity queues")
