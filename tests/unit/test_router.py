"""
Unit tests for entity queues and the router
"""

import asyncio

import pytest

from core.exceptions import RoutingError
from ingestion.entities import TV_SHOW_ENTITIES
from ingestion.router import EntityQueue, EntityRouter
from schemas.tv_shows import TVShowRow, TVSeasonRow, TVShowGenreRow
from schemas.games import GameRow


async def collect(queue):
    return [row async for row in queue]


class TestEntityQueue:

    @pytest.mark.asyncio
    async def test_iteration_ends_after_close_and_drain(self):
        queue = EntityQueue("tv_shows")
        queue.put(TVShowRow(id=1, name="a"))
        queue.put(TVShowRow(id=2, name="b"))
        queue.close()

        rows = await collect(queue)
        assert [r.id for r in rows] == [1, 2]

    @pytest.mark.asyncio
    async def test_consumer_waits_for_late_producer(self):
        queue = EntityQueue("tv_shows")
        consumer = asyncio.create_task(collect(queue))

        await asyncio.sleep(0.01)
        assert not consumer.done()

        queue.put(TVShowRow(id=1, name="a"))
        await asyncio.sleep(0.01)
        queue.put(TVShowRow(id=2, name="b"))
        queue.close()

        rows = await asyncio.wait_for(consumer, timeout=1)
        assert [r.id for r in rows] == [1, 2]

    @pytest.mark.asyncio
    async def test_closed_empty_queue_yields_nothing(self):
        queue = EntityQueue("tv_shows")
        queue.close()
        assert await asyncio.wait_for(collect(queue), timeout=1) == []

    def test_put_after_close_raises(self):
        queue = EntityQueue("tv_shows")
        queue.close()
        with pytest.raises(RoutingError):
            queue.put(TVShowRow(id=1, name="a"))


class TestEntityRouter:

    @pytest.mark.asyncio
    async def test_rows_are_routed_by_type(self):
        router = EntityRouter(TV_SHOW_ENTITIES)
        routed = router.dispatch([
            TVShowRow(id=1, name="a"),
            TVSeasonRow(id=10, show_id=1),
            TVShowGenreRow(show_id=1, genre_id=18),
            TVShowGenreRow(show_id=1, genre_id=35),
        ])
        router.close()

        by_name = {d.name: d for d in TV_SHOW_ENTITIES}
        assert routed == 4
        assert len(await collect(router.queue_for(by_name["tv_shows"]))) == 1
        assert len(await collect(router.queue_for(by_name["tv_seasons"]))) == 1
        assert len(await collect(router.queue_for(by_name["tv_show_genres"]))) == 2
        assert await collect(router.queue_for(by_name["tv_networks"])) == []

    def test_unknown_row_type_raises(self):
        router = EntityRouter(TV_SHOW_ENTITIES)
        with pytest.raises(RoutingError):
            router.route(GameRow(id=1, name="x"))
