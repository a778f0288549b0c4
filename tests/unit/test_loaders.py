"""
Unit tests for the upsert engine and the batch writer
"""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from core.exceptions import UpsertError
from ingestion.entities import GAME_ENTITIES, TV_SHOW_ENTITIES, ConflictPolicy
from ingestion.loaders.batch_writer import BatchWriter
from ingestion.loaders.postgres_loader import PostgresLoader, collapse_duplicates
from ingestion.router import EntityQueue
from schemas.games import GameRow, GameGenreRow
from schemas.tv_shows import TVShowRow


GAMES = {d.name: d for d in GAME_ENTITIES}
TV = {d.name: d for d in TV_SHOW_ENTITIES}


def compile_sql(descriptor):
    stmt = PostgresLoader.build_statement(descriptor)
    return str(stmt.compile(dialect=postgresql.dialect()))


def mock_session_maker(execute=None):
    session = MagicMock()
    session.execute = execute or AsyncMock()
    session.begin.return_value.__aexit__.return_value = False
    maker = MagicMock()
    maker.return_value.__aenter__.return_value = session
    maker.return_value.__aexit__.return_value = False
    return maker, session


def ts(epoch):
    return datetime.fromtimestamp(epoch, tz=timezone.utc)


class TestBuildStatement:

    def test_update_all_sets_every_non_key_column(self):
        sql = compile_sql(TV["tv_shows"])
        assert "ON CONFLICT (id) DO UPDATE SET" in sql
        assert "name = excluded.name" in sql
        assert "vote_average = excluded.vote_average" in sql
        assert "id = excluded.id" not in sql

    def test_versioned_root_only_moves_forward(self):
        sql = compile_sql(GAMES["games"])
        assert "WHERE games.updated_at IS NULL" in sql
        assert "games.updated_at <= excluded.updated_at" in sql

    def test_unversioned_update_has_no_where(self):
        sql = compile_sql(GAMES["game_localizations"])
        assert "DO UPDATE" in sql
        assert "WHERE" not in sql

    def test_join_does_nothing_on_composite_key(self):
        sql = compile_sql(GAMES["game_genres"])
        assert "ON CONFLICT (game_id, genre_id) DO NOTHING" in sql

    def test_policies_match_catalog(self):
        update_all = {d.name for d in GAME_ENTITIES if d.policy == ConflictPolicy.UPDATE_ALL}
        assert update_all == {
            "games",
            "game_localizations",
            "game_external_services",
            "game_language_supports",
            "game_release_dates",
        }


class TestCollapseDuplicates:

    def test_newest_version_wins(self):
        rows = [
            GameRow(id=1, name="new", updated_at=ts(200)),
            GameRow(id=1, name="old", updated_at=ts(100)),
            GameRow(id=2, name="other", updated_at=ts(100)),
        ]
        survivors = collapse_duplicates(GAMES["games"], rows)
        assert {r.id: r.name for r in survivors} == {1: "new", 2: "other"}

    def test_last_seen_wins_without_version(self):
        rows = [TVShowRow(id=1, name="first"), TVShowRow(id=1, name="second")]
        [survivor] = collapse_duplicates(TV["tv_shows"], rows)
        assert survivor.name == "second"


class TestPostgresLoader:

    @pytest.mark.asyncio
    async def test_upsert_executes_one_statement_per_batch(self):
        maker, session = mock_session_maker()
        loader = PostgresLoader(maker)

        rows = [GameGenreRow(game_id=1, genre_id=g) for g in (5, 12, 31)]
        written = await loader.upsert(GAMES["game_genres"], rows)

        assert written == 3
        session.execute.assert_awaited_once()
        _, params = session.execute.await_args.args
        assert params == [{"game_id": 1, "genre_id": 5}, {"game_id": 1, "genre_id": 12},
                          {"game_id": 1, "genre_id": 31}]
        session.begin.assert_called_once()

    @pytest.mark.asyncio
    async def test_update_all_batches_are_deduplicated(self):
        maker, session = mock_session_maker()
        loader = PostgresLoader(maker)

        rows = [TVShowRow(id=1, name="a"), TVShowRow(id=1, name="b")]
        written = await loader.upsert(TV["tv_shows"], rows)

        assert written == 1
        _, params = session.execute.await_args.args
        assert params[0]["name"] == "b"

    @pytest.mark.asyncio
    async def test_empty_batch_is_a_no_op(self):
        maker, _ = mock_session_maker()
        loader = PostgresLoader(maker)
        assert await loader.upsert(GAMES["games"], []) == 0
        maker.assert_not_called()

    @pytest.mark.asyncio
    async def test_database_error_becomes_upsert_error(self):
        execute = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("gone")))
        maker, _ = mock_session_maker(execute)
        loader = PostgresLoader(maker)

        with pytest.raises(UpsertError) as exc_info:
            await loader.upsert(GAMES["game_genres"], [GameGenreRow(game_id=1, genre_id=5)])

        assert exc_info.value.context["table_name"] == "game_genres"
        assert exc_info.value.context["batch_size"] == 1

    @pytest.mark.asyncio
    async def test_refused_connection_becomes_upsert_error(self):
        execute = AsyncMock(side_effect=ConnectionRefusedError(111, "Connect call failed"))
        maker, _ = mock_session_maker(execute)
        loader = PostgresLoader(maker)

        with pytest.raises(UpsertError) as exc_info:
            await loader.upsert(GAMES["game_genres"], [GameGenreRow(game_id=1, genre_id=5)])

        assert isinstance(exc_info.value.original_exception, ConnectionRefusedError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        OSError("Connection reset by peer"),
        asyncio.TimeoutError(),
    ])
    async def test_session_failure_becomes_upsert_error(self, error):
        maker = MagicMock(side_effect=error)
        loader = PostgresLoader(maker)

        with pytest.raises(UpsertError) as exc_info:
            await loader.upsert(TV["tv_shows"], [TVShowRow(id=1, name="a")])

        assert exc_info.value.context["table_name"] == "tv_shows"


def filled_queue(n):
    queue = EntityQueue("game_genres")
    for i in range(n):
        queue.put(GameGenreRow(game_id=i, genre_id=1))
    queue.close()
    return queue


class TestBatchWriter:

    @pytest.mark.asyncio
    async def test_flushes_full_batches_then_remainder(self, make_loader):
        loader = make_loader()
        writer = BatchWriter(loader, batch_size=10)

        stats = await writer.drain(GAMES["game_genres"], filled_queue(3 * 10 + 7))

        assert [len(rows) for _, rows in loader.calls] == [10, 10, 10, 7]
        assert stats.rows_written == 37
        assert stats.batches_written == 4

    @pytest.mark.asyncio
    async def test_exact_multiple_has_no_trailing_flush(self, make_loader):
        loader = make_loader()
        await BatchWriter(loader, batch_size=5).drain(GAMES["game_genres"], filled_queue(10))
        assert [len(rows) for _, rows in loader.calls] == [5, 5]

    @pytest.mark.asyncio
    async def test_empty_queue_writes_nothing(self, make_loader):
        loader = make_loader()
        stats = await BatchWriter(loader, batch_size=5).drain(GAMES["game_genres"], filled_queue(0))
        assert loader.calls == []
        assert stats.rows_written == 0

    @pytest.mark.asyncio
    async def test_failed_batch_is_dropped_and_draining_continues(self, make_loader):
        loader = make_loader(fail_batches={("game_genres", 1)})
        writer = BatchWriter(loader, batch_size=10)

        stats = await writer.drain(GAMES["game_genres"], filled_queue(37))

        assert [len(rows) for _, rows in loader.calls] == [10, 10, 7]
        assert stats.rows_written == 27
        assert stats.rows_failed == 10
        assert stats.batches_failed == 1

    def test_batch_size_must_be_positive(self, make_loader):
        with pytest.raises(ValueError):
            BatchWriter(make_loader(), batch_size=0)
