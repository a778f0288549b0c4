"""
Ingestion pipeline components for the games, TV show and movie catalogs.

Modules:
    base: Abstract base class for catalog sources
    entities: Entity catalog (table model, row schema, kind, conflict policy)
    rate_limiter: Token bucket shared by the fetch tasks of one run
    router: Per-entity queues between fetch tasks and writers
    context: Run-scoped state and statistics
    runner: Phased orchestrator that coordinates fetch, normalize and write
    sources: Registry of sources by SourceType
    scheduler: APScheduler integration for periodic runs

Subpackages:
    extractors: HTTP sources (IGDB games, TMDB TV shows and movies)
    transformers: Record normalizers that decompose payloads into rows
    loaders: Batch writer and PostgreSQL upsert engine

Architecture:
    One run fans out one fetch task per work unit (an IGDB page or a TMDB
    ID). Each fetched record is decomposed into rows that are routed to the
    queue of their entity. Writers drain the queues in batches, in four
    phases separated by barriers:

    1. Roots and references, concurrently with the fetch tasks
    2. Children
    3. Nested children
    4. Joins

    A child or join row is therefore never written before the root it
    references.

Usage:
    from ingestion.runner import IngestionRunner, run_ingestion
    from models.base import SourceType

    result = await run_ingestion(SourceType.GAMES)
    print(f"Wrote {result['rows_written']} rows")

Error Handling:
    A failed page, ID, record or batch is logged and counted in the run
    statistics; none of them aborts the run. See core.exceptions.
"""

__all__ = [
    "DataSource",
    "IngestionRunner",
    "run_ingestion",
    "IngestionScheduler",
    "GamesExtractor",
    "TVShowsExtractor",
    "MoviesExtractor",
    "PostgresLoader",
    "BatchWriter",
]
