"""
Registry of catalog sources by SourceType.
"""

import httpx
from ingestion.base import DataSource
from ingestion.extractors.igdb_extractor import GamesExtractor
from ingestion.extractors.tmdb_extractor import TVShowsExtractor, MoviesExtractor
from models.base import SourceType


SOURCES = {
    SourceType.GAMES: GamesExtractor,
    SourceType.TV_SHOWS: TVShowsExtractor,
    SourceType.MOVIES: MoviesExtractor,
}


def build_source(source_type: SourceType, client: httpx.AsyncClient) -> DataSource:
    """Instantiate the source for ``source_type`` configured from settings."""
    try:
        source_class = SOURCES[SourceType(source_type)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown source type: {source_type}")
    return source_class(client)
