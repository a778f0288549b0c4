"""
Pydantic schemas for data validation and serialization.

Schemas:
    base: RowSchema, the frozen base of every normalized row
    games: Rows emitted by the IGDB games normalizer
    tv_shows: Rows emitted by the TMDB TV show normalizer
    movies: Rows emitted by the TMDB movie normalizer
    api: API endpoint response schemas

Row schemas mirror their table's columns one-to-one; the entity catalog
in ``ingestion.entities`` pairs each row schema with its table model and
conflict policy.

Usage:
    from schemas.games import GameRow, GameGenreRow
    from schemas.api import HealthCheckResponse
"""

from schemas.base import RowSchema
from schemas.api import HealthCheckResponse, IngestionRunSummary

__all__ = [
    "RowSchema",
    "HealthCheckResponse",
    "IngestionRunSummary",
]
