"""
SQLAlchemy ORM models for database tables.

This package defines the database schema using SQLAlchemy ORM models:

Models:
    base: Base declarative class and shared enums (SourceType, RunStatus)
    games: IGDB games with their child, reference and join tables
    tv_shows: TMDB TV shows, seasons, networks, creators and join tables
    movies: TMDB movies, collections, production companies and join tables
    ingestion_run: Per-run audit trail and statistics

Database Schema:
    One table per entity kind. Root, child and reference tables are keyed by
    the integer ID the source API assigns (never autoincremented); join
    tables are keyed by their composite foreign-key pair. Child and join
    tables carry FK constraints to their root, which the pipeline honours by
    writing in phases (roots and references, then children, then nested
    children, then joins).

Usage:
    from models.games import Game, GameAgeRating, GameGenre
    from models.base import Base, SourceType, RunStatus

Importing this package registers every table on ``Base.metadata``.
"""

from models.base import Base, SourceType, RunStatus
from models import games, tv_shows, movies
from models.ingestion_run import IngestionRun

__all__ = [
    "Base",
    "SourceType",
    "RunStatus",
    "IngestionRun",
    "games",
    "tv_shows",
    "movies",
]
