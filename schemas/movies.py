"""
Row schemas produced by the TMDB movie normalizer.
"""

from datetime import date
from typing import Optional

from schemas.base import RowSchema


class MovieRow(RowSchema):
    id: int
    title: str
    original_title: Optional[str] = None
    original_language: Optional[str] = None
    overview: Optional[str] = None
    tagline: Optional[str] = None
    release_date: Optional[date] = None
    runtime: Optional[int] = None
    budget: Optional[int] = None
    revenue: Optional[int] = None
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    status: Optional[str] = None
    imdb_id: Optional[str] = None
    collection_id: Optional[int] = None


class MovieCollectionRow(RowSchema):
    id: int
    name: str
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None


class ProductionCompanyRow(RowSchema):
    id: int
    name: str
    logo_path: Optional[str] = None
    origin_country: Optional[str] = None


class MovieGenreRow(RowSchema):
    movie_id: int
    genre_id: int


class MovieProductionCompanyRow(RowSchema):
    movie_id: int
    company_id: int


class MovieProductionCountryRow(RowSchema):
    movie_id: int
    country_iso: str


class MovieSpokenLanguageRow(RowSchema):
    movie_id: int
    language_iso: str
