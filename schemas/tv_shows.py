"""
Row schemas produced by the TMDB TV show normalizer.
"""

from datetime import date
from typing import List, Optional

from schemas.base import RowSchema


class TVShowRow(RowSchema):
    id: int
    name: str
    episode_run_times: Optional[List[int]] = None
    first_air_date: Optional[date] = None
    last_air_date: Optional[date] = None
    in_production: bool = False
    languages: Optional[List[str]] = None
    original_language: Optional[str] = None
    original_name: Optional[str] = None
    popularity: Optional[float] = None
    poster_path: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None
    vote_average: Optional[float] = None


class TVSeasonRow(RowSchema):
    id: int
    show_id: int
    name: Optional[str] = None
    season_number: Optional[int] = None
    poster_path: Optional[str] = None
    air_date: Optional[date] = None
    episode_count: Optional[int] = None
    vote_average: Optional[float] = None


class TVNetworkRow(RowSchema):
    id: int
    name: str
    logo_path: Optional[str] = None
    origin_country: Optional[str] = None


class CinemaPersonRow(RowSchema):
    id: int
    name: str
    profile_path: Optional[str] = None


class TVShowGenreRow(RowSchema):
    show_id: int
    genre_id: int


class TVShowCreatorRow(RowSchema):
    show_id: int
    person_id: int


class TVShowNetworkRow(RowSchema):
    show_id: int
    network_id: int


class TVShowOriginCountryRow(RowSchema):
    show_id: int
    country_iso: str


class TVShowProductionCountryRow(RowSchema):
    show_id: int
    country_iso: str
