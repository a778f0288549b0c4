from sqlalchemy import Column, String, Integer, Float, Date, Boolean, ForeignKey
from sqlalchemy.dialects.postgresql import ARRAY
from models.base import Base


class TVShow(Base):
    """One row per TMDB TV show (root entity)."""
    __tablename__ = "tv_shows"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(500), nullable=False)
    episode_run_times = Column(ARRAY(Integer), nullable=True)
    first_air_date = Column(Date, nullable=True, index=True)
    last_air_date = Column(Date, nullable=True)
    in_production = Column(Boolean, nullable=False, default=False)
    languages = Column(ARRAY(String(10)), nullable=True)
    original_language = Column(String(10), nullable=True)
    original_name = Column(String(500), nullable=True)
    popularity = Column(Float, nullable=True)
    poster_path = Column(String(500), nullable=True)
    status = Column(String(100), nullable=True)
    type = Column(String(100), nullable=True)
    vote_average = Column(Float, nullable=True)


class TVSeason(Base):
    __tablename__ = "tv_seasons"

    id = Column(Integer, primary_key=True, autoincrement=False)
    show_id = Column(Integer, ForeignKey("tv_shows.id"), nullable=False, index=True)
    name = Column(String(500), nullable=True)
    season_number = Column(Integer, nullable=True)
    poster_path = Column(String(500), nullable=True)
    air_date = Column(Date, nullable=True)
    episode_count = Column(Integer, nullable=True)
    vote_average = Column(Float, nullable=True)


# ============================================================================
# REFERENCE TABLES
# ============================================================================

class TVNetwork(Base):
    __tablename__ = "tv_networks"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(500), nullable=False)
    logo_path = Column(String(500), nullable=True)
    origin_country = Column(String(10), nullable=True)


class CinemaPerson(Base):
    """People credited on shows (creators), shared across shows."""
    __tablename__ = "cinema_people"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(500), nullable=False)
    profile_path = Column(String(500), nullable=True)


# ============================================================================
# JOIN TABLES
# ============================================================================

class TVShowGenre(Base):
    __tablename__ = "tv_show_genres"

    show_id = Column(Integer, ForeignKey("tv_shows.id"), primary_key=True)
    genre_id = Column(Integer, primary_key=True)


class TVShowCreator(Base):
    __tablename__ = "tv_show_creators"

    show_id = Column(Integer, ForeignKey("tv_shows.id"), primary_key=True)
    person_id = Column(Integer, ForeignKey("cinema_people.id"), primary_key=True)


class TVShowNetwork(Base):
    __tablename__ = "tv_show_networks"

    show_id = Column(Integer, ForeignKey("tv_shows.id"), primary_key=True)
    network_id = Column(Integer, ForeignKey("tv_networks.id"), primary_key=True)


class TVShowOriginCountry(Base):
    __tablename__ = "tv_show_origin_countries"

    show_id = Column(Integer, ForeignKey("tv_shows.id"), primary_key=True)
    country_iso = Column(String(2), primary_key=True)


class TVShowProductionCountry(Base):
    __tablename__ = "tv_show_production_countries"

    show_id = Column(Integer, ForeignKey("tv_shows.id"), primary_key=True)
    country_iso = Column(String(2), primary_key=True)
