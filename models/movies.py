from sqlalchemy import Column, String, Integer, BigInteger, Float, Date, Text, ForeignKey
from models.base import Base


class Movie(Base):
    """One row per TMDB movie (root entity)."""
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(500), nullable=False)
    original_title = Column(String(500), nullable=True)
    original_language = Column(String(10), nullable=True)
    overview = Column(Text, nullable=True)
    tagline = Column(String(1000), nullable=True)
    release_date = Column(Date, nullable=True, index=True)
    runtime = Column(Integer, nullable=True)
    budget = Column(BigInteger, nullable=True)
    revenue = Column(BigInteger, nullable=True)
    popularity = Column(Float, nullable=True)
    vote_average = Column(Float, nullable=True)
    vote_count = Column(Integer, nullable=True)
    poster_path = Column(String(500), nullable=True)
    backdrop_path = Column(String(500), nullable=True)
    status = Column(String(100), nullable=True)
    imdb_id = Column(String(20), nullable=True)

    # belongs_to_collection; written concurrently with movie_collections
    collection_id = Column(Integer, nullable=True, index=True)


# ============================================================================
# REFERENCE TABLES
# ============================================================================

class MovieCollection(Base):
    __tablename__ = "movie_collections"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(500), nullable=False)
    poster_path = Column(String(500), nullable=True)
    backdrop_path = Column(String(500), nullable=True)


class ProductionCompany(Base):
    __tablename__ = "production_companies"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(500), nullable=False)
    logo_path = Column(String(500), nullable=True)
    origin_country = Column(String(10), nullable=True)


# ============================================================================
# JOIN TABLES
# ============================================================================

class MovieGenre(Base):
    __tablename__ = "movie_genres"

    movie_id = Column(Integer, ForeignKey("movies.id"), primary_key=True)
    genre_id = Column(Integer, primary_key=True)


class MovieProductionCompany(Base):
    __tablename__ = "movie_production_companies"

    movie_id = Column(Integer, ForeignKey("movies.id"), primary_key=True)
    company_id = Column(Integer, ForeignKey("production_companies.id"), primary_key=True)


class MovieProductionCountry(Base):
    __tablename__ = "movie_production_countries"

    movie_id = Column(Integer, ForeignKey("movies.id"), primary_key=True)
    country_iso = Column(String(2), primary_key=True)


class MovieSpokenLanguage(Base):
    __tablename__ = "movie_spoken_languages"

    movie_id = Column(Integer, ForeignKey("movies.id"), primary_key=True)
    language_iso = Column(String(10), primary_key=True)
