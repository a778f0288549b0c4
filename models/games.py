from sqlalchemy import (
    Column, String, Integer, SmallInteger, Float, DateTime, Text, Boolean, ForeignKey
)
from sqlalchemy.dialects.postgresql import ARRAY
from models.base import Base


class Game(Base):
    """
    One row per IGDB game (root entity).

    Rewritten in full on every ingestion of a newer payload; ``updated_at`` and
    ``checksum`` come from the source, not from this service.
    """
    __tablename__ = "games"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(500), nullable=False)
    slug = Column(String(500), nullable=True, index=True)
    rating = Column(Float, nullable=True)  # aggregated_rating
    reviews_count = Column(Integer, nullable=True)  # aggregated_rating_count
    category = Column(SmallInteger, nullable=True)
    first_release_date = Column(DateTime(timezone=True), nullable=True, index=True)
    follows = Column(Integer, nullable=True)
    hypes = Column(Integer, nullable=True)
    status = Column(SmallInteger, nullable=True)
    summary = Column(Text, nullable=True)
    version_title = Column(String(500), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, index=True)
    checksum = Column(String(64), nullable=True)

    # Written concurrently with the reference tables, so no FK constraint
    main_series_id = Column(Integer, nullable=True, index=True)
    main_franchise_id = Column(Integer, nullable=True, index=True)


# ============================================================================
# CHILD TABLES
# ============================================================================

class GameAgeRating(Base):
    __tablename__ = "game_age_ratings"

    id = Column(Integer, primary_key=True, autoincrement=False)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    category = Column(SmallInteger, nullable=True)
    rating = Column(SmallInteger, nullable=True)
    rating_cover_url = Column(String(2048), nullable=True)
    synopsis = Column(Text, nullable=True)
    checksum = Column(String(64), nullable=True)


class GameAgeRatingDescription(Base):
    """Content description owned by an age rating, not by the game."""
    __tablename__ = "game_age_rating_descriptions"

    id = Column(Integer, primary_key=True, autoincrement=False)
    age_rating_id = Column(Integer, ForeignKey("game_age_ratings.id"), nullable=False, index=True)
    category = Column(SmallInteger, nullable=True)
    description = Column(Text, nullable=True)
    checksum = Column(String(64), nullable=True)


class GameAlternativeName(Base):
    __tablename__ = "game_alternative_names"

    id = Column(Integer, primary_key=True, autoincrement=False)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    name = Column(String(500), nullable=False)
    comment = Column(String(500), nullable=True)
    checksum = Column(String(64), nullable=True)


class GameCover(Base):
    __tablename__ = "game_covers"

    id = Column(Integer, primary_key=True, autoincrement=False)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    alpha_channel = Column(Boolean, nullable=False, default=False)
    animated = Column(Boolean, nullable=False, default=False)
    image_id = Column(String(100), nullable=True)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    checksum = Column(String(64), nullable=True)


class GameLocalization(Base):
    __tablename__ = "game_localizations"

    id = Column(Integer, primary_key=True, autoincrement=False)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    name = Column(String(500), nullable=True)
    region_id = Column(Integer, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    checksum = Column(String(64), nullable=True)


class GameExternalService(Base):
    __tablename__ = "game_external_services"

    id = Column(Integer, primary_key=True, autoincrement=False)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    name = Column(String(500), nullable=True)
    category = Column(SmallInteger, nullable=True)
    countries = Column(ARRAY(Integer), nullable=True)
    media = Column(SmallInteger, nullable=True)
    platform_id = Column(Integer, nullable=True)
    url = Column(String(2048), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    checksum = Column(String(64), nullable=True)


class GameLanguageSupport(Base):
    __tablename__ = "game_language_supports"

    id = Column(Integer, primary_key=True, autoincrement=False)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    language_id = Column(Integer, nullable=True)
    support_type_id = Column(Integer, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    checksum = Column(String(64), nullable=True)


class GameReleaseDate(Base):
    __tablename__ = "game_release_dates"

    id = Column(Integer, primary_key=True, autoincrement=False)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    category = Column(SmallInteger, nullable=True)
    date = Column(DateTime(timezone=True), nullable=True)
    human = Column(String(100), nullable=True)
    month = Column(SmallInteger, nullable=True)
    year = Column(SmallInteger, nullable=True)
    status_id = Column(Integer, nullable=True)
    platform_id = Column(Integer, nullable=True)
    region = Column(SmallInteger, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    checksum = Column(String(64), nullable=True)


class GameScreenshot(Base):
    __tablename__ = "game_screenshots"

    id = Column(Integer, primary_key=True, autoincrement=False)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    alpha_channel = Column(Boolean, nullable=False, default=False)
    animated = Column(Boolean, nullable=False, default=False)
    image_id = Column(String(100), nullable=True)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    checksum = Column(String(64), nullable=True)


class GameVideo(Base):
    __tablename__ = "game_videos"

    id = Column(Integer, primary_key=True, autoincrement=False)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    name = Column(String(500), nullable=True)
    video_id = Column(String(100), nullable=True)
    checksum = Column(String(64), nullable=True)


class GameWebsite(Base):
    __tablename__ = "game_websites"

    id = Column(Integer, primary_key=True, autoincrement=False)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    category = Column(SmallInteger, nullable=True)
    url = Column(String(2048), nullable=True)
    trusted = Column(Boolean, nullable=False, default=False)
    checksum = Column(String(64), nullable=True)


# ============================================================================
# REFERENCE TABLES
# ============================================================================

class Collection(Base):
    __tablename__ = "collections"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(500), nullable=False)
    slug = Column(String(500), nullable=True)
    type_id = Column(Integer, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    checksum = Column(String(64), nullable=True)


class Franchise(Base):
    __tablename__ = "franchises"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(500), nullable=False)
    slug = Column(String(500), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    checksum = Column(String(64), nullable=True)


class Engine(Base):
    __tablename__ = "game_engines"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(500), nullable=False)
    slug = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    checksum = Column(String(64), nullable=True)


# ============================================================================
# JOIN TABLES
# ============================================================================

class GameCollection(Base):
    __tablename__ = "game_collection_links"

    game_id = Column(Integer, ForeignKey("games.id"), primary_key=True)
    collection_id = Column(Integer, ForeignKey("collections.id"), primary_key=True)


class GameFranchise(Base):
    __tablename__ = "game_franchise_links"

    game_id = Column(Integer, ForeignKey("games.id"), primary_key=True)
    franchise_id = Column(Integer, ForeignKey("franchises.id"), primary_key=True)


class GameEngine(Base):
    __tablename__ = "game_engine_links"

    game_id = Column(Integer, ForeignKey("games.id"), primary_key=True)
    engine_id = Column(Integer, ForeignKey("game_engines.id"), primary_key=True)


# Mode, genre, perspective, platform and theme IDs point at IGDB lookup
# tables that are seeded outside this service.

class GameMode(Base):
    __tablename__ = "game_modes"

    game_id = Column(Integer, ForeignKey("games.id"), primary_key=True)
    mode_id = Column(Integer, primary_key=True)


class GameGenre(Base):
    __tablename__ = "game_genres"

    game_id = Column(Integer, ForeignKey("games.id"), primary_key=True)
    genre_id = Column(Integer, primary_key=True)


class GamePlayerPerspective(Base):
    __tablename__ = "game_player_perspectives"

    game_id = Column(Integer, ForeignKey("games.id"), primary_key=True)
    perspective_id = Column(Integer, primary_key=True)


class GamePlatform(Base):
    __tablename__ = "game_platforms"

    game_id = Column(Integer, ForeignKey("games.id"), primary_key=True)
    platform_id = Column(Integer, primary_key=True)


class GameTheme(Base):
    __tablename__ = "game_themes"

    game_id = Column(Integer, ForeignKey("games.id"), primary_key=True)
    theme_id = Column(Integer, primary_key=True)
